"""Keep store internals out of what the category endpoints send back.

Gateway errors carry the driver's text verbatim: SQLite's
``UNIQUE constraint failed: categories.name_key``, asyncpg's quoted
constraint names, ``StaleDataError`` row-count messages and wrapped
``[SQL: ...]`` statements. ``public_store_message`` turns such an error into
text a user may see. ``sanitize_for_json`` bounds the user input echoed back
in 422 bodies.
"""

import re
from typing import Any, Optional

from models.category import Category

_TEXT_LIMIT = 400
_ITEM_LIMIT = 50
_DEPTH_LIMIT = 8


def _schema_patterns() -> list[re.Pattern[str]]:
    table = Category.__table__
    names = [re.escape(table.name)]
    names.extend(re.escape(str(c.name)) for c in table.constraints if c.name)
    return [
        # categories.name_key, table 'categories', "uq_categories_name_key"
        re.compile(rf"\b(?:{'|'.join(names)})\b", re.IGNORECASE),
    ]


_INTERNAL_TEXT_PATTERNS: tuple[re.Pattern[str], ...] = (
    *_schema_patterns(),
    # Driver and ORM fingerprints
    re.compile(r"sqlalchemy|sqlalche\.me|aiosqlite|sqlite|asyncpg|psycopg", re.IGNORECASE),
    re.compile(r"\(\w+(?:\.\w+)*(?:Error|Exception)\)"),
    re.compile(r"\[(?:sql|parameters):", re.IGNORECASE),
    re.compile(r"\b(?:insert into|update \w+ set|delete from|select .+ from)\b", re.IGNORECASE),
    re.compile(r"\b(?:constraint|int too large)\b|row\(s\)", re.IGNORECASE),
    # Tracebacks and local paths
    re.compile(r"traceback|\bfile\s+\".*?\.py\"", re.IGNORECASE),
    re.compile(r"/home/|/users/|/var/|[a-z]:\\", re.IGNORECASE),
)


def looks_internal(text: str) -> bool:
    return any(p.search(text) for p in _INTERNAL_TEXT_PATTERNS)


def _utf8_safe(value: str) -> str:
    return value.encode("utf-8", errors="replace").decode("utf-8", errors="replace")


def public_store_message(
    error: Optional[BaseException],
    *,
    fallback: str,
    max_chars: int = 240,
) -> str:
    """
    Message for a store failure that is safe to show to users.

    Anything that names the categories schema, a driver, SQL or a file path
    becomes ``fallback``; so does an empty message.
    """
    text = " ".join(_utf8_safe(str(error or "")).split())
    if not text or looks_internal(text):
        return fallback
    if len(text) > max_chars:
        return text[:max_chars] + "…"
    return text


def sanitize_for_json(value: Any, *, _depth: int = 0) -> Any:
    """
    Bound and UTF-8-clean a payload that echoes user input.

    Unpaired surrogates in an echoed name would crash the JSON encoder and
    turn a 422 into a 500, so every string is re-encoded with replacement.
    """
    if _depth > _DEPTH_LIMIT:
        return "<max depth reached>"

    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        safe = _utf8_safe(value)
        if len(safe) > _TEXT_LIMIT:
            safe = f"{safe[:_TEXT_LIMIT]}…(truncated)"
        return safe

    if isinstance(value, dict):
        pairs = list(value.items())
        cleaned = {
            str(sanitize_for_json(k, _depth=_depth + 1)): sanitize_for_json(v, _depth=_depth + 1)
            for k, v in pairs[:_ITEM_LIMIT]
        }
        if len(pairs) > _ITEM_LIMIT:
            cleaned["__truncated__"] = f"{len(pairs) - _ITEM_LIMIT} more keys truncated"
        return cleaned

    if isinstance(value, (list, tuple, set, frozenset)):
        items = list(value)
        cleaned_items = [sanitize_for_json(v, _depth=_depth + 1) for v in items[:_ITEM_LIMIT]]
        if len(items) > _ITEM_LIMIT:
            cleaned_items.append(f"... ({len(items) - _ITEM_LIMIT} more items truncated)")
        return cleaned_items

    # Validation error contexts may hold exception instances
    return sanitize_for_json(str(value), _depth=_depth + 1)
