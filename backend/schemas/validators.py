"""Shared text validators.

Keep these small and dependency-free so schema and service modules can reuse
them without introducing import cycles.
"""

import re
import unicodedata

_WHITESPACE_RUN = re.compile(r"\s+")


def strip_invisible_edges(value: str) -> str:
    """
    Strip leading/trailing whitespace and Unicode format characters (Cf).

    This prevents visually-identical names like "\\u200bAction" or "\\ufeffAction"
    from bypassing uniqueness checks and confusing users.
    """
    if not isinstance(value, str):
        return value
    start = 0
    end = len(value)
    while start < end and (
        value[start].isspace() or unicodedata.category(value[start]) == "Cf"
    ):
        start += 1
    while end > start and (
        value[end - 1].isspace() or unicodedata.category(value[end - 1]) == "Cf"
    ):
        end -= 1
    return value[start:end]


def collapse_whitespace(value: str) -> str:
    """Replace every internal run of whitespace with a single space."""
    if not isinstance(value, str):
        return value
    return _WHITESPACE_RUN.sub(" ", value)


def is_utf8_encodable(value: str) -> bool:
    """
    False for strings that cannot be encoded to UTF-8 (e.g. unpaired surrogates).

    Unpaired surrogates can enter the system via JSON escape sequences like
    "\\uD800" and later crash JSON serialization.
    """
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True
