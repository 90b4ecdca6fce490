"""Normalization and business rules for category names and display orders.

Everything here is pure: no session, no settings lookups at call time beyond
the explicit ``max_name_length`` argument. Handlers call
``normalize_category_name`` first, build a ``CategoryCandidate`` and then ask
``validate_category`` for the field errors.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from schemas.validators import collapse_whitespace, is_utf8_encodable, strip_invisible_edges

DEFAULT_NAME_MAX_LENGTH = 100
# Largest value the INTEGER column holds on every supported store
MAX_DISPLAY_ORDER = 2_147_483_647


class ErrorCode(str, Enum):
    NAME_REQUIRED = "name_required"
    NAME_TOO_LONG = "name_too_long"
    NAME_INVALID = "name_invalid"
    NAME_EQUALS_ORDER = "name_equals_order"
    NAME_DUPLICATE = "name_duplicate"
    DISPLAY_ORDER_RANGE = "display_order_range"


@dataclass(frozen=True)
class FieldError:
    field: str
    code: ErrorCode
    message: str


@dataclass(frozen=True)
class CategoryCandidate:
    """User input after normalization, kept for redisplay on failure."""

    name: str
    display_order: int


def normalize_category_name(value: Optional[str]) -> str:
    """Trim the edges and collapse internal whitespace; ``None`` becomes ``""``."""
    if value is None:
        return ""
    return collapse_whitespace(strip_invisible_edges(value))


def category_name_key(value: Optional[str]) -> str:
    """Key used for case-insensitive name comparison and the unique constraint."""
    return normalize_category_name(value).casefold()


def duplicate_name_error() -> FieldError:
    return FieldError(
        field="name",
        code=ErrorCode.NAME_DUPLICATE,
        message="Category with this name already exists",
    )


def validate_category(
    candidate: CategoryCandidate,
    *,
    max_name_length: int = DEFAULT_NAME_MAX_LENGTH,
) -> tuple[FieldError, ...]:
    """
    Check a normalized candidate against the category rules.

    Returns an immutable tuple of field-tagged errors, empty when valid.
    Uniqueness is not checked here; it needs the store.
    """
    errors: list[FieldError] = []
    name = candidate.name

    if not name or not name.strip():
        errors.append(
            FieldError("name", ErrorCode.NAME_REQUIRED, "The Name field is required.")
        )
    elif not is_utf8_encodable(name):
        errors.append(
            FieldError(
                "name", ErrorCode.NAME_INVALID, "Name contains invalid Unicode characters."
            )
        )
    elif len(name) > max_name_length:
        errors.append(
            FieldError(
                "name",
                ErrorCode.NAME_TOO_LONG,
                f"Name cannot be longer than {max_name_length} characters.",
            )
        )

    if not 0 < candidate.display_order <= MAX_DISPLAY_ORDER:
        errors.append(
            FieldError(
                "display_order",
                ErrorCode.DISPLAY_ORDER_RANGE,
                f"Display Order must be between 1 and {MAX_DISPLAY_ORDER}.",
            )
        )

    if name and name.casefold() == str(candidate.display_order).casefold():
        errors.append(
            FieldError(
                "name",
                ErrorCode.NAME_EQUALS_ORDER,
                "The DisplayOrder cannot exactly match the Name.",
            )
        )

    return tuple(errors)
