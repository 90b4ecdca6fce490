"""Tagged results returned by the category command handlers."""

from dataclasses import dataclass
from typing import Any, Optional, Union

from services.category_rules import CategoryCandidate, ErrorCode, FieldError


@dataclass(frozen=True)
class Success:
    payload: Any = None
    message: Optional[str] = None


@dataclass(frozen=True)
class ValidationFailed:
    candidate: CategoryCandidate
    errors: tuple[FieldError, ...]

    @property
    def is_duplicate_name(self) -> bool:
        return any(e.code == ErrorCode.NAME_DUPLICATE for e in self.errors)


@dataclass(frozen=True)
class NotFound:
    category_id: int
    message: str = "Category not found"


@dataclass(frozen=True)
class BadRequest:
    message: str


@dataclass(frozen=True)
class ConcurrencyConflict:
    category_id: int
    message: str = (
        "The category was modified by another user after you loaded it. "
        "Reload it and try again."
    )


@dataclass(frozen=True)
class PersistenceFailure:
    message: str


Outcome = Union[
    Success,
    ValidationFailed,
    NotFound,
    BadRequest,
    ConcurrencyConflict,
    PersistenceFailure,
]
