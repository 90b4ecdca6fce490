from .category import (
    CategoryCandidateResponse,
    CategoryCommandResponse,
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    CategoryValidationErrorResponse,
    FieldErrorResponse,
)
from .common import ErrorResponse, HealthResponse

__all__ = [
    # Category
    "CategoryCandidateResponse",
    "CategoryCommandResponse",
    "CategoryCreate",
    "CategoryResponse",
    "CategoryUpdate",
    "CategoryValidationErrorResponse",
    "FieldErrorResponse",
    # Common
    "ErrorResponse",
    "HealthResponse",
]
