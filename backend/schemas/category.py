from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CategoryCreate(BaseModel):
    # Raw operator input: normalization and rule checks happen in the service
    # so that failures can be redisplayed with field-tagged errors.
    name: Optional[str] = None
    display_order: int


class CategoryUpdate(CategoryCreate):
    # Must match the path id when sent
    id: Optional[int] = None
    # Version the client loaded; a mismatch is reported as a conflict
    version: Optional[int] = Field(None, ge=1)


class CategoryResponse(BaseModel):
    id: int
    name: str
    display_order: int
    version: int = 1
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CategoryCommandResponse(BaseModel):
    """Success result of a create / edit / delete, with the flash message."""

    message: str
    category: Optional[CategoryResponse] = None


class FieldErrorResponse(BaseModel):
    field: str
    code: str
    message: str


class CategoryCandidateResponse(BaseModel):
    name: str
    display_order: int


class CategoryValidationErrorResponse(BaseModel):
    """Rejected input echoed back together with its errors."""

    detail: str = "Validation failed"
    code: str = "VALIDATION_ERROR"
    errors: List[FieldErrorResponse]
    candidate: CategoryCandidateResponse
