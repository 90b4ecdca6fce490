import logging
from typing import List

from api.dependencies import get_category_service
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from schemas.category import (
    CategoryCandidateResponse,
    CategoryCommandResponse,
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    CategoryValidationErrorResponse,
    FieldErrorResponse,
)
from schemas.common import ErrorResponse
from services.category_service import CategoryService
from services.error_sanitizer import sanitize_for_json
from services.outcomes import (
    BadRequest,
    ConcurrencyConflict,
    NotFound,
    Outcome,
    PersistenceFailure,
    Success,
    ValidationFailed,
)

router = APIRouter(prefix="/categories", tags=["categories"])
logger = logging.getLogger(__name__)

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": CategoryValidationErrorResponse},
    status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse},
}


def _error(status_code: int, detail: str, code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(detail=detail, code=code).model_dump(),
    )


def _failure_response(outcome: Outcome) -> JSONResponse:
    """Translate a non-success outcome into its HTTP error response."""
    if isinstance(outcome, ValidationFailed):
        body = CategoryValidationErrorResponse(
            errors=[
                FieldErrorResponse(field=e.field, code=e.code.value, message=e.message)
                for e in outcome.errors
            ],
            candidate=CategoryCandidateResponse(
                name=outcome.candidate.name,
                display_order=outcome.candidate.display_order,
            ),
        )
        # The candidate echoes user input back
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=sanitize_for_json(body.model_dump()),
        )
    if isinstance(outcome, NotFound):
        return _error(status.HTTP_404_NOT_FOUND, outcome.message, "NOT_FOUND")
    if isinstance(outcome, BadRequest):
        return _error(status.HTTP_400_BAD_REQUEST, outcome.message, "BAD_REQUEST")
    if isinstance(outcome, ConcurrencyConflict):
        return _error(status.HTTP_409_CONFLICT, outcome.message, "CONCURRENCY_CONFLICT")
    if isinstance(outcome, PersistenceFailure):
        return _error(
            status.HTTP_503_SERVICE_UNAVAILABLE, outcome.message, "PERSISTENCE_FAILURE"
        )
    raise TypeError(f"Unexpected outcome: {outcome!r}")


@router.get("", response_model=List[CategoryResponse], responses=_ERROR_RESPONSES)
async def list_categories(service: CategoryService = Depends(get_category_service)):
    """Categories ordered by display order, then name"""
    outcome = await service.list_categories()
    if not isinstance(outcome, Success):
        return _failure_response(outcome)
    return outcome.payload


@router.post(
    "",
    response_model=CategoryCommandResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
async def create_category(
    category_data: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
):
    """Create a category"""
    outcome = await service.create_category(
        category_data.name, category_data.display_order
    )
    if not isinstance(outcome, Success):
        return _failure_response(outcome)
    return CategoryCommandResponse(message=outcome.message, category=outcome.payload)


@router.get(
    "/{category_id}", response_model=CategoryResponse, responses=_ERROR_RESPONSES
)
async def get_category(
    category_id: int,
    service: CategoryService = Depends(get_category_service),
):
    """Load a category for the edit form"""
    outcome = await service.get_category_for_edit(category_id)
    if not isinstance(outcome, Success):
        return _failure_response(outcome)
    return outcome.payload


@router.put(
    "/{category_id}", response_model=CategoryCommandResponse, responses=_ERROR_RESPONSES
)
async def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    service: CategoryService = Depends(get_category_service),
):
    """Submit the edit form"""
    outcome = await service.edit_category(
        category_id,
        category_data.id,
        category_data.name,
        category_data.display_order,
        expected_version=category_data.version,
    )
    if not isinstance(outcome, Success):
        return _failure_response(outcome)
    return CategoryCommandResponse(message=outcome.message, category=outcome.payload)


@router.get(
    "/{category_id}/delete",
    response_model=CategoryResponse,
    responses=_ERROR_RESPONSES,
)
async def get_category_for_delete(
    category_id: int,
    service: CategoryService = Depends(get_category_service),
):
    """Load a category for the delete confirmation"""
    outcome = await service.get_category_for_delete(category_id)
    if not isinstance(outcome, Success):
        return _failure_response(outcome)
    return outcome.payload


@router.delete(
    "/{category_id}", response_model=CategoryCommandResponse, responses=_ERROR_RESPONSES
)
async def delete_category(
    category_id: int,
    service: CategoryService = Depends(get_category_service),
):
    """Delete a category"""
    outcome = await service.delete_category(category_id)
    if not isinstance(outcome, Success):
        return _failure_response(outcome)
    return CategoryCommandResponse(message=outcome.message)
