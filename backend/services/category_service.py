"""
Category command handlers.

Each public coroutine is one use case of the category admin screens (list,
create, edit-fetch, edit-submit, delete-fetch, delete-submit). They never
raise for expected failures: validation problems, missing rows, id mismatches,
stale edits and store faults all come back as tagged outcomes from
``services.outcomes``.

The pre-write uniqueness check is advisory. Two concurrent creates can both
pass it; the loser is then rejected by the unique constraint on ``name_key``
and reported with the same ``name_duplicate`` error.
"""

import logging
from typing import Optional

from config import get_settings
from schemas.category import CategoryResponse
from services.category_gateway import (
    CategoryGateway,
    ConstraintViolationError,
    GatewayError,
    StaleRecordError,
)
from services.category_rules import (
    DEFAULT_NAME_MAX_LENGTH,
    CategoryCandidate,
    duplicate_name_error,
    normalize_category_name,
    validate_category,
)
from services.error_sanitizer import public_store_message
from services.outcomes import (
    BadRequest,
    ConcurrencyConflict,
    NotFound,
    Outcome,
    PersistenceFailure,
    Success,
    ValidationFailed,
)

logger = logging.getLogger(__name__)

MSG_CREATED = "Category created successfully"
MSG_UPDATED = "Category updated successfully"
MSG_DELETED = "Category deleted successfully"

_PERSISTENCE_FALLBACK = "Unable to save changes. Try again, and if the problem persists contact your administrator."


def _persistence_failure(exc: GatewayError, action: str) -> PersistenceFailure:
    logger.error(f"Store failure while trying to {action} category: {exc}")
    return PersistenceFailure(message=public_store_message(exc, fallback=_PERSISTENCE_FALLBACK))


class CategoryService:
    def __init__(self, gateway: CategoryGateway, max_name_length: Optional[int] = None):
        self.gateway = gateway
        if max_name_length is None:
            max_name_length = get_settings().CATEGORY_NAME_MAX_LENGTH
        self.max_name_length = max_name_length or DEFAULT_NAME_MAX_LENGTH

    async def _check(
        self, raw_name: Optional[str], display_order: int, exclude_id: Optional[int] = None
    ) -> tuple[CategoryCandidate, tuple]:
        """Normalize, validate and (when otherwise valid) check uniqueness."""
        candidate = CategoryCandidate(
            name=normalize_category_name(raw_name), display_order=display_order
        )
        errors = validate_category(candidate, max_name_length=self.max_name_length)
        if not errors and await self.gateway.exists_by_name_ci(
            candidate.name, exclude_id=exclude_id
        ):
            errors = (duplicate_name_error(),)
        return candidate, errors

    async def list_categories(self) -> Outcome:
        """All categories by display order, then name. Nothing is written."""
        try:
            categories = await self.gateway.list_all()
        except GatewayError as e:
            return _persistence_failure(e, "list")
        return Success([CategoryResponse.model_validate(c) for c in categories])

    async def create_category(self, name: Optional[str], display_order: int) -> Outcome:
        try:
            candidate, errors = await self._check(name, display_order)
            if errors:
                logger.info(f"Rejected category create: {[e.code.value for e in errors]}")
                return ValidationFailed(candidate, errors)

            category = await self.gateway.insert(candidate.name, candidate.display_order)
        except ConstraintViolationError as e:
            if e.is_duplicate_name:
                return ValidationFailed(candidate, (duplicate_name_error(),))
            return _persistence_failure(e, "create")
        except GatewayError as e:
            return _persistence_failure(e, "create")

        logger.info(f"Created category {category.id} ({category.name!r})")
        return Success(CategoryResponse.model_validate(category), MSG_CREATED)

    async def get_category_for_edit(self, category_id: int) -> Outcome:
        return await self._fetch(category_id)

    async def get_category_for_delete(self, category_id: int) -> Outcome:
        return await self._fetch(category_id)

    async def _fetch(self, category_id: int) -> Outcome:
        try:
            category = await self.gateway.find_by_id(category_id)
        except GatewayError as e:
            return _persistence_failure(e, "load")
        if category is None:
            return NotFound(category_id)
        return Success(CategoryResponse.model_validate(category))

    async def edit_category(
        self,
        category_id: int,
        form_id: Optional[int],
        name: Optional[str],
        display_order: int,
        expected_version: Optional[int] = None,
    ) -> Outcome:
        """
        Update name and display order of an existing category.

        ``form_id`` is the id carried by the submitted form; it must match the
        id from the path. ``expected_version`` is the version the form was
        loaded with, when the client sends it.
        """
        if form_id is not None and form_id != category_id:
            logger.warning(
                f"Category edit id mismatch: path={category_id} payload={form_id}"
            )
            return BadRequest("Category id in the request body does not match the URL")

        try:
            candidate, errors = await self._check(name, display_order, exclude_id=category_id)
            if errors:
                logger.info(
                    f"Rejected category {category_id} edit: {[e.code.value for e in errors]}"
                )
                return ValidationFailed(candidate, errors)

            category = await self.gateway.find_by_id(category_id)
            if category is None:
                return NotFound(category_id)

            if expected_version is not None and expected_version != category.version:
                logger.info(
                    f"Category {category_id} edit conflict: "
                    f"client version {expected_version}, stored {category.version}"
                )
                return ConcurrencyConflict(category_id)

            category = await self.gateway.update(
                category, candidate.name, candidate.display_order
            )
        except StaleRecordError:
            logger.info(f"Category {category_id} changed during edit")
            return ConcurrencyConflict(category_id)
        except ConstraintViolationError as e:
            if e.is_duplicate_name:
                return ValidationFailed(candidate, (duplicate_name_error(),))
            return _persistence_failure(e, "update")
        except GatewayError as e:
            return _persistence_failure(e, "update")

        logger.info(f"Updated category {category.id} ({category.name!r})")
        return Success(CategoryResponse.model_validate(category), MSG_UPDATED)

    async def delete_category(self, category_id: int) -> Outcome:
        try:
            category = await self.gateway.find_by_id(category_id)
            if category is None:
                return NotFound(category_id)
            await self.gateway.remove(category)
        except StaleRecordError:
            logger.info(f"Category {category_id} changed during delete")
            return ConcurrencyConflict(category_id)
        except GatewayError as e:
            return _persistence_failure(e, "delete")

        logger.info(f"Deleted category {category_id}")
        return Success(None, MSG_DELETED)
