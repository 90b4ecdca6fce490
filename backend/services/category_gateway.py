"""Persistence gateway for the categories table.

All SQLAlchemy faults are translated into the narrow ``GatewayError`` family
below, after rolling the session back, so command handlers never need to
catch driver or ORM exceptions.
"""

import logging
from typing import Optional

from models.category import Category
from services.category_rules import category_name_key
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

logger = logging.getLogger(__name__)

NAME_KEY_CONSTRAINT = "name_key"


class GatewayError(Exception):
    """Base class for store failures surfaced by the gateway."""


class ConstraintViolationError(GatewayError):
    """A store constraint rejected the write."""

    def __init__(self, message: str, constraint: Optional[str] = None):
        super().__init__(message)
        self.constraint = constraint

    @property
    def is_duplicate_name(self) -> bool:
        return self.constraint == NAME_KEY_CONSTRAINT


class StaleRecordError(GatewayError):
    """The row changed (or vanished) between read and write."""


class StoreError(GatewayError):
    """Any other store fault, including an unreachable database."""


def _violated_constraint(exc: IntegrityError) -> Optional[str]:
    # SQLite: "UNIQUE constraint failed: categories.name_key"
    # PostgreSQL: 'duplicate key value violates unique constraint "uq_categories_name_key"'
    text = str(exc.orig) if exc.orig is not None else str(exc)
    if NAME_KEY_CONSTRAINT in text:
        return NAME_KEY_CONSTRAINT
    return None


class CategoryGateway:
    """Query and write operations over the categories table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> list[Category]:
        query = select(Category).order_by(Category.display_order, Category.name)
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(str(e)) from e
        return list(result.scalars().all())

    async def find_by_id(self, category_id: int) -> Optional[Category]:
        try:
            result = await self.db.execute(
                select(Category).where(Category.id == category_id)
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(str(e)) from e
        return result.scalar_one_or_none()

    async def exists_by_name_ci(
        self, name: str, exclude_id: Optional[int] = None
    ) -> bool:
        """Case-insensitive name lookup, optionally ignoring one category."""
        stmt = select(Category.id).where(Category.name_key == category_name_key(name))
        if exclude_id is not None:
            stmt = stmt.where(Category.id != exclude_id)
        try:
            result = await self.db.execute(stmt.limit(1))
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(str(e)) from e
        return result.first() is not None

    async def insert(self, name: str, display_order: int) -> Category:
        category = Category(
            name=name,
            name_key=category_name_key(name),
            display_order=display_order,
        )
        self.db.add(category)
        await self._commit(category)
        return category

    async def update(self, category: Category, name: str, display_order: int) -> Category:
        """Write the mutable fields only; id and version are managed here."""
        category.name = name
        category.name_key = category_name_key(name)
        category.display_order = display_order
        await self._commit(category)
        return category

    async def remove(self, category: Category) -> None:
        await self.db.delete(category)
        await self._commit()

    async def _commit(self, category: Optional[Category] = None) -> None:
        try:
            await self.db.flush()
            if category is not None:
                await self.db.refresh(category)
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            constraint = _violated_constraint(e)
            logger.info(f"Category write rejected by constraint {constraint or '<unknown>'}")
            raise ConstraintViolationError(str(e.orig), constraint=constraint) from e
        except StaleDataError as e:
            await self.db.rollback()
            raise StaleRecordError(str(e)) from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.warning(f"Category write failed: {type(e).__name__}")
            raise StoreError(str(e)) from e
        except OverflowError as e:
            # Driver refused to bind an integer wider than the column
            await self.db.rollback()
            logger.warning(f"Category write failed: {e}")
            raise StoreError(str(e)) from e
