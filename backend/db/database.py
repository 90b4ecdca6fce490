"""
Database configuration and session management.

SQLite (aiosqlite) is the development default, PostgreSQL (asyncpg) the
production target. The category table only relies on features both support:
a unique constraint, server-side timestamps and an integer version column for
optimistic locking.
"""

import logging

from config import get_settings
from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)

settings = get_settings()

database_url = settings.async_database_url
is_sqlite = database_url.startswith("sqlite")

engine_kwargs: dict = {
    "echo": False,
}

if not is_sqlite:
    # pool_pre_ping: verify connections are alive before using them.
    # pool_size + max_overflow must stay below PostgreSQL's max_connections.
    engine_kwargs["pool_pre_ping"] = True
    engine_kwargs["pool_size"] = 5
    engine_kwargs["max_overflow"] = 10

engine = create_async_engine(database_url, **engine_kwargs)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


# (id, name, display_order)
DEFAULT_CATEGORIES = (
    (1, "Action", 1),
    (2, "SciFi", 2),
    (3, "History", 3),
)


async def get_db():
    """
    Dependency that yields one session per request.

    The session does not auto-commit: the category gateway commits or rolls
    back each write itself. The rollback here only covers errors raised
    outside the gateway.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def seed_default_categories(session: AsyncSession) -> int:
    """Insert the default categories if the table is empty. Returns rows added."""
    from models.category import Category
    from services.category_rules import category_name_key

    existing = await session.scalar(select(func.count(Category.id)))
    if existing:
        return 0

    for category_id, name, display_order in DEFAULT_CATEGORIES:
        session.add(
            Category(
                id=category_id,
                name=name,
                name_key=category_name_key(name),
                display_order=display_order,
            )
        )
    await session.flush()

    if not is_sqlite:
        # Explicit ids do not advance the PostgreSQL sequence
        await session.execute(
            text(
                "SELECT setval(pg_get_serial_sequence('categories', 'id'), "
                "(SELECT MAX(id) FROM categories))"
            )
        )

    await session.commit()
    logger.info(f"Seeded {len(DEFAULT_CATEGORIES)} default categories")
    return len(DEFAULT_CATEGORIES)


async def init_db():
    """Create tables and seed the default categories."""
    # Register models with the metadata
    from models import category  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)

    if settings.SEED_DEFAULT_CATEGORIES:
        async with AsyncSessionLocal() as session:
            await seed_default_categories(session)

    logger.info("Database initialized successfully")
