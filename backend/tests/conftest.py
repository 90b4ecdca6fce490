"""
Test fixtures and configuration for pytest.
"""

import os
import sys
from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from db.database import Base, get_db, seed_default_categories
from models.category import Category
from services.category_gateway import CategoryGateway
from services.category_service import CategoryService

# Test database URL (SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///./test_categories.db"

# NullPool: every test runs on its own event loop, so connections are not reused
engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestingSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh, empty database session for each test."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with TestingSessionLocal() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def seeded_session(db_session: AsyncSession) -> AsyncSession:
    """Session over a store holding Action(1), SciFi(2), History(3)."""
    await seed_default_categories(db_session)
    return db_session


@pytest_asyncio.fixture
async def gateway(seeded_session: AsyncSession) -> CategoryGateway:
    return CategoryGateway(seeded_session)


@pytest_asyncio.fixture
async def service(gateway: CategoryGateway) -> CategoryService:
    return CategoryService(gateway, max_name_length=100)


@pytest_asyncio.fixture
async def sample_categories(seeded_session: AsyncSession) -> list[Category]:
    """The seeded categories, ordered by id."""
    from sqlalchemy import select

    result = await seeded_session.execute(select(Category).order_by(Category.id))
    return list(result.scalars().all())


# ============== Client Fixtures ==============


@pytest_asyncio.fixture(scope="function")
async def client(seeded_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client bound to the seeded test session."""
    from main import app

    async def override_get_db():
        yield seeded_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def session_factory(seeded_session: AsyncSession):
    """Factory for extra sessions on the seeded test database."""
    await seeded_session.commit()
    return TestingSessionLocal
