"""Pytest configuration and shared fixtures."""

import os

# Settings are read at import time, so point them at a throwaway database
# before anything from ``app`` is imported.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from typing import AsyncGenerator, Dict

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.dependencies import get_db
from app.main import app
from app.models import Base, Role, Shop
from app.services.auth_service import create_access_token


@pytest.fixture
def anyio_backend():
    """Use asyncio as the async backend for tests."""
    return "asyncio"


@pytest_asyncio.fixture
async def session_factory():
    """Create an in-memory SQLite database and return a session factory for it."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """A single session for service-level tests."""
    async with session_factory() as session:
        yield session


async def _create_shop(session_factory, **fields) -> Shop:
    async with session_factory() as session:
        shop = Shop(**fields)
        session.add(shop)
        await session.commit()
        await session.refresh(shop)
        return shop


@pytest_asyncio.fixture
async def admin_shop(session_factory) -> Shop:
    """An admin shop that authenticates write requests."""
    return await _create_shop(
        session_factory,
        email="admin@shops.io",
        address="1 Admin Plaza",
        name="Admin",
        role=Role.ADMIN,
    )


@pytest_asyncio.fixture
async def regular_shop(session_factory) -> Shop:
    """A shop without elevated privileges."""
    return await _create_shop(
        session_factory,
        email="corner@shops.io",
        address="42 Corner Street",
        name="Corner Shop",
    )


@pytest.fixture
def admin_headers(admin_shop: Shop) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(admin_shop.id)}"}


@pytest.fixture
def user_headers(regular_shop: Shop) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(regular_shop.id)}"}


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app, with sessions from the test database."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
