"""Tests for Settings parsing and table creation."""

import pytest
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from app.config import Settings
from app.db.utils import create_tables


class TestSettings:
    @pytest.mark.parametrize(
        "url",
        [
            "postgres://shops:pw@db:5432/shops",
            "postgresql://shops:pw@db:5432/shops",
            "postgresql+asyncpg://shops:pw@db:5432/shops",
        ],
    )
    def test_postgres_urls_use_asyncpg(self, url):
        settings = Settings(_env_file=None, DATABASE_URL=url)

        assert settings.DATABASE_URL == "postgresql+asyncpg://shops:pw@db:5432/shops"
        assert not settings.is_sqlite

    def test_sqlite_url_untouched(self):
        settings = Settings(_env_file=None, DATABASE_URL="sqlite+aiosqlite:///:memory:")

        assert settings.DATABASE_URL == "sqlite+aiosqlite:///:memory:"
        assert settings.is_sqlite

    def test_cors_origins_include_frontend(self):
        settings = Settings(
            _env_file=None,
            FRONTEND_URL="http://localhost:3000",
            CORS_ORIGINS=" https://shops.io, ,https://admin.shops.io",
        )

        assert settings.get_cors_origins() == [
            "http://localhost:3000",
            "https://shops.io",
            "https://admin.shops.io",
        ]


class TestCreateTables:
    async def test_creates_shops_table(self):
        engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
        try:
            await create_tables(engine)
            async with engine.connect() as conn:
                tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        finally:
            await engine.dispose()

        assert "shops" in tables
