"""Database utility functions."""

from typing import Any, Dict

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from app.models import Base


async def create_tables(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def check_database_health(session: AsyncSession) -> Dict[str, Any]:
    """Check if database is accessible and responsive.

    Returns:
        dict with 'healthy' boolean and optional 'error' message
    """
    try:
        await session.execute(text("SELECT 1"))
        return {"healthy": True}
    except SQLAlchemyError as e:
        return {"healthy": False, "error": str(e)}
