"""Health check endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.utils import check_database_health
from app.dependencies import get_db
from app.schemas import HealthCheckResponse

router = APIRouter()


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(db: AsyncSession = Depends(get_db)):
    """Return service health status.

    Checks connectivity to the database. Returns 200 either way; the
    ``status`` field is "degraded" when a check fails.
    """
    db_check = await check_database_health(db)
    db_status = "ok" if db_check["healthy"] else f"error: {db_check['error']}"

    services = {"database": db_status}
    overall_status = "ok" if all(s == "ok" for s in services.values()) else "degraded"

    return HealthCheckResponse(
        status=overall_status,
        database=db_status,
        services=services,
    )
