"""Shop Directory Backend -- FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api.v1.router import api_v1_router
from app.config import settings
from app.core.exceptions import InternalError, ShopDirectoryException
from app.db.session import engine
from app.db.utils import create_tables
from app.schemas.common import ErrorDetail, ErrorResponse

# Configure logging
logging.basicConfig(
    level=logging.INFO if settings.DEBUG else logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    # Startup
    logger.info("Starting Shop Directory API server...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    await create_tables(engine)
    logger.info("Database tables verified/created")

    yield

    # Shutdown
    logger.info("Shutting down Shop Directory API server...")
    await engine.dispose()


app = FastAPI(
    title="Shop Directory API",
    description="CRUD API for the shop directory",
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register API v1 router
app.include_router(api_v1_router, prefix=settings.API_PREFIX)


def _error_response(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message, details=details))
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


@app.exception_handler(ShopDirectoryException)
async def shop_directory_exception_handler(request: Request, exc: ShopDirectoryException):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return _error_response(exc.status_code, exc.code, exc.message, exc.details or None)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return _error_response(
        400,
        "VALIDATION_ERROR",
        "Invalid request: some parameters may contain invalid values.",
        jsonable_encoder(exc.errors()),
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"{request.method} {request.url.path} database error", exc_info=exc)
    error = InternalError(exc)
    return _error_response(error.status_code, error.code, error.message, error.details)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Shop Directory API",
        "version": "1.0.0",
        "docs": "/docs" if settings.DEBUG else None,
        "health": f"{settings.API_PREFIX}/health",
    }
