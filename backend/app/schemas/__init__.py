"""Pydantic schemas for the Shop Directory API.

All request/response models are defined here for easy import.
"""

from app.schemas.common import ErrorDetail, ErrorResponse
from app.schemas.health import HealthCheckResponse
from app.schemas.shop import (
    ShopCreateRequest,
    ShopReplaceRequest,
    ShopResponse,
    ShopUpdateRequest,
)

__all__ = [
    # Common
    "ErrorDetail",
    "ErrorResponse",
    # Health
    "HealthCheckResponse",
    # Shop
    "ShopCreateRequest",
    "ShopReplaceRequest",
    "ShopResponse",
    "ShopUpdateRequest",
]
