"""Services module for business logic and data operations.

Services own data access for their resource. Endpoints call them and never
issue queries of their own.
"""

from app.services.auth_service import create_access_token, decode_access_token
from app.services.shop_service import ShopService, transform

__all__ = [
    "ShopService",
    "transform",
    "create_access_token",
    "decode_access_token",
]
