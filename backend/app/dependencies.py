"""FastAPI dependency injection providers."""

from functools import lru_cache
from typing import AsyncGenerator, Awaitable, Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ForbiddenError, NotFoundError, UnauthorizedError
from app.db.session import async_session_factory
from app.models.shop import Role, Shop
from app.services.auth_service import decode_access_token
from app.services.shop_service import ShopService

ADMIN = Role.ADMIN.value
LOGGED_USER = "_loggedUser"

_bearer_scheme = HTTPBearer(auto_error=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session for request-scoped usage.

    The session is automatically committed on success or rolled back on error.
    Always closed after the request completes.

    Usage:
        @router.get("/shops")
        async def list_shops(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


@lru_cache(maxsize=None)
def authorize(role: str = LOGGED_USER) -> Callable[..., Awaitable[Shop]]:
    """Build a dependency that authenticates the calling shop.

    ``authorize(LOGGED_USER)`` accepts any shop holding a valid token,
    ``authorize(ADMIN)`` additionally requires the admin role. The resolved
    dependency returns the acting shop.

    Cached: ``authorize(ADMIN)`` always returns the same callable, so it
    can be used as an ``app.dependency_overrides`` key.
    """

    async def _authorize(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
        db: AsyncSession = Depends(get_db),
    ) -> Shop:
        if not credentials:
            raise UnauthorizedError("Authentication required")

        shop_id = decode_access_token(credentials.credentials)
        if not shop_id:
            raise UnauthorizedError("Invalid or expired token")

        try:
            actor = await ShopService(db).get(shop_id)
        except NotFoundError:
            raise UnauthorizedError("Token does not belong to an existing shop")

        if role == ADMIN and not actor.is_admin:
            raise ForbiddenError("Only admins can access this resource")

        return actor

    return _authorize


async def get_shop_or_404(
    shop_id: str,
    db: AsyncSession = Depends(get_db),
) -> Shop:
    """Resolve the ``shop_id`` path parameter to a stored shop."""
    return await ShopService(db).get(shop_id)

