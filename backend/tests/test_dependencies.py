"""Tests for the authorize() dependency factory."""

import pytest
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ForbiddenError, UnauthorizedError
from app.dependencies import ADMIN, LOGGED_USER, authorize
from app.models import Shop
from app.services.auth_service import create_access_token


def _bearer(shop: Shop) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=create_access_token(shop.id))


class TestAuthorize:
    """Tests for authorize(role)."""

    async def test_logged_user_accepts_any_shop(self, test_db: AsyncSession, regular_shop: Shop):
        actor = await authorize(LOGGED_USER)(credentials=_bearer(regular_shop), db=test_db)

        assert actor.id == regular_shop.id
        assert not actor.is_admin

    async def test_default_role_is_logged_user(self):
        assert authorize() is authorize(LOGGED_USER)

    async def test_admin_rejects_regular_shop(self, test_db: AsyncSession, regular_shop: Shop):
        with pytest.raises(ForbiddenError):
            await authorize(ADMIN)(credentials=_bearer(regular_shop), db=test_db)

    async def test_admin_accepts_admin_shop(self, test_db: AsyncSession, admin_shop: Shop):
        actor = await authorize(ADMIN)(credentials=_bearer(admin_shop), db=test_db)

        assert actor.is_admin

    @pytest.mark.parametrize("role", [LOGGED_USER, ADMIN])
    async def test_missing_credentials_unauthorized(self, test_db: AsyncSession, role):
        with pytest.raises(UnauthorizedError):
            await authorize(role)(credentials=None, db=test_db)

    async def test_garbage_token_unauthorized(self, test_db: AsyncSession):
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="garbage")

        with pytest.raises(UnauthorizedError):
            await authorize(LOGGED_USER)(credentials=credentials, db=test_db)
