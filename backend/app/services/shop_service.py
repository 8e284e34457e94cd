"""Shop data-access service.

Owns every read and write of shop records. Endpoints never touch the
session directly; they go through ``ShopService`` and render results with
``transform``.
"""

from typing import Any, Dict, Iterable, List, Optional

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from app.core.exceptions import ConflictError, InternalError, NotFoundError
from app.models.base import is_valid_object_id
from app.models.shop import Role, Shop
from app.schemas.shop import DEFAULT_PAGE, DEFAULT_PER_PAGE, ShopResponse

logger = structlog.get_logger(__name__)

# Fields a client may write. Anything else in a payload is never copied.
WRITABLE_FIELDS = ("email", "address", "name", "picture", "loc", "role")

# Fields only an admin may change on an existing shop.
RESTRICTED_FIELDS = ("role",)

# Values a full replace falls back to for fields missing from the payload.
_REPLACE_DEFAULTS: Dict[str, Any] = {
    "email": None,
    "address": None,
    "name": None,
    "picture": None,
    "loc": None,
    "role": Role.USER.value,
}


def transform(shop: Shop) -> ShopResponse:
    """Project a shop onto its client-facing fields."""
    return ShopResponse.model_validate(shop)


class ShopService:
    """Service for reading and writing shop records.

    All writes flush immediately so unique-index violations surface inside
    the calling request as ``ConflictError``. Committing is left to the
    request-scoped session provider.
    """

    def __init__(self, db: AsyncSession):
        """Initialize shop service.

        Args:
            db: Async database session
        """
        self.db = db
        self.logger = logger.bind(service="shop_service")

    async def get(self, shop_id: str) -> Shop:
        """Fetch a shop by id.

        Args:
            shop_id: 24-character hex identifier

        Returns:
            The stored shop

        Raises:
            NotFoundError: If the id is malformed or no shop has it
        """
        shop = None
        if is_valid_object_id(shop_id):
            shop = await self.db.get(Shop, shop_id.lower())

        if shop is None:
            self.logger.info("shop_not_found", shop_id=shop_id)
            raise NotFoundError("Shop", shop_id)

        return shop

    async def list(
        self,
        page: int = DEFAULT_PAGE,
        per_page: int = DEFAULT_PER_PAGE,
        name: Optional[str] = None,
        email: Optional[str] = None,
        address: Optional[str] = None,
    ) -> List[Shop]:
        """List shops, newest first.

        Only the filters that are provided take part in the query; a missing
        filter never matches as an empty string.

        Args:
            page: Page number (1-indexed)
            per_page: Results per page
            name: Exact name to match
            email: Exact email to match (normalized like stored emails)
            address: Exact address to match

        Returns:
            At most ``per_page`` shops, skipping ``per_page * (page - 1)``
        """
        query = select(Shop)

        if name is not None:
            query = query.where(Shop.name == name)
        if email is not None:
            query = query.where(Shop.email == email.strip().lower())
        if address is not None:
            query = query.where(Shop.address == address)

        query = (
            query.order_by(Shop.created_at.desc())
            .offset(per_page * (page - 1))
            .limit(per_page)
        )

        result = await self.db.execute(query)
        shops = list(result.scalars().all())

        self.logger.info("shops_listed", count=len(shops), page=page, per_page=per_page)
        return shops

    async def save(self, shop: Shop) -> Shop:
        """Insert a new shop or flush pending changes of a stored one.

        Raises:
            ConflictError: If the email is already used by another shop
        """
        self.db.add(shop)
        await self._flush()
        self.logger.info("shop_saved", shop_id=shop.id)
        return shop

    async def replace(
        self,
        shop: Shop,
        fields: Dict[str, Any],
        exclude: Iterable[str] = (),
    ) -> Shop:
        """Overwrite every writable field of ``shop`` with ``fields``.

        Fields missing from ``fields`` fall back to their defaults, so an
        omitted ``name`` is cleared. Fields in ``exclude`` keep their stored
        value. The stored id and creation time are preserved; if the row
        disappeared since it was resolved it is inserted again under the
        same id.

        Raises:
            ConflictError: If the new email is already used by another shop
        """
        excluded = set(exclude)
        shop_id, created_at = shop.id, shop.created_at
        values = {
            field: fields.get(field, _REPLACE_DEFAULTS[field])
            for field in WRITABLE_FIELDS
            if field not in excluded
        }
        kept = {field: getattr(shop, field) for field in WRITABLE_FIELDS if field in excluded}

        merged = await self.db.merge(Shop(id=shop_id, **values))
        try:
            await self._flush()
        except StaleDataError:
            # The UPDATE matched no row: insert it again under the same id.
            await self.db.rollback()
            if merged in self.db:
                self.db.expunge(merged)
            merged = Shop(id=shop_id, **values, **kept)
            merged.created_at = created_at
            self.db.add(merged)
            await self._flush()
            self.logger.info("shop_reinserted", shop_id=shop_id)

        await self.db.refresh(merged)

        self.logger.info("shop_replaced", shop_id=merged.id, excluded=sorted(excluded))
        return merged

    async def update(self, shop: Shop, fields: Dict[str, Any]) -> Shop:
        """Merge the provided fields into ``shop``; other fields are untouched.

        Raises:
            ConflictError: If the new email is already used by another shop
        """
        changed = []
        for field in WRITABLE_FIELDS:
            if field in fields:
                setattr(shop, field, fields[field])
                changed.append(field)

        await self._flush()
        self.logger.info("shop_updated", shop_id=shop.id, fields=changed)
        return shop

    async def delete(self, shop: Shop) -> None:
        """Hard-delete a shop."""
        await self.db.delete(shop)
        await self.db.flush()
        self.logger.info("shop_deleted", shop_id=shop.id)

    async def _flush(self) -> None:
        try:
            await self.db.flush()
        except IntegrityError as e:
            await self.db.rollback()
            if "email" in str(e.orig):
                self.logger.warning("duplicate_email")
                raise ConflictError("email")
            self.logger.error("integrity_error", error=str(e.orig))
            raise InternalError(e)
