"""Shops API endpoints.

| Method | Path              | Permission |
|--------|-------------------|------------|
| GET    | /shops            | public     |
| POST   | /shops            | admin      |
| GET    | /shops/{shop_id}  | public     |
| PUT    | /shops/{shop_id}  | admin      |
| PATCH  | /shops/{shop_id}  | admin      |
| DELETE | /shops/{shop_id}  | admin      |

Errors raised here are never formatted locally; the exception handlers in
``app.main`` render them.
"""

from typing import Any, Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import ADMIN, authorize, get_db, get_shop_or_404
from app.models.shop import Shop
from app.schemas.shop import (
    DEFAULT_PAGE,
    DEFAULT_PER_PAGE,
    MAX_PER_PAGE,
    SHOP_ID_PATTERN,
    ShopCreateRequest,
    ShopReplaceRequest,
    ShopResponse,
    ShopUpdateRequest,
)
from app.services.shop_service import RESTRICTED_FIELDS, ShopService, transform

router = APIRouter()


def _restricted_for(actor: Shop) -> Tuple[str, ...]:
    """Fields the acting shop may not overwrite on an existing shop."""
    return () if actor.is_admin else RESTRICTED_FIELDS


def _omit(fields: Dict[str, Any], keys: Tuple[str, ...]) -> Dict[str, Any]:
    return {k: v for k, v in fields.items() if k not in keys}


@router.get("", response_model=List[ShopResponse])
async def list_shops(
    page: int = Query(DEFAULT_PAGE, ge=1, description="Page number (1-indexed)"),
    per_page: int = Query(
        DEFAULT_PER_PAGE, ge=1, le=MAX_PER_PAGE, alias="perPage", description="Shops per page"
    ),
    name: Optional[str] = Query(None, description="Exact shop name"),
    email: Optional[str] = Query(None, description="Exact shop email"),
    db: AsyncSession = Depends(get_db),
):
    """List shops in descending order of creation time."""
    shops = await ShopService(db).list(page=page, per_page=per_page, name=name, email=email)
    return [transform(shop) for shop in shops]


@router.post(
    "",
    response_model=ShopResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(authorize(ADMIN))],
)
async def create_shop(body: ShopCreateRequest, db: AsyncSession = Depends(get_db)):
    """Create a new shop. Admin only."""
    shop = Shop(**body.model_dump(exclude_none=True))
    shop = await ShopService(db).save(shop)
    return transform(shop)


@router.get("/{shop_id}", response_model=ShopResponse)
async def get_shop(shop_id: str, db: AsyncSession = Depends(get_db)):
    """Get shop details. A malformed id is reported as not found."""
    shop = await ShopService(db).get(shop_id)
    return transform(shop)


@router.put("/{shop_id}", response_model=ShopResponse)
async def replace_shop(
    body: ShopReplaceRequest,
    shop_id: str = Path(pattern=SHOP_ID_PATTERN),
    actor: Shop = Depends(authorize(ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Replace the whole shop document with a new one.

    Fields left out of the body are reset. Restricted fields are kept as
    stored unless the acting shop is an admin.
    """
    restricted = _restricted_for(actor)
    fields = _omit(body.model_dump(exclude_none=True), restricted)
    service = ShopService(db)
    shop = await service.get(shop_id)
    shop = await service.replace(shop, fields, exclude=restricted)
    return transform(shop)


@router.patch("/{shop_id}", response_model=ShopResponse)
async def update_shop(
    body: ShopUpdateRequest,
    shop_id: str = Path(pattern=SHOP_ID_PATTERN),
    actor: Shop = Depends(authorize(ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Update only the fields present in the body."""
    fields = _omit(body.model_dump(exclude_unset=True), _restricted_for(actor))
    service = ShopService(db)
    shop = await service.get(shop_id)
    shop = await service.update(shop, fields)
    return transform(shop)


@router.delete(
    "/{shop_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(authorize(ADMIN))],
)
async def remove_shop(
    shop: Shop = Depends(get_shop_or_404),
    db: AsyncSession = Depends(get_db),
):
    """Delete a shop."""
    await ShopService(db).delete(shop)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
