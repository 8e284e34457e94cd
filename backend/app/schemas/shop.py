"""Shop Pydantic schemas for request/response validation.

One request model per write endpoint:

- ``ShopCreateRequest``  POST  /v1/shops
- ``ShopReplaceRequest`` PUT   /v1/shops/{shopId}
- ``ShopUpdateRequest``  PATCH /v1/shops/{shopId}

The list endpoint's query rules live next to the route as ``Query``
constraints using the bounds defined here.
"""

from datetime import datetime
from typing import Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field

from app.models.base import OBJECT_ID_PATTERN
from app.models.shop import ADDRESS_MAX_LENGTH, ADDRESS_MIN_LENGTH, NAME_MAX_LENGTH, Role

SHOP_ID_PATTERN = OBJECT_ID_PATTERN

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 100
MAX_PER_PAGE = 100

# (longitude, latitude)
Location = Tuple[float, float]


class _ShopBody(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")


class ShopCreateRequest(_ShopBody):
    """Request to create a new shop."""
    email: EmailStr
    address: str = Field(min_length=ADDRESS_MIN_LENGTH, max_length=ADDRESS_MAX_LENGTH)
    name: Optional[str] = Field(default=None, max_length=NAME_MAX_LENGTH)
    picture: Optional[str] = None
    loc: Optional[Location] = None
    role: Optional[Role] = None


class ShopReplaceRequest(ShopCreateRequest):
    """Request to replace a whole shop document. Same rules as create."""


class ShopUpdateRequest(_ShopBody):
    """Request to update some fields of a shop. Every field is optional."""
    email: Optional[EmailStr] = None
    address: Optional[str] = Field(
        default=None, min_length=ADDRESS_MIN_LENGTH, max_length=ADDRESS_MAX_LENGTH
    )
    name: Optional[str] = Field(default=None, max_length=NAME_MAX_LENGTH)
    picture: Optional[str] = None
    loc: Optional[Location] = None
    role: Optional[Role] = None


class ShopResponse(BaseModel):
    """Client-facing projection of a shop.

    ``name``, ``updated_at`` and ``role`` are never exposed to clients.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    picture: Optional[str] = None
    address: str
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
    )
    loc: Optional[Location] = None
