"""Shop model, the single record type of the directory."""

import enum
import re
from typing import List, Optional

from sqlalchemy import String
from sqlalchemy import JSON as JSONB
from sqlalchemy.orm import Mapped, mapped_column, validates

from app.core.exceptions import ValidationError
from app.models.base import Base, ObjectIdPrimaryKeyMixin, TimestampMixin

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")

ADDRESS_MIN_LENGTH = 6
ADDRESS_MAX_LENGTH = 128
NAME_MAX_LENGTH = 128


class Role(str, enum.Enum):
    """Privilege level of a shop acting as an API principal."""

    USER = "user"
    ADMIN = "admin"


class Shop(ObjectIdPrimaryKeyMixin, TimestampMixin, Base):
    """A shop listed in the directory.

    Field rules (trimming, lowercasing, length bounds, email format) are
    enforced by the attribute validators below, so they hold for every
    write path and not only for HTTP requests. Shops are also the
    principals that authenticate against the API; ``role`` decides what
    they may do.
    """

    __tablename__ = "shops"

    email: Mapped[str] = mapped_column(
        String(320), unique=True, index=True, nullable=False,
        comment="Contact email (unique, lowercase)"
    )
    address: Mapped[str] = mapped_column(String(ADDRESS_MAX_LENGTH), nullable=False)
    name: Mapped[Optional[str]] = mapped_column(String(NAME_MAX_LENGTH), nullable=True, index=True)
    picture: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True, comment="Picture URL")

    # [<longitude>, <latitude>]
    loc: Mapped[Optional[List[float]]] = mapped_column(JSONB, nullable=True)

    role: Mapped[str] = mapped_column(
        String(16), nullable=False, default=Role.USER.value,
        comment="Privilege level: 'user' or 'admin'"
    )

    @validates("email")
    def _validate_email(self, key: str, value: Optional[str]) -> str:
        if value is None:
            raise ValidationError(key, "email is required")
        value = value.strip().lower()
        if not EMAIL_PATTERN.match(value):
            raise ValidationError(key, f"'{value}' is not a valid email")
        return value

    @validates("address")
    def _validate_address(self, key: str, value: Optional[str]) -> str:
        if value is None:
            raise ValidationError(key, "address is required")
        if not ADDRESS_MIN_LENGTH <= len(value) <= ADDRESS_MAX_LENGTH:
            raise ValidationError(
                key,
                f"address must be between {ADDRESS_MIN_LENGTH} and {ADDRESS_MAX_LENGTH} characters",
            )
        return value

    @validates("name")
    def _validate_name(self, key: str, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if len(value) > NAME_MAX_LENGTH:
            raise ValidationError(key, f"name must be at most {NAME_MAX_LENGTH} characters")
        return value

    @validates("picture")
    def _validate_picture(self, key: str, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else None

    @validates("loc")
    def _validate_loc(self, key: str, value: Optional[List[float]]) -> Optional[List[float]]:
        if value is None:
            return None
        if len(value) != 2 or not all(
            isinstance(v, (int, float)) and not isinstance(v, bool) for v in value
        ):
            raise ValidationError(key, "loc must be a [longitude, latitude] pair")
        return [float(v) for v in value]

    @validates("role")
    def _validate_role(self, key: str, value) -> str:
        try:
            return Role(value).value
        except ValueError:
            raise ValidationError(key, f"'{value}' is not a valid role")

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    def __repr__(self) -> str:
        return f"<Shop(id={self.id}, email='{self.email}')>"
