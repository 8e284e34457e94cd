"""Declarative base and shared column mixins."""

import re
import secrets
import time
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

OBJECT_ID_PATTERN = r"^[a-fA-F0-9]{24}$"
_object_id_re = re.compile(OBJECT_ID_PATTERN)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_object_id() -> str:
    """Generate a 24-character hex identifier.

    Layout follows the familiar document-store ObjectId: 4 bytes of epoch
    seconds followed by 8 random bytes, so ids sort roughly by creation.
    """
    return f"{int(time.time()) & 0xFFFFFFFF:08x}{secrets.token_hex(8)}"


def is_valid_object_id(value: object) -> bool:
    """Return True if ``value`` is a syntactically valid 24-hex identifier."""
    return isinstance(value, str) and bool(_object_id_re.match(value))


class Base(DeclarativeBase):
    pass


class ObjectIdPrimaryKeyMixin:
    """Adds a system-generated, immutable 24-hex ``id`` primary key."""

    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=generate_object_id,
    )


class TimestampMixin:
    """Adds ``created_at`` / ``updated_at`` columns maintained on write."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )
