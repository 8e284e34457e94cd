"""SQLAlchemy models for the Shop Directory.

Importing this package registers every table on ``Base.metadata``, which
``app.db.utils.create_tables`` creates at startup.
"""

from app.models.base import Base, ObjectIdPrimaryKeyMixin, TimestampMixin
from app.models.shop import Role, Shop

__all__ = [
    "Base",
    "ObjectIdPrimaryKeyMixin",
    "TimestampMixin",
    "Role",
    "Shop",
]
