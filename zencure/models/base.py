"""
Base model class and shared column helpers for SQLAlchemy ORM.
"""

import uuid
from datetime import datetime, timezone

from zencure.db import Base


def new_id() -> str:
    """Generate a primary key for a new record."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


__all__ = ["Base", "new_id", "utcnow"]
