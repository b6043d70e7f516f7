"""
SQLAlchemy models for ZenCure.

Single source of truth for all database models. Used by the services and the
API layer.

Usage:
    from zencure.models import Remedy, Review, Source
"""

from .base import Base
from .remedy import Remedy, RemedySymptom, remedy_sources
from .source import Source
from .user import User
from .review import Review
from .comment import Comment

__all__ = [
    "Base",
    "User",
    "Remedy",
    "RemedySymptom",
    "remedy_sources",
    "Source",
    "Review",
    "Comment",
]
