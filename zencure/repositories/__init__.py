"""
Repository pattern implementations for data access.

Repositories wrap the SQLAlchemy session so services never build queries
themselves.

Usage:
    from zencure.repositories import RemedyRepository
    from zencure.db import db

    with db.session() as session:
        repo = RemedyRepository(session)
        candidates = repo.find_by_symptom_names(["Headache"])
"""

from .base import BaseRepository
from .comment_repository import CommentRepository
from .remedy_repository import RemedyRepository
from .review_repository import ReviewRepository
from .source_repository import SourceRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "RemedyRepository",
    "ReviewRepository",
    "CommentRepository",
    "SourceRepository",
    "UserRepository",
]
