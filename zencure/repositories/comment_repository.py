"""
Comment repository with moderation-aware queries.
"""

from sqlalchemy.orm import selectinload

from zencure.constants import STATUS_APPROVED
from zencure.models import Comment

from .base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    """Repository for Comment operations."""

    model = Comment

    def list_approved_by_review(
        self, review_id: str, offset: int = 0, limit: int = 10
    ) -> tuple[list[Comment], int]:
        """
        Get a page of publicly visible comments on a review, newest first.

        Returns:
            Tuple of (comments, total_count)
        """
        conditions = [Comment.review_id == review_id, Comment.status == STATUS_APPROVED]
        return self._paginate(conditions, offset, limit)

    def list_by_status(
        self, status: str, offset: int = 0, limit: int = 10
    ) -> tuple[list[Comment], int]:
        return self._paginate([Comment.status == status], offset, limit)

    def list_all(self) -> list[Comment]:
        return (
            self.session.query(Comment)
            .options(selectinload(Comment.user))
            .order_by(Comment.created_at.desc())
            .all()
        )

    def _paginate(self, conditions: list, offset: int, limit: int) -> tuple[list[Comment], int]:
        total = self.session.query(Comment).filter(*conditions).count()
        comments = (
            self.session.query(Comment)
            .options(selectinload(Comment.user))
            .filter(*conditions)
            .order_by(Comment.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return comments, total
