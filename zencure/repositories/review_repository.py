"""
Review repository with moderation-aware queries.
"""

from sqlalchemy.orm import selectinload

from zencure.constants import STATUS_APPROVED
from zencure.models import Review

from .base import BaseRepository


class ReviewRepository(BaseRepository[Review]):
    """Repository for Review operations."""

    model = Review

    def get_by_author_and_remedy(self, user_id: str, remedy_id: str) -> Review | None:
        return (
            self.session.query(Review)
            .filter(Review.user_id == user_id, Review.remedy_id == remedy_id)
            .first()
        )

    def approved_ratings(self, remedy_id: str) -> list[int]:
        """Ratings of every approved review for a remedy, read fresh from the store."""
        rows = (
            self.session.query(Review.rating)
            .filter(Review.remedy_id == remedy_id, Review.status == STATUS_APPROVED)
            .all()
        )
        return [row[0] for row in rows]

    def list_approved_by_remedy(
        self, remedy_id: str, offset: int = 0, limit: int = 10
    ) -> tuple[list[Review], int]:
        """
        Get a page of publicly visible reviews for a remedy, newest first.

        Returns:
            Tuple of (reviews, total_count)
        """
        conditions = [Review.remedy_id == remedy_id, Review.status == STATUS_APPROVED]
        return self._paginate(conditions, offset, limit)

    def list_by_status(
        self, status: str, offset: int = 0, limit: int = 10
    ) -> tuple[list[Review], int]:
        return self._paginate([Review.status == status], offset, limit)

    def list_filtered(
        self,
        status: str | None = None,
        remedy_id: str | None = None,
        user_id: str | None = None,
    ) -> list[Review]:
        """Admin listing with optional equality filters, newest first."""
        query = self.session.query(Review).options(
            selectinload(Review.user), selectinload(Review.remedy)
        )
        if status:
            query = query.filter(Review.status == status)
        if remedy_id:
            query = query.filter(Review.remedy_id == remedy_id)
        if user_id:
            query = query.filter(Review.user_id == user_id)
        return query.order_by(Review.created_at.desc()).all()

    def _paginate(self, conditions: list, offset: int, limit: int) -> tuple[list[Review], int]:
        total = self.session.query(Review).filter(*conditions).count()
        reviews = (
            self.session.query(Review)
            .options(selectinload(Review.user), selectinload(Review.remedy))
            .filter(*conditions)
            .order_by(Review.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return reviews, total
