"""
Remedy repository: symptom lookups for search and derived-stat writes.
"""

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from zencure.models import Remedy, RemedySymptom

from .base import BaseRepository


class RemedyRepository(BaseRepository[Remedy]):
    """
    Repository for Remedy operations.

    Symptom matching is exact and case-sensitive: a remedy is returned when
    any of its symptom names equals one of the requested names.
    """

    model = Remedy

    def get_by_name(self, name: str) -> Remedy | None:
        return self.session.query(Remedy).filter(Remedy.name == name).first()

    def find_by_symptom_names(
        self, names: list[str], order_by_rating: bool = False
    ) -> list[Remedy]:
        """
        Get every remedy with at least one symptom named in ``names``.

        Symptoms and sources are eager loaded since both search paths read
        them. Without ``order_by_rating`` rows come back in insertion order.
        """
        if not names:
            return []

        matching_ids = select(RemedySymptom.remedy_id).where(RemedySymptom.name.in_(names))
        query = (
            self.session.query(Remedy)
            .options(selectinload(Remedy.symptoms), selectinload(Remedy.sources))
            .filter(Remedy.id.in_(matching_ids))
        )
        if order_by_rating:
            query = query.order_by(Remedy.avg_rating.desc(), Remedy.created_at.asc())
        else:
            query = query.order_by(Remedy.created_at.asc(), Remedy.id.asc())
        return query.all()

    def list_by_rating(self, offset: int = 0, limit: int = 10) -> list[Remedy]:
        """Get a page of remedies, best rated first."""
        return (
            self.session.query(Remedy)
            .options(selectinload(Remedy.symptoms), selectinload(Remedy.sources))
            .order_by(Remedy.avg_rating.desc(), Remedy.created_at.asc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def lock_for_update(self, remedy_id: str) -> Remedy | None:
        """
        Load a remedy holding a row lock until the transaction ends.

        Concurrent stats recomputations for the same remedy queue on this lock.
        SQLite ignores FOR UPDATE; its writes are serialized anyway.
        """
        return (
            self.session.query(Remedy)
            .filter(Remedy.id == remedy_id)
            .with_for_update()
            .one_or_none()
        )

    def update_stats(self, remedy_id: str, avg_rating: float, review_count: int) -> int:
        """
        Overwrite the derived rating fields.

        Returns:
            Number of rows updated (0 when the remedy no longer exists).
        """
        updated = (
            self.session.query(Remedy)
            .filter(Remedy.id == remedy_id)
            .update(
                {Remedy.avg_rating: avg_rating, Remedy.review_count: review_count},
                synchronize_session="fetch",
            )
        )
        self.session.flush()
        return updated

    def unique_symptom_names(self) -> list[str]:
        """Sorted distinct symptom names across all remedies."""
        rows = self.session.query(RemedySymptom.name).distinct().all()
        return sorted(row[0] for row in rows)
