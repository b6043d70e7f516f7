"""Source repository."""

from zencure.models import Source

from .base import BaseRepository


class SourceRepository(BaseRepository[Source]):
    """Repository for Source operations."""

    model = Source

    def get_by_url(self, url: str) -> Source | None:
        return self.session.query(Source).filter(Source.url == url).first()

    def list_all(self) -> list[Source]:
        return self.session.query(Source).order_by(Source.created_at.asc()).all()
