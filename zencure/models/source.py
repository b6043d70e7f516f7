"""
Source (citation) SQLAlchemy model.
"""

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import JSON, Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, new_id, utcnow
from .remedy import remedy_sources

if TYPE_CHECKING:
    from .remedy import Remedy


class Source(Base):
    """
    Publication backing one or more remedies.

    Only the remedy back-reference changes after creation.
    """

    __tablename__ = "sources"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(512))
    url: Mapped[str] = mapped_column(String(1024), unique=True, index=True)
    credibility_score: Mapped[int] = mapped_column(Integer)
    publication_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    authors: Mapped[List[str]] = mapped_column(JSON, default=list)
    publisher: Mapped[str] = mapped_column(String(255), default="")
    is_peer_reviewed: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    remedies: Mapped[List["Remedy"]] = relationship(
        "Remedy", secondary=remedy_sources, back_populates="sources"
    )

    @property
    def remedy_ids(self) -> List[str]:
        return [remedy.id for remedy in self.remedies]
