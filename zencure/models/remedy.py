"""
Remedy-related SQLAlchemy models.
"""

from datetime import datetime
from typing import TYPE_CHECKING, List

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, new_id, utcnow

if TYPE_CHECKING:
    from .review import Review
    from .source import Source


remedy_sources = Table(
    "remedy_sources",
    Base.metadata,
    Column("remedy_id", ForeignKey("remedies.id", ondelete="CASCADE"), primary_key=True),
    Column("source_id", ForeignKey("sources.id", ondelete="CASCADE"), primary_key=True),
)


class Remedy(Base):
    """
    Natural remedy with curated symptoms and cited sources.

    avg_rating and review_count are derived from the approved reviews and are
    only ever written by the aggregation service.
    """

    __tablename__ = "remedies"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    description: Mapped[str] = mapped_column(Text)
    categories: Mapped[List[str]] = mapped_column(JSON, default=list)
    warnings: Mapped[List[str]] = mapped_column(JSON, default=list)
    avg_rating: Mapped[float] = mapped_column(Float, default=0.0)
    review_count: Mapped[int] = mapped_column(Integer, default=0)
    verified: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    # Relationships
    symptoms: Mapped[List["RemedySymptom"]] = relationship(
        "RemedySymptom",
        back_populates="remedy",
        cascade="all, delete-orphan",
        order_by="RemedySymptom.position",
    )
    sources: Mapped[List["Source"]] = relationship(
        "Source", secondary=remedy_sources, back_populates="remedies"
    )
    reviews: Mapped[List["Review"]] = relationship("Review", back_populates="remedy")


class RemedySymptom(Base):
    """Symptom a remedy addresses, weighted 0-100 by how directly it applies."""

    __tablename__ = "remedy_symptoms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    remedy_id: Mapped[str] = mapped_column(
        ForeignKey("remedies.id", ondelete="CASCADE"), index=True
    )
    name: Mapped[str] = mapped_column(String(255), index=True)
    relevance_score: Mapped[float] = mapped_column(Float)
    position: Mapped[int] = mapped_column(Integer, default=0)

    remedy: Mapped["Remedy"] = relationship("Remedy", back_populates="symptoms")
