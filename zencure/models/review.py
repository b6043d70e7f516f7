"""
Review SQLAlchemy model.
"""

from datetime import datetime
from typing import TYPE_CHECKING, List

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from zencure.constants import STATUS_PENDING

from .base import Base, new_id, utcnow

if TYPE_CHECKING:
    from .comment import Comment
    from .remedy import Remedy
    from .user import User


class Review(Base):
    """
    A user's rating of a remedy.

    New and author-edited reviews are pending until a moderator approves them.
    Only approved reviews count toward the remedy's avg_rating/review_count.
    """

    __tablename__ = "reviews"
    __table_args__ = (
        UniqueConstraint("user_id", "remedy_id", name="uq_reviews_user_remedy"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), index=True)
    remedy_id: Mapped[str] = mapped_column(ForeignKey("remedies.id"), index=True)
    rating: Mapped[int] = mapped_column(Integer)
    effectiveness: Mapped[int] = mapped_column(Integer)
    side_effects: Mapped[int] = mapped_column(Integer)
    ease: Mapped[int] = mapped_column(Integer)
    title: Mapped[str] = mapped_column(String(255))
    content: Mapped[str] = mapped_column(Text)
    helpful_count: Mapped[int] = mapped_column(Integer, default=0)
    status: Mapped[str] = mapped_column(String(16), default=STATUS_PENDING, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="reviews")
    remedy: Mapped["Remedy"] = relationship("Remedy", back_populates="reviews")
    comments: Mapped[List["Comment"]] = relationship(
        "Comment", back_populates="review", cascade="all, delete-orphan"
    )
