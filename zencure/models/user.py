"""
User-related SQLAlchemy models.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Dict, List, Optional

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from zencure.constants import PRIVILEGED_ROLES, ROLE_USER

from .base import Base, new_id, utcnow

if TYPE_CHECKING:
    from .comment import Comment
    from .review import Review


class User(Base):
    """
    Registered account.

    Attributes:
        email: Unique, stored lower-cased
        name: Display name shown next to reviews and comments
        password_hash: bcrypt hash of the password
        role: One of user, moderator, admin
        health_profile: Optional {allergies, conditions, preferences} lists
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    password_hash: Mapped[str] = mapped_column(String(255))
    role: Mapped[str] = mapped_column(String(16), default=ROLE_USER)
    health_profile: Mapped[Optional[Dict[str, List[str]]]] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    # Relationships
    reviews: Mapped[List["Review"]] = relationship("Review", back_populates="user")
    comments: Mapped[List["Comment"]] = relationship("Comment", back_populates="user")

    @property
    def is_privileged(self) -> bool:
        """Moderators and admins may moderate and edit any review or comment."""
        return self.role in PRIVILEGED_ROLES
