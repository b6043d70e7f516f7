"""User repository for authentication and role management."""

from zencure.models import User

from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User operations."""

    model = User

    def get_by_email(self, email: str) -> User | None:
        """Get user by email. Emails are stored lower-cased."""
        return self.session.query(User).filter(User.email == email.strip().lower()).first()

    def list_all(self) -> list[User]:
        return self.session.query(User).order_by(User.created_at.asc()).all()
