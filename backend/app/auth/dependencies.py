"""
Authentication and role dependencies for FastAPI routes.

Clients send ``Authorization: Bearer <token>``; the token subject is the user id.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from zencure.constants import ROLE_ADMIN, ROLE_MODERATOR
from zencure.db import get_db
from zencure.models import User
from zencure.repositories import UserRepository

from .jwt import token_subject

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/v1/auth/login", auto_error=False)


def _user_from_token(db: Session, token: str) -> User | None:
    try:
        user_id = token_subject(token)
    except ValueError:
        return None
    return UserRepository(db).get_by_id(user_id)


def get_current_user(
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the authenticated user from the bearer token.

    Raises 401 when the token is missing, invalid or expired, or the user no
    longer exists.
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="not authorized, no token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = _user_from_token(db, token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="not authorized, token failed",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_optional_user(
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User | None:
    """
    Get the current user if authenticated, otherwise return None.

    Used by reads that show more to authors and moderators.
    """
    if not token:
        return None
    return _user_from_token(db, token)


def require_roles(*roles: str):
    """Build a dependency that admits only users holding one of ``roles``."""

    def dependency(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="access forbidden",
            )
        return user

    return dependency


require_admin = require_roles(ROLE_ADMIN)
require_moderator = require_roles(ROLE_MODERATOR, ROLE_ADMIN)
