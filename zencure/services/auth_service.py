"""
Account registration, login and profile updates.

Token issuing lives in the API layer; these functions only deal with users.
"""

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from zencure.constants import ROLE_USER
from zencure.exceptions import AuthenticationError, ConflictError, InputValidationError
from zencure.logging import get_logger
from zencure.models import User
from zencure.passwords import hash_password, verify_password
from zencure.repositories import UserRepository

logger = get_logger("services.auth")

MIN_PASSWORD_LENGTH = 6
HEALTH_PROFILE_KEYS = ("allergies", "conditions", "preferences")


def _normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def _check_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise InputValidationError(
            f"password must be at least {MIN_PASSWORD_LENGTH} characters"
        )


def register_user(db: Session, email: str, password: str, name: str) -> User:
    """
    Create a regular user account.

    Raises:
        InputValidationError: Missing fields or a short password.
        ConflictError: The email is already registered.
    """
    email = _normalize_email(email)
    name = (name or "").strip()
    if not email or not password or not name:
        raise InputValidationError("Missing required fields")
    _check_password(password)

    repo = UserRepository(db)
    if repo.get_by_email(email) is not None:
        raise ConflictError("user already exists")

    try:
        with db.begin_nested():
            user = repo.create(
                email=email,
                name=name,
                password_hash=hash_password(password),
                role=ROLE_USER,
            )
    except IntegrityError:
        raise ConflictError("user already exists") from None

    logger.info("user_registered", user_id=user.id)
    return user


def authenticate_user(db: Session, email: str, password: str) -> User:
    """
    Raises:
        AuthenticationError: Unknown email or wrong password. The message does
            not say which.
    """
    user = UserRepository(db).get_by_email(_normalize_email(email))
    if user is None or not verify_password(password or "", user.password_hash):
        logger.warning("login_failed")
        raise AuthenticationError("invalid email or password")

    logger.info("user_logged_in", user_id=user.id)
    return user


def merge_health_profile(
    current: dict[str, list[str]] | None, incoming: dict[str, Any]
) -> dict[str, list[str]]:
    """Replace each health profile list that is supplied and non-empty; keep the rest."""
    current = current or {}
    return {
        key: list(incoming.get(key) or current.get(key) or []) for key in HEALTH_PROFILE_KEYS
    }


def update_profile(db: Session, user: User, changes: dict[str, Any]) -> User:
    """
    Update name, email, password and/or health profile.

    Empty values leave the field unchanged.
    """
    repo = UserRepository(db)
    updates: dict[str, Any] = {}

    if changes.get("name"):
        updates["name"] = changes["name"].strip()

    new_email = _normalize_email(changes.get("email"))
    if new_email and new_email != user.email:
        existing = repo.get_by_email(new_email)
        if existing is not None and existing.id != user.id:
            raise ConflictError("user already exists")
        updates["email"] = new_email

    if changes.get("password"):
        _check_password(changes["password"])
        updates["password_hash"] = hash_password(changes["password"])

    if changes.get("health_profile"):
        updates["health_profile"] = merge_health_profile(
            user.health_profile, changes["health_profile"]
        )

    repo.update(user, **updates)
    logger.info("profile_updated", user_id=user.id, fields=sorted(updates))
    return user


__all__ = ["authenticate_user", "merge_health_profile", "register_user", "update_profile"]
