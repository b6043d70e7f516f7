"""
Bearer tokens for ZenCure users.

A token carries the user id as ``sub`` plus issue/expiry times. Nothing else
about the user is embedded: role and profile are always re-read from the
database, so a role change takes effect on the next request.
"""

from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from zencure.config import get_settings


def create_user_token(user_id: str, expires_minutes: int | None = None) -> str:
    settings = get_settings()
    issued_at = datetime.now(timezone.utc)
    lifetime = timedelta(minutes=expires_minutes or settings.access_token_expire_minutes)
    claims = {"sub": user_id, "iat": issued_at, "exp": issued_at + lifetime}
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def token_subject(token: str) -> str:
    """
    Verify a token and return the user id it was issued for.

    Raises:
        ValueError: If the signature, expiry or subject claim is invalid.
    """
    settings = get_settings()
    try:
        claims = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError as exc:
        raise ValueError("token expired") from exc
    except JWTError as exc:
        raise ValueError("invalid token") from exc

    subject = claims.get("sub")
    if not subject:
        raise ValueError("token has no subject")
    return str(subject)
