"""
Service-layer exceptions.

Every business failure raised by ``zencure.services`` derives from
``ServiceError`` and carries a human-readable ``detail`` plus the HTTP status
the API layer should answer with. Anything that is not a ``ServiceError`` is
treated as an internal error.
"""

from typing import Any


class ServiceError(Exception):
    """Base exception for service layer errors."""

    status_code: int = 500

    def __init__(self, detail: str, **extra: Any):
        super().__init__(detail)
        self.detail = detail
        self.extra = extra


class InputValidationError(ServiceError):
    """Missing or malformed input (empty keyword list, bad identifier, bad status)."""

    status_code = 400


class NotFoundError(ServiceError):
    """Referenced remedy, review, comment, source or user does not exist."""

    status_code = 404


class AuthorizationError(ServiceError):
    """Actor is neither the owner nor a moderator/admin."""

    status_code = 403


class ConflictError(ServiceError):
    """Uniqueness violation (duplicate review, remedy name, source URL, email)."""

    status_code = 409


class AuthenticationError(ServiceError):
    """Credentials were rejected."""

    status_code = 401


__all__ = [
    "ServiceError",
    "InputValidationError",
    "NotFoundError",
    "AuthorizationError",
    "ConflictError",
    "AuthenticationError",
]
