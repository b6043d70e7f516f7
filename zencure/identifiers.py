"""Identifier format checks, run before any lookup."""

import uuid

from zencure.exceptions import InputValidationError


def validate_id(value, entity: str) -> str:
    """
    Return the canonical form of a record id.

    Raises:
        InputValidationError: If ``value`` is not a UUID string.
    """
    if not isinstance(value, str):
        raise InputValidationError(f"invalid {entity} id format")
    try:
        return str(uuid.UUID(value))
    except ValueError:
        raise InputValidationError(f"invalid {entity} id format") from None
