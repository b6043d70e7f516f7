"""
Moderation state machine for reviews and comments.
"""

from .state import (
    can_modify,
    can_view,
    changes_approved_set,
    ensure_can_modify,
    ensure_privileged,
    is_owner,
    is_publicly_visible,
    status_after_edit,
    validate_status,
)

__all__ = [
    "can_modify",
    "can_view",
    "changes_approved_set",
    "ensure_can_modify",
    "ensure_privileged",
    "is_owner",
    "is_publicly_visible",
    "status_after_edit",
    "validate_status",
]
