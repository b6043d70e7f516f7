"""
Moderation state machine shared by reviews and comments.

States:
    pending  - initial; hidden from public reads
    approved - visible
    flagged  - hidden; a moderator may move it back to pending or approved

Authors editing their own content always send it back to pending.
Moderators and admins set whatever status they supply.
"""

from zencure.constants import MODERATION_STATUSES, STATUS_APPROVED, STATUS_PENDING
from zencure.exceptions import AuthorizationError, InputValidationError


def validate_status(status: str | None) -> str:
    """Return ``status`` if it is a moderation state, else raise InputValidationError."""
    if status not in MODERATION_STATUSES:
        raise InputValidationError("invalid status value")
    return status


def is_owner(actor, owner_id: str) -> bool:
    return actor is not None and actor.id == owner_id


def can_modify(actor, owner_id: str) -> bool:
    """Owners and moderators/admins may edit or delete an item."""
    return is_owner(actor, owner_id) or (actor is not None and actor.is_privileged)


def ensure_can_modify(actor, owner_id: str, action: str, noun: str) -> None:
    if not can_modify(actor, owner_id):
        raise AuthorizationError(f"not authorized to {action} this {noun}")


def ensure_privileged(actor) -> None:
    if actor is None or not actor.is_privileged:
        raise AuthorizationError("access forbidden")


def status_after_edit(actor, current: str, requested: str | None = None) -> str:
    """
    Resolve the status of an item after ``actor`` edits it.

    Privileged actors keep the current status unless they pass one; everyone
    else resets the item to pending so it is moderated again.
    """
    if actor is not None and actor.is_privileged:
        return validate_status(requested) if requested else current
    return STATUS_PENDING


def is_publicly_visible(status: str) -> bool:
    return status == STATUS_APPROVED


def can_view(actor, status: str, owner_id: str) -> bool:
    """Approved items are public; others only to their author and moderators."""
    return is_publicly_visible(status) or can_modify(actor, owner_id)


def changes_approved_set(before: str | None, after: str | None) -> bool:
    """
    True when a transition moves an item into or out of the approved state.

    ``None`` stands for "no record" (before creation, after deletion).
    """
    return (before == STATUS_APPROVED) != (after == STATUS_APPROVED)
