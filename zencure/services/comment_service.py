"""
Comment authoring and moderation.

Comments follow the same moderation rules as reviews but never touch remedy
stats.
"""

from typing import Any

from sqlalchemy.orm import Session

from zencure.constants import STATUS_PENDING
from zencure.exceptions import InputValidationError, NotFoundError
from zencure.identifiers import validate_id
from zencure.logging import get_logger, moderation_logger
from zencure.models import Comment, User
from zencure.moderation import (
    ensure_can_modify,
    ensure_privileged,
    is_owner,
    status_after_edit,
    validate_status,
)
from zencure.repositories import CommentRepository, ReviewRepository

from .pagination import Page, make_page, offset_for

logger = get_logger("services.comment")


def _load_comment(db: Session, comment_id: str) -> Comment:
    comment_id = validate_id(comment_id, "comment")
    comment = CommentRepository(db).get_by_id(comment_id)
    if comment is None:
        raise NotFoundError("comment not found")
    return comment


def _require_review(db: Session, review_id: str) -> str:
    review_id = validate_id(review_id, "review")
    if ReviewRepository(db).get_by_id(review_id) is None:
        raise NotFoundError("review not found")
    return review_id


def list_comments_for_review(
    db: Session, review_id: str, page: int = 1, limit: int = 10
) -> Page[Comment]:
    review_id = _require_review(db, review_id)
    comments, total = CommentRepository(db).list_approved_by_review(
        review_id, offset=offset_for(page, limit), limit=limit
    )
    return make_page(comments, total, page, limit)


def create_comment(db: Session, actor: User, review_id: str, content: str | None) -> Comment:
    """Add a pending comment to an existing review."""
    review_id = validate_id(review_id, "review")
    if not content or not content.strip():
        raise InputValidationError("content is required")
    if ReviewRepository(db).get_by_id(review_id) is None:
        raise NotFoundError("review not found")

    comment = CommentRepository(db).create(
        user_id=actor.id,
        review_id=review_id,
        content=content,
        status=STATUS_PENDING,
        helpful_count=0,
    )
    logger.info("comment_created", comment_id=comment.id, review_id=review_id, user_id=actor.id)
    return comment


def update_comment(db: Session, actor: User, comment_id: str, changes: dict[str, Any]) -> Comment:
    """Edit a comment. Author edits send it back to pending."""
    comment = _load_comment(db, comment_id)
    ensure_can_modify(actor, comment.user_id, "update", "comment")

    updates: dict[str, Any] = {}
    if changes.get("content"):
        updates["content"] = changes["content"]
    updates["status"] = status_after_edit(actor, comment.status, changes.get("status"))
    CommentRepository(db).update(comment, **updates)

    logger.info("comment_updated", comment_id=comment.id, status=comment.status)
    return comment


def delete_comment(db: Session, actor: User, comment_id: str) -> None:
    comment = _load_comment(db, comment_id)
    ensure_can_modify(actor, comment.user_id, "delete", "comment")
    CommentRepository(db).delete(comment)
    logger.info("comment_deleted", comment_id=comment_id, user_id=actor.id)


def mark_comment_helpful(db: Session, actor: User, comment_id: str) -> Comment:
    comment = _load_comment(db, comment_id)
    if is_owner(actor, comment.user_id):
        raise InputValidationError("cannot mark your own comment as helpful")

    CommentRepository(db).increment(comment, "helpful_count")
    return comment


def list_pending_comments(
    db: Session, actor: User, page: int = 1, limit: int = 10
) -> Page[Comment]:
    ensure_privileged(actor)
    comments, total = CommentRepository(db).list_by_status(
        STATUS_PENDING, offset=offset_for(page, limit), limit=limit
    )
    return make_page(comments, total, page, limit)


def update_comment_status(db: Session, actor: User, comment_id: str, status: str) -> Comment:
    """Moderate a comment. Remedy stats are not affected."""
    status = validate_status(status)
    comment = _load_comment(db, comment_id)
    ensure_privileged(actor)

    before = comment.status
    CommentRepository(db).update(comment, status=status)
    moderation_logger.info(
        "comment_status_updated",
        comment_id=comment.id,
        moderator_id=actor.id,
        before=before,
        after=status,
    )
    return comment


__all__ = [
    "create_comment",
    "delete_comment",
    "list_comments_for_review",
    "list_pending_comments",
    "mark_comment_helpful",
    "update_comment",
    "update_comment_status",
]
