"""
Review authoring and moderation.

Every operation that can change a remedy's set of approved reviews (create,
update, delete, status change) finishes by recomputing that remedy's stats.
Recomputation failures do not undo the review change; they come back as
``stats_synced=False`` on the result.

Checks run in a fixed order: identifier format, existence, authorization,
uniqueness, then the write.
"""

from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from zencure.constants import MAX_REVIEW_SCORE, MIN_REVIEW_SCORE, STATUS_PENDING
from zencure.exceptions import ConflictError, InputValidationError, NotFoundError
from zencure.identifiers import validate_id
from zencure.logging import get_logger, moderation_logger
from zencure.models import Review, User
from zencure.moderation import (
    can_view,
    changes_approved_set,
    ensure_can_modify,
    ensure_privileged,
    is_owner,
    status_after_edit,
    validate_status,
)
from zencure.repositories import RemedyRepository, ReviewRepository

from . import aggregation_service
from .pagination import Page, make_page, offset_for

logger = get_logger("services.review")

SCORE_FIELDS = ("rating", "effectiveness", "side_effects", "ease")
REQUIRED_FIELDS = (*SCORE_FIELDS, "title", "content")
EDITABLE_FIELDS = REQUIRED_FIELDS


@dataclass
class ReviewResult:
    """Outcome of a review write. ``review`` is None after a delete."""

    review: Review | None
    stats_synced: bool = True


def _validate_scores(data: dict[str, Any]) -> None:
    for name in SCORE_FIELDS:
        value = data.get(name)
        if value is None:
            continue
        if (
            isinstance(value, bool)
            or not isinstance(value, int)
            or not MIN_REVIEW_SCORE <= value <= MAX_REVIEW_SCORE
        ):
            raise InputValidationError(
                f"{name} must be an integer between {MIN_REVIEW_SCORE} and {MAX_REVIEW_SCORE}"
            )


def _load_review(db: Session, review_id: str) -> Review:
    review_id = validate_id(review_id, "review")
    review = ReviewRepository(db).get_by_id(review_id)
    if review is None:
        raise NotFoundError("review not found")
    return review


def _sync_stats(db: Session, remedy_id: str, before: str | None, after: str | None) -> bool:
    if changes_approved_set(before, after):
        moderation_logger.info(
            "approved_set_changed", remedy_id=remedy_id, before=before, after=after
        )
    return aggregation_service.on_review_mutated(db, remedy_id)


def list_reviews_for_remedy(
    db: Session, remedy_id: str, page: int = 1, limit: int = 10
) -> Page[Review]:
    """Approved reviews for a remedy, newest first."""
    remedy_id = validate_id(remedy_id, "remedy")
    if RemedyRepository(db).get_by_id(remedy_id) is None:
        raise NotFoundError("remedy not found")
    reviews, total = ReviewRepository(db).list_approved_by_remedy(
        remedy_id, offset=offset_for(page, limit), limit=limit
    )
    return make_page(reviews, total, page, limit)


def get_review(db: Session, actor: User | None, review_id: str) -> Review:
    """
    Fetch one review.

    Approved reviews are public. Pending and flagged reviews are only shown to
    their author and to moderators/admins; everyone else gets NotFoundError.
    """
    review = _load_review(db, review_id)
    if not can_view(actor, review.status, review.user_id):
        raise NotFoundError("review not found")
    return review


def create_review(db: Session, actor: User, remedy_id: str, data: dict[str, Any]) -> ReviewResult:
    """
    Create a pending review by ``actor`` for a remedy.

    Raises:
        InputValidationError: Bad remedy id, missing fields or out-of-range scores.
        NotFoundError: Remedy does not exist.
        ConflictError: The actor already reviewed this remedy.
    """
    remedy_id = validate_id(remedy_id, "remedy")
    if any(data.get(name) in (None, "") for name in REQUIRED_FIELDS):
        raise InputValidationError("Missing required fields")
    _validate_scores(data)

    if RemedyRepository(db).get_by_id(remedy_id) is None:
        raise NotFoundError("remedy not found")

    repo = ReviewRepository(db)
    if repo.get_by_author_and_remedy(actor.id, remedy_id) is not None:
        raise ConflictError("you have already reviewed this remedy")

    try:
        with db.begin_nested():
            review = repo.create(
                user_id=actor.id,
                remedy_id=remedy_id,
                status=STATUS_PENDING,
                helpful_count=0,
                **{name: data[name] for name in REQUIRED_FIELDS},
            )
    except IntegrityError:
        # Lost a race with a concurrent create by the same author
        raise ConflictError("you have already reviewed this remedy") from None

    logger.info("review_created", review_id=review.id, remedy_id=remedy_id, user_id=actor.id)
    stats_synced = _sync_stats(db, remedy_id, None, review.status)
    return ReviewResult(review=review, stats_synced=stats_synced)


def update_review(
    db: Session, actor: User, review_id: str, changes: dict[str, Any]
) -> ReviewResult:
    """
    Edit a review.

    Fields not present in ``changes`` (or set to None or "") keep their value. An
    author edit sends the review back to pending; moderators and admins may
    pass ``status`` and otherwise leave it as it was.
    """
    review = _load_review(db, review_id)
    ensure_can_modify(actor, review.user_id, "update", "review")
    _validate_scores(changes)

    before = review.status
    updates = {
        name: changes[name] for name in EDITABLE_FIELDS if changes.get(name) not in (None, "")
    }
    updates["status"] = status_after_edit(actor, review.status, changes.get("status"))
    ReviewRepository(db).update(review, **updates)

    logger.info(
        "review_updated",
        review_id=review.id,
        remedy_id=review.remedy_id,
        fields=sorted(updates),
        status=review.status,
    )
    stats_synced = _sync_stats(db, review.remedy_id, before, review.status)
    return ReviewResult(review=review, stats_synced=stats_synced)


def delete_review(db: Session, actor: User, review_id: str) -> ReviewResult:
    """Delete a review and its comments. Allowed for the author and moderators/admins."""
    review = _load_review(db, review_id)
    ensure_can_modify(actor, review.user_id, "delete", "review")

    remedy_id = review.remedy_id
    before = review.status
    ReviewRepository(db).delete(review)

    logger.info("review_deleted", review_id=review_id, remedy_id=remedy_id, user_id=actor.id)
    stats_synced = _sync_stats(db, remedy_id, before, None)
    return ReviewResult(review=None, stats_synced=stats_synced)


def mark_review_helpful(db: Session, actor: User, review_id: str) -> Review:
    """
    Add one to a review's helpful count.

    Any status counts; only the author is turned away.

    Raises:
        InputValidationError: The actor wrote the review.
    """
    review = _load_review(db, review_id)
    if is_owner(actor, review.user_id):
        raise InputValidationError("cannot mark your own review as helpful")

    ReviewRepository(db).increment(review, "helpful_count")
    logger.info("review_marked_helpful", review_id=review.id, helpful_count=review.helpful_count)
    return review


def list_pending_reviews(db: Session, actor: User, page: int = 1, limit: int = 10) -> Page[Review]:
    ensure_privileged(actor)
    reviews, total = ReviewRepository(db).list_by_status(
        STATUS_PENDING, offset=offset_for(page, limit), limit=limit
    )
    return make_page(reviews, total, page, limit)


def update_review_status(db: Session, actor: User, review_id: str, status: str) -> ReviewResult:
    """
    Moderate a review: set its status to pending, approved or flagged.

    The remedy's stats are recomputed on every status change, including
    moves between pending and flagged.
    """
    status = validate_status(status)
    review = _load_review(db, review_id)
    ensure_privileged(actor)

    before = review.status
    ReviewRepository(db).update(review, status=status)

    moderation_logger.info(
        "review_status_updated",
        review_id=review.id,
        remedy_id=review.remedy_id,
        moderator_id=actor.id,
        before=before,
        after=status,
    )
    stats_synced = _sync_stats(db, review.remedy_id, before, status)
    return ReviewResult(review=review, stats_synced=stats_synced)


__all__ = [
    "ReviewResult",
    "create_review",
    "delete_review",
    "get_review",
    "list_pending_reviews",
    "list_reviews_for_remedy",
    "mark_review_helpful",
    "update_review",
    "update_review_status",
]
