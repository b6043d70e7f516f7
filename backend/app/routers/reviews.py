"""
Review endpoints, including the moderation queue.

Writes that can change a remedy's rating summary set the
``X-Remedy-Stats-Stale: true`` header when the summary could not be updated.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from zencure.db import get_db
from zencure.models import User
from zencure.services import review_service

from ..auth.dependencies import get_current_user, get_optional_user, require_moderator
from ..dependencies import Pagination, flag_stale_stats, get_pagination
from ..schemas import (
    MessageResponse,
    ReviewCreateRequest,
    ReviewListResponse,
    ReviewResponse,
    ReviewUpdateRequest,
    StatusUpdateRequest,
)

router = APIRouter(prefix="/reviews", tags=["reviews"])


def _review_list(page) -> ReviewListResponse:
    return ReviewListResponse(
        reviews=[ReviewResponse.model_validate(review) for review in page.items],
        page=page.page,
        pages=page.pages,
        total=page.total,
    )


# =============================================================================
# Moderation
# =============================================================================


@router.get("/moderation/pending", response_model=ReviewListResponse)
def list_pending_reviews(
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    moderator: User = Depends(require_moderator),
):
    page = review_service.list_pending_reviews(
        db, moderator, page=pagination.page, limit=pagination.limit
    )
    return _review_list(page)


@router.put("/{review_id}/status", response_model=ReviewResponse)
def update_review_status(
    review_id: str,
    payload: StatusUpdateRequest,
    response: Response,
    db: Session = Depends(get_db),
    moderator: User = Depends(require_moderator),
):
    """Approve, flag or re-queue a review."""
    result = review_service.update_review_status(db, moderator, review_id, payload.status)
    flag_stale_stats(response, result.stats_synced)
    return ReviewResponse.model_validate(result.review)


# =============================================================================
# Reading
# =============================================================================


@router.get("/remedy/{remedy_id}", response_model=ReviewListResponse)
def list_remedy_reviews(
    remedy_id: str,
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
):
    """Approved reviews for a remedy, newest first."""
    page = review_service.list_reviews_for_remedy(
        db, remedy_id, page=pagination.page, limit=pagination.limit
    )
    return _review_list(page)


@router.get("/{review_id}", response_model=ReviewResponse)
def get_review(
    review_id: str,
    db: Session = Depends(get_db),
    current_user: User | None = Depends(get_optional_user),
):
    return ReviewResponse.model_validate(review_service.get_review(db, current_user, review_id))


# =============================================================================
# Writing
# =============================================================================


@router.post(
    "/remedy/{remedy_id}",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_review(
    remedy_id: str,
    payload: ReviewCreateRequest,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Submit a review. It stays pending until a moderator approves it."""
    result = review_service.create_review(db, current_user, remedy_id, payload.model_dump())
    flag_stale_stats(response, result.stats_synced)
    return ReviewResponse.model_validate(result.review)


@router.put("/{review_id}", response_model=ReviewResponse)
def update_review(
    review_id: str,
    payload: ReviewUpdateRequest,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    result = review_service.update_review(
        db, current_user, review_id, payload.model_dump(exclude_unset=True)
    )
    flag_stale_stats(response, result.stats_synced)
    return ReviewResponse.model_validate(result.review)


@router.delete("/{review_id}", response_model=MessageResponse)
def delete_review(
    review_id: str,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    result = review_service.delete_review(db, current_user, review_id)
    flag_stale_stats(response, result.stats_synced)
    return MessageResponse(message="review removed")


@router.post("/{review_id}/helpful", response_model=ReviewResponse)
def mark_review_helpful(
    review_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    review = review_service.mark_review_helpful(db, current_user, review_id)
    return ReviewResponse.model_validate(review)
