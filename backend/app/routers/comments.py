"""
Comment endpoints, including the moderation queue.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from zencure.db import get_db
from zencure.models import User
from zencure.services import comment_service

from ..auth.dependencies import get_current_user, require_moderator
from ..dependencies import Pagination, get_pagination
from ..schemas import (
    CommentCreateRequest,
    CommentListResponse,
    CommentResponse,
    CommentUpdateRequest,
    MessageResponse,
    StatusUpdateRequest,
)

router = APIRouter(prefix="/comments", tags=["comments"])


def _comment_list(page) -> CommentListResponse:
    return CommentListResponse(
        comments=[CommentResponse.model_validate(comment) for comment in page.items],
        page=page.page,
        pages=page.pages,
        total=page.total,
    )


@router.get("/moderation/pending", response_model=CommentListResponse)
def list_pending_comments(
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    moderator: User = Depends(require_moderator),
):
    page = comment_service.list_pending_comments(
        db, moderator, page=pagination.page, limit=pagination.limit
    )
    return _comment_list(page)


@router.put("/{comment_id}/status", response_model=CommentResponse)
def update_comment_status(
    comment_id: str,
    payload: StatusUpdateRequest,
    db: Session = Depends(get_db),
    moderator: User = Depends(require_moderator),
):
    comment = comment_service.update_comment_status(db, moderator, comment_id, payload.status)
    return CommentResponse.model_validate(comment)


@router.get("/review/{review_id}", response_model=CommentListResponse)
def list_review_comments(
    review_id: str,
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
):
    """Approved comments on a review, newest first."""
    page = comment_service.list_comments_for_review(
        db, review_id, page=pagination.page, limit=pagination.limit
    )
    return _comment_list(page)


@router.post(
    "/review/{review_id}",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_comment(
    review_id: str,
    payload: CommentCreateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    comment = comment_service.create_comment(db, current_user, review_id, payload.content)
    return CommentResponse.model_validate(comment)


@router.put("/{comment_id}", response_model=CommentResponse)
def update_comment(
    comment_id: str,
    payload: CommentUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    comment = comment_service.update_comment(
        db, current_user, comment_id, payload.model_dump(exclude_unset=True)
    )
    return CommentResponse.model_validate(comment)


@router.delete("/{comment_id}", response_model=MessageResponse)
def delete_comment(
    comment_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    comment_service.delete_comment(db, current_user, comment_id)
    return MessageResponse(message="comment removed")


@router.post("/{comment_id}/helpful", response_model=CommentResponse)
def mark_comment_helpful(
    comment_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    comment = comment_service.mark_comment_helpful(db, current_user, comment_id)
    return CommentResponse.model_validate(comment)
