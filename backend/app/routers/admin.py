"""
Admin endpoints: user roles and catalogue management.

Moderators may also read the full review and comment listings.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from zencure.db import get_db
from zencure.models import User
from zencure.services import admin_service

from ..auth.dependencies import require_admin, require_moderator
from ..schemas import (
    CommentResponse,
    RemedyCreateRequest,
    RemedyResponse,
    ReviewResponse,
    RoleUpdateRequest,
    RoleUpdateResponse,
    SourceCreateRequest,
    SourceResponse,
    UserResponse,
)

router = APIRouter(prefix="/admin", tags=["admin"])


# =============================================================================
# Users
# =============================================================================


@router.get("/users", response_model=list[UserResponse])
def list_users(db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    return [UserResponse.model_validate(user) for user in admin_service.list_users(db)]


@router.put("/users/role", response_model=RoleUpdateResponse)
def update_user_role(
    payload: RoleUpdateRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    user = admin_service.update_user_role(db, payload.user_id, payload.role)
    return RoleUpdateResponse(
        message="User role updated successfully",
        user=UserResponse.model_validate(user),
    )


# =============================================================================
# Catalogue
# =============================================================================


@router.post("/remedies", response_model=RemedyResponse, status_code=status.HTTP_201_CREATED)
def create_remedy(
    payload: RemedyCreateRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    remedy = admin_service.create_remedy(db, payload.model_dump())
    return RemedyResponse.model_validate(remedy)


@router.post("/sources", response_model=SourceResponse, status_code=status.HTTP_201_CREATED)
def create_source(
    payload: SourceCreateRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    source = admin_service.create_source(db, payload.model_dump())
    return SourceResponse.model_validate(source)


@router.get("/sources", response_model=list[SourceResponse])
def list_sources(db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    return [SourceResponse.model_validate(source) for source in admin_service.list_sources(db)]


@router.get("/symptoms", response_model=list[str])
def list_symptoms(db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    """Sorted distinct symptom names, for building remedy forms."""
    return admin_service.list_unique_symptoms(db)


# =============================================================================
# Moderation listings
# =============================================================================


@router.get("/reviews", response_model=list[ReviewResponse])
def list_reviews(
    status_filter: str | None = Query(None, alias="status"),
    remedy_id: str | None = Query(None),
    user_id: str | None = Query(None),
    db: Session = Depends(get_db),
    moderator: User = Depends(require_moderator),
):
    """Every review in any state, optionally filtered."""
    reviews = admin_service.list_reviews(
        db, moderator, status=status_filter, remedy_id=remedy_id, user_id=user_id
    )
    return [ReviewResponse.model_validate(review) for review in reviews]


@router.get("/comments", response_model=list[CommentResponse])
def list_comments(db: Session = Depends(get_db), moderator: User = Depends(require_moderator)):
    comments = admin_service.list_comments(db, moderator)
    return [CommentResponse.model_validate(comment) for comment in comments]
