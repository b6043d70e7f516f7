"""
Pydantic schemas for request and response validation.
"""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from zencure.constants import (
    MAX_CREDIBILITY,
    MAX_REVIEW_SCORE,
    MAX_SYMPTOM_RELEVANCE,
    MIN_CREDIBILITY,
    MIN_REVIEW_SCORE,
    MIN_SYMPTOM_RELEVANCE,
)

ReviewScore = Annotated[int, Field(ge=MIN_REVIEW_SCORE, le=MAX_REVIEW_SCORE)]
ModerationStatus = Literal["pending", "approved", "flagged"]


class MessageResponse(BaseModel):
    message: str


# =============================================================================
# Users & Auth
# =============================================================================


class HealthProfile(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    allergies: list[str] = Field(default_factory=list)
    conditions: list[str] = Field(default_factory=list)
    preferences: list[str] = Field(default_factory=list)


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    name: str = Field(min_length=1)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class ProfileUpdateRequest(BaseModel):
    name: str | None = None
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=6)
    health_profile: HealthProfile | None = None


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    role: str
    health_profile: HealthProfile | None = None
    created_at: datetime | None = None


class AuthResponse(BaseModel):
    user: UserResponse
    access_token: str
    token_type: str = "bearer"


class AuthorSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class RoleUpdateRequest(BaseModel):
    user_id: str | None = None
    role: str | None = None


class RoleUpdateResponse(BaseModel):
    message: str
    user: UserResponse


# =============================================================================
# Remedies & Sources
# =============================================================================


class SymptomSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str = Field(min_length=1)
    relevance_score: float = Field(ge=MIN_SYMPTOM_RELEVANCE, le=MAX_SYMPTOM_RELEVANCE)


class SourceSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    url: str
    credibility_score: int
    is_peer_reviewed: bool = False


class SourceResponse(SourceSummary):
    publication_date: datetime | None = None
    authors: list[str] = Field(default_factory=list)
    publisher: str = ""
    remedy_ids: list[str] = Field(default_factory=list)
    created_at: datetime | None = None


class RemedyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    categories: list[str] = Field(default_factory=list)
    symptoms: list[SymptomSchema] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    sources: list[SourceSummary] = Field(default_factory=list)
    avg_rating: float = 0.0
    review_count: int = 0
    verified: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class RemedyListResponse(BaseModel):
    remedies: list[RemedyResponse]
    page: int
    pages: int
    total: int


class RelevanceBreakdownResponse(BaseModel):
    rating: float
    symptoms: float
    credibility: float
    recency: float
    total: float


class ScoredRemedyResponse(RemedyResponse):
    calculated_relevance_score: float
    relevance_breakdown: RelevanceBreakdownResponse


class KeywordsRequest(BaseModel):
    keywords: list[str] | None = None


class RemedyCreateRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    categories: list[str] | None = None
    symptoms: list[SymptomSchema] | None = None
    warnings: list[str] = Field(default_factory=list)
    source_ids: list[str] | None = None
    verified: bool = False


class SourceCreateRequest(BaseModel):
    title: str | None = None
    url: str | None = None
    credibility_score: int | None = Field(default=None, ge=MIN_CREDIBILITY, le=MAX_CREDIBILITY)
    publication_date: datetime | None = None
    authors: list[str] = Field(default_factory=list)
    publisher: str | None = None
    is_peer_reviewed: bool = False
    remedy_ids: list[str] = Field(default_factory=list)


# =============================================================================
# Reviews & Comments
# =============================================================================


class ReviewCreateRequest(BaseModel):
    rating: ReviewScore
    effectiveness: ReviewScore
    side_effects: ReviewScore
    ease: ReviewScore
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)


class ReviewUpdateRequest(BaseModel):
    rating: ReviewScore | None = None
    effectiveness: ReviewScore | None = None
    side_effects: ReviewScore | None = None
    ease: ReviewScore | None = None
    title: str | None = None
    content: str | None = None
    status: ModerationStatus | None = None


class StatusUpdateRequest(BaseModel):
    # Left as a plain string so unknown values get the service's 400
    status: str | None = None


class ReviewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user: AuthorSummary
    remedy_id: str
    rating: int
    effectiveness: int
    side_effects: int
    ease: int
    title: str
    content: str
    helpful_count: int = 0
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ReviewListResponse(BaseModel):
    reviews: list[ReviewResponse]
    page: int
    pages: int
    total: int


class CommentCreateRequest(BaseModel):
    content: str = Field(min_length=1)


class CommentUpdateRequest(BaseModel):
    content: str | None = None
    status: ModerationStatus | None = None


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user: AuthorSummary
    review_id: str
    content: str
    helpful_count: int = 0
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CommentListResponse(BaseModel):
    comments: list[CommentResponse]
    page: int
    pages: int
    total: int
