"""
Admin catalogue and user management.

Remedies and sources are created here; their derived rating fields start at
zero and are only changed later by the aggregation service.
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from zencure.constants import (
    MAX_CREDIBILITY,
    MAX_SYMPTOM_RELEVANCE,
    MIN_CREDIBILITY,
    MIN_SYMPTOM_RELEVANCE,
    USER_ROLES,
)
from zencure.exceptions import ConflictError, InputValidationError, NotFoundError
from zencure.identifiers import validate_id
from zencure.logging import get_logger
from zencure.models import Comment, Remedy, RemedySymptom, Review, Source, User
from zencure.moderation import ensure_privileged, validate_status
from zencure.repositories import (
    CommentRepository,
    RemedyRepository,
    ReviewRepository,
    SourceRepository,
    UserRepository,
)

logger = get_logger("services.admin")

REQUIRED_TEXT_FIELDS = ("name", "description")
REQUIRED_LIST_FIELDS = ("categories", "symptoms", "source_ids")


def list_users(db: Session) -> list[User]:
    return UserRepository(db).list_all()


def update_user_role(db: Session, user_id: str | None, role: str | None) -> User:
    if not user_id or not role:
        raise InputValidationError("User ID and role are required")
    if role not in USER_ROLES:
        raise InputValidationError("Invalid role. Must be user, moderator, or admin")
    user_id = validate_id(user_id, "user")

    repo = UserRepository(db)
    user = repo.get_by_id(user_id)
    if user is None:
        raise NotFoundError("user not found")

    previous = user.role
    repo.update(user, role=role)
    logger.info("user_role_updated", user_id=user.id, before=previous, after=role)
    return user


def _build_symptoms(symptoms: list[dict[str, Any]]) -> list[RemedySymptom]:
    built = []
    for position, symptom in enumerate(symptoms):
        name = symptom.get("name")
        score = symptom.get("relevance_score")
        if not name or score is None:
            raise InputValidationError("each symptom needs a name and relevance_score")
        if not MIN_SYMPTOM_RELEVANCE <= score <= MAX_SYMPTOM_RELEVANCE:
            raise InputValidationError(
                f"relevance_score must be between {MIN_SYMPTOM_RELEVANCE} "
                f"and {MAX_SYMPTOM_RELEVANCE}"
            )
        built.append(RemedySymptom(name=name, relevance_score=score, position=position))
    return built


def _load_sources(db: Session, source_ids: list[str]) -> list[Source]:
    """Resolve ids in order; each id's format is checked just before its lookup."""
    repo = SourceRepository(db)
    sources = []
    for source_id in source_ids:
        source_id = validate_id(source_id, "source")
        source = repo.get_by_id(source_id)
        if source is None:
            raise NotFoundError(f"Source with ID {source_id} not found")
        sources.append(source)
    return sources


def create_remedy(db: Session, data: dict[str, Any]) -> Remedy:
    """
    Create a remedy linked to existing sources.

    Requires a name and description, plus categories, symptoms and source_ids
    lists (which may be empty). The sources gain the new remedy as a
    back-reference.

    Raises:
        InputValidationError: Missing fields, bad symptom or bad source id.
        ConflictError: A remedy with the same name exists.
        NotFoundError: A source id does not exist.
    """
    missing_text = any(not data.get(name) for name in REQUIRED_TEXT_FIELDS)
    missing_list = any(data.get(name) is None for name in REQUIRED_LIST_FIELDS)
    if missing_text or missing_list:
        raise InputValidationError("Missing required fields")

    symptoms = _build_symptoms(data["symptoms"])
    repo = RemedyRepository(db)
    if repo.get_by_name(data["name"]) is not None:
        raise ConflictError("A remedy with this name already exists")
    sources = _load_sources(db, data["source_ids"])

    remedy = repo.create(
        name=data["name"],
        description=data["description"],
        categories=list(data["categories"]),
        warnings=list(data.get("warnings") or []),
        verified=bool(data.get("verified", False)),
        avg_rating=0.0,
        review_count=0,
        symptoms=symptoms,
        sources=sources,
    )
    logger.info(
        "remedy_created",
        remedy_id=remedy.id,
        symptoms=len(symptoms),
        sources=len(sources),
    )
    return remedy


def create_source(db: Session, data: dict[str, Any]) -> Source:
    """
    Create a source, optionally linking it to existing remedies.

    Defaults: publication_date now, no authors, empty publisher, not peer reviewed.
    """
    if not data.get("title") or not data.get("url") or not data.get("credibility_score"):
        raise InputValidationError("Missing required fields")
    credibility = data["credibility_score"]
    if not MIN_CREDIBILITY <= credibility <= MAX_CREDIBILITY:
        raise InputValidationError(
            f"credibility_score must be between {MIN_CREDIBILITY} and {MAX_CREDIBILITY}"
        )

    repo = SourceRepository(db)
    if repo.get_by_url(data["url"]) is not None:
        raise ConflictError("A source with this URL already exists")

    remedies = []
    remedy_repo = RemedyRepository(db)
    for remedy_id in data.get("remedy_ids") or []:
        remedy_id = validate_id(remedy_id, "remedy")
        remedy = remedy_repo.get_by_id(remedy_id)
        if remedy is None:
            raise NotFoundError(f"Remedy with ID {remedy_id} not found")
        remedies.append(remedy)

    source = repo.create(
        title=data["title"],
        url=data["url"],
        credibility_score=credibility,
        publication_date=data.get("publication_date") or datetime.now(timezone.utc),
        authors=list(data.get("authors") or []),
        publisher=data.get("publisher") or "",
        is_peer_reviewed=bool(data.get("is_peer_reviewed", False)),
        remedies=remedies,
    )
    logger.info("source_created", source_id=source.id, remedies=len(remedies))
    return source


def list_sources(db: Session) -> list[Source]:
    return SourceRepository(db).list_all()


def list_unique_symptoms(db: Session) -> list[str]:
    return RemedyRepository(db).unique_symptom_names()


def list_reviews(
    db: Session,
    actor: User,
    status: str | None = None,
    remedy_id: str | None = None,
    user_id: str | None = None,
) -> list[Review]:
    """All reviews regardless of status, with optional filters. Moderators and admins only."""
    ensure_privileged(actor)
    if status:
        validate_status(status)
    if remedy_id:
        remedy_id = validate_id(remedy_id, "remedy")
    if user_id:
        user_id = validate_id(user_id, "user")
    return ReviewRepository(db).list_filtered(status=status, remedy_id=remedy_id, user_id=user_id)


def list_comments(db: Session, actor: User) -> list[Comment]:
    ensure_privileged(actor)
    return CommentRepository(db).list_all()


__all__ = [
    "create_remedy",
    "create_source",
    "list_comments",
    "list_reviews",
    "list_sources",
    "list_unique_symptoms",
    "list_users",
    "update_user_role",
]
