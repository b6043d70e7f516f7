"""
Remedy read paths: listing, lookup, and symptom search.

Two search flavors share one matching rule (exact symptom name equality):
    search_remedies  - candidates only, best rated first
    query_remedies   - candidates scored by relevance, highest score first
"""

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from zencure.exceptions import InputValidationError, NotFoundError
from zencure.identifiers import validate_id
from zencure.logging import log_timing, scoring_logger
from zencure.models import Remedy
from zencure.repositories import RemedyRepository
from zencure.scoring import RelevanceBreakdown, rank_by_relevance

from .pagination import Page, make_page, offset_for


@dataclass
class ScoredRemedy:
    remedy: Remedy
    breakdown: RelevanceBreakdown

    @property
    def calculated_relevance_score(self) -> float:
        return self.breakdown.total


def _validate_keywords(keywords) -> list[str]:
    """Keywords must be a non-empty list of strings."""
    if not isinstance(keywords, (list, tuple)) or not keywords:
        raise InputValidationError("keywords array required")
    if not all(isinstance(keyword, str) for keyword in keywords):
        raise InputValidationError("keywords array required")
    return list(keywords)


def list_remedies(db: Session, page: int = 1, limit: int = 10) -> Page[Remedy]:
    """Page through all remedies, best rated first."""
    repo = RemedyRepository(db)
    total = repo.count()
    remedies = repo.list_by_rating(offset=offset_for(page, limit), limit=limit)
    return make_page(remedies, total, page, limit)


def get_remedy(db: Session, remedy_id: str) -> Remedy:
    remedy_id = validate_id(remedy_id, "remedy")
    remedy = RemedyRepository(db).get_by_id(remedy_id)
    if remedy is None:
        raise NotFoundError("remedy not found")
    return remedy


def search_remedies(db: Session, keywords) -> list[Remedy]:
    """
    Find remedies with at least one symptom named exactly as a keyword.

    Raises:
        InputValidationError: If keywords is missing or empty.
    """
    keywords = _validate_keywords(keywords)
    remedies = RemedyRepository(db).find_by_symptom_names(keywords, order_by_rating=True)
    scoring_logger.info("remedy_search", keywords=len(keywords), results=len(remedies))
    return remedies


@log_timing("remedy_query", logger=scoring_logger)
def query_remedies(db: Session, keywords, now: datetime | None = None) -> list[ScoredRemedy]:
    """
    Rank matching remedies by relevance to the keywords.

    Every remedy with at least one exactly matching symptom is returned, each
    scored on rating, matched symptom relevance, source credibility and
    recency. Equal scores keep the store's discovery order.

    Args:
        db: Database session.
        keywords: Symptom names to match.
        now: Reference time for the recency signal; defaults to now (UTC).

    Raises:
        InputValidationError: If keywords is missing or empty.
    """
    keywords = _validate_keywords(keywords)
    candidates = RemedyRepository(db).find_by_symptom_names(keywords)
    ranked = rank_by_relevance(candidates, keywords, now)

    scoring_logger.info(
        "remedy_query_ranked",
        keywords=len(keywords),
        candidates=len(candidates),
        top_score=round(ranked[0][1].total, 2) if ranked else None,
    )
    return [ScoredRemedy(remedy=remedy, breakdown=breakdown) for remedy, breakdown in ranked]


__all__ = [
    "ScoredRemedy",
    "get_remedy",
    "list_remedies",
    "query_remedies",
    "search_remedies",
]
