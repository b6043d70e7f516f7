# Relevance scoring for matching remedies against symptom keywords

from collections.abc import Iterable
from dataclasses import asdict, dataclass
from datetime import datetime, timezone

from zencure.constants import (
    CREDIBILITY_WEIGHT,
    RATING_WEIGHT,
    RECENCY_DECAY_DAYS,
    RECENCY_MAX_POINTS,
    SECONDS_PER_DAY,
    SYMPTOM_RELEVANCE_DIVISOR,
)


@dataclass(frozen=True)
class RelevanceBreakdown:
    """Per-signal contributions to a remedy's relevance score."""

    rating: float
    symptoms: float
    credibility: float
    recency: float

    @property
    def total(self) -> float:
        return self.rating + self.symptoms + self.credibility + self.recency

    def to_dict(self) -> dict:
        data = asdict(self)
        data["total"] = self.total
        return data


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (as SQLite returns them) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def matching_symptoms(symptoms: Iterable, keywords: Iterable[str]) -> list:
    """
    Select the symptoms whose name is one of the keywords.

    Matching is exact string equality: no case folding, trimming or partial
    matches. The repository query uses the same rule to pick candidates.
    """
    keyword_set = set(keywords)
    return [symptom for symptom in symptoms if symptom.name in keyword_set]


def calculate_rating_score(avg_rating: float | None) -> float:
    """Scale a 0-5 average rating to 0-50 points."""
    return (avg_rating or 0.0) * RATING_WEIGHT


def calculate_symptom_score(symptoms: Iterable, keywords: Iterable[str]) -> float:
    """
    Sum relevance over matching symptoms, 0-10 points each.

    Not capped: a remedy matching several keywords earns points for each.
    """
    return sum(
        symptom.relevance_score / SYMPTOM_RELEVANCE_DIVISOR
        for symptom in matching_symptoms(symptoms, keywords)
    )


def calculate_credibility_score(credibility_scores: Iterable[float]) -> float:
    """
    Mean source credibility (1-10) scaled to 2-20 points.

    A remedy without sources contributes 0 rather than failing.
    """
    scores = list(credibility_scores)
    if not scores:
        return 0.0
    return (sum(scores) / len(scores)) * CREDIBILITY_WEIGHT


def calculate_recency_score(created_at: datetime | None, now: datetime | None = None) -> float:
    """
    Freshness bonus: 10 points when new, minus one point per 30 days, floored at 0.

    Args:
        created_at: When the remedy was created.
        now: Reference time; defaults to the current UTC time.
    """
    if created_at is None:
        return 0.0
    now = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    age_in_days = (now - _as_utc(created_at)).total_seconds() / SECONDS_PER_DAY
    return max(0.0, RECENCY_MAX_POINTS - age_in_days / RECENCY_DECAY_DAYS)


def get_relevance_breakdown(
    remedy, keywords: Iterable[str], now: datetime | None = None
) -> RelevanceBreakdown:
    """
    Score a single remedy against the keywords, signal by signal.

    Each remedy is scored on its own; nothing is normalized across candidates.
    """
    keywords = list(keywords)
    return RelevanceBreakdown(
        rating=calculate_rating_score(remedy.avg_rating),
        symptoms=calculate_symptom_score(remedy.symptoms, keywords),
        credibility=calculate_credibility_score(s.credibility_score for s in remedy.sources),
        recency=calculate_recency_score(remedy.created_at, now),
    )


def calculate_relevance_score(
    remedy, keywords: Iterable[str], now: datetime | None = None
) -> float:
    """Total relevance score for a remedy."""
    return get_relevance_breakdown(remedy, keywords, now).total


def rank_by_relevance(
    remedies: Iterable, keywords: Iterable[str], now: datetime | None = None
) -> list[tuple[object, RelevanceBreakdown]]:
    """
    Score every remedy and order them best first.

    The sort is stable, so equal scores keep the order they were given in.
    """
    keywords = list(keywords)
    now = now or datetime.now(timezone.utc)
    scored = [(remedy, get_relevance_breakdown(remedy, keywords, now)) for remedy in remedies]
    return sorted(scored, key=lambda pair: pair[1].total, reverse=True)
