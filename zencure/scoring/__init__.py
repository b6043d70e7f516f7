"""
Remedy relevance scoring.

Usage:
    from zencure.scoring import rank_by_relevance
    ranked = rank_by_relevance(candidates, ["Headache"])
"""

from .relevance import (
    RelevanceBreakdown,
    calculate_credibility_score,
    calculate_rating_score,
    calculate_recency_score,
    calculate_relevance_score,
    calculate_symptom_score,
    get_relevance_breakdown,
    matching_symptoms,
    rank_by_relevance,
)

__all__ = [
    "RelevanceBreakdown",
    "calculate_credibility_score",
    "calculate_rating_score",
    "calculate_recency_score",
    "calculate_relevance_score",
    "calculate_symptom_score",
    "get_relevance_breakdown",
    "matching_symptoms",
    "rank_by_relevance",
]
