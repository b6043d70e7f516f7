"""
Remedy rating aggregation.

A remedy's avg_rating and review_count are always a full re-derivation from
its approved reviews, so running the recomputation twice (or out of order
with another request) converges on the same values.
"""

from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy.orm import Session

from zencure.constants import AVG_RATING_DECIMALS
from zencure.logging import LogContext, aggregation_logger as logger
from zencure.repositories import RemedyRepository, ReviewRepository

_AVG_QUANTUM = Decimal(1).scaleb(-AVG_RATING_DECIMALS)


def round_rating(value: float) -> float:
    """Round half away from zero to one decimal (4.25 -> 4.3, not banker's 4.2)."""
    return float(Decimal(str(value)).quantize(_AVG_QUANTUM, rounding=ROUND_HALF_UP))


def compute_stats(ratings: list[int]) -> tuple[float, int]:
    """
    Derive (avg_rating, review_count) from approved ratings.

    An empty list yields (0.0, 0).
    """
    if not ratings:
        return 0.0, 0
    return round_rating(sum(ratings) / len(ratings)), len(ratings)


def recompute_remedy_stats(db: Session, remedy_id: str) -> tuple[float, int] | None:
    """
    Recompute and store a remedy's derived rating fields.

    Holds a row lock on the remedy so concurrent recomputations for the same
    remedy run one after another.

    Returns:
        The stored (avg_rating, review_count), or None if the remedy is gone.
    """
    remedy_repo = RemedyRepository(db)
    if remedy_repo.lock_for_update(remedy_id) is None:
        logger.warning("remedy_stats_skipped_missing_remedy", remedy_id=remedy_id)
        return None

    ratings = ReviewRepository(db).approved_ratings(remedy_id)
    avg_rating, review_count = compute_stats(ratings)
    remedy_repo.update_stats(remedy_id, avg_rating, review_count)

    logger.info(
        "remedy_stats_recomputed",
        remedy_id=remedy_id,
        avg_rating=avg_rating,
        review_count=review_count,
    )
    return avg_rating, review_count


def on_review_mutated(db: Session, remedy_id: str) -> bool:
    """
    Bring a remedy's stats in line after one of its reviews changed.

    Runs inside a SAVEPOINT: a failed recomputation is rolled back on its own
    and the review mutation that triggered it stays in the transaction.

    Returns:
        True when the stats were stored, False when recomputation failed.
    """
    with LogContext(remedy_id=remedy_id):
        try:
            with db.begin_nested():
                recompute_remedy_stats(db, remedy_id)
        except Exception as e:
            logger.error(
                "remedy_stats_recompute_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return False
    return True


__all__ = ["compute_stats", "on_review_mutated", "recompute_remedy_stats", "round_rating"]
