"""
Tests for remedy rating aggregation.
"""

import pytest
from sqlalchemy.exc import OperationalError

from zencure.constants import STATUS_APPROVED, STATUS_FLAGGED, STATUS_PENDING
from zencure.models import Remedy, Review
from zencure.repositories import RemedyRepository
from zencure.services import aggregation_service, review_service
from zencure.services.aggregation_service import compute_stats, round_rating


def failing_update_stats(self, remedy_id, avg_rating, review_count):
    raise OperationalError("UPDATE remedies", {}, Exception("database is locked"))


class TestComputeStats:
    def test_no_ratings(self):
        assert compute_stats([]) == (0.0, 0)

    def test_single_rating(self):
        assert compute_stats([4]) == (4.0, 1)

    def test_rounds_to_one_decimal(self):
        assert compute_stats([5, 4, 4]) == (4.3, 3)

    def test_half_rounds_up(self):
        """4.25 becomes 4.3, not the banker's-rounded 4.2."""
        assert compute_stats([4, 5, 4, 4]) == (4.3, 4)
        assert round_rating(4.25) == 4.3
        assert round_rating(3.75) == 3.8


class TestRecomputeRemedyStats:
    def test_only_approved_reviews_count(self, test_session, users, remedy, make_review):
        make_review(test_session, users["author"], remedy, rating=5, status=STATUS_APPROVED)
        make_review(test_session, users["other"], remedy, rating=1, status=STATUS_PENDING)
        make_review(test_session, users["moderator"], remedy, rating=2, status=STATUS_FLAGGED)

        result = aggregation_service.recompute_remedy_stats(test_session, remedy.id)

        assert result == (5.0, 1)
        test_session.refresh(remedy)
        assert remedy.avg_rating == 5.0
        assert remedy.review_count == 1

    def test_resets_to_zero_when_nothing_approved(self, test_session, remedy):
        remedy.avg_rating = 3.5
        remedy.review_count = 2
        test_session.flush()

        aggregation_service.recompute_remedy_stats(test_session, remedy.id)

        test_session.refresh(remedy)
        assert (remedy.avg_rating, remedy.review_count) == (0.0, 0)

    def test_missing_remedy_is_skipped(self, test_session):
        missing_id = "00000000-0000-4000-8000-000000000000"
        assert aggregation_service.recompute_remedy_stats(test_session, missing_id) is None

    def test_idempotent(self, test_session, users, remedy, make_review):
        make_review(test_session, users["author"], remedy, rating=3, status=STATUS_APPROVED)

        first = aggregation_service.recompute_remedy_stats(test_session, remedy.id)
        second = aggregation_service.recompute_remedy_stats(test_session, remedy.id)

        assert first == second == (3.0, 1)


class TestModerationScenario:
    """Pending reviews are invisible to the stats until approved."""

    def test_pending_approve_flag(self, test_session, users, remedy, review_payload):
        author, moderator = users["author"], users["moderator"]

        created = review_service.create_review(
            test_session, author, remedy.id, review_payload(rating=4)
        )
        test_session.refresh(remedy)
        assert created.review.status == STATUS_PENDING
        assert (remedy.avg_rating, remedy.review_count) == (0.0, 0)

        review_service.update_review_status(
            test_session, moderator, created.review.id, STATUS_APPROVED
        )
        test_session.refresh(remedy)
        assert (remedy.avg_rating, remedy.review_count) == (4.0, 1)

        review_service.update_review_status(
            test_session, moderator, created.review.id, STATUS_FLAGGED
        )
        test_session.refresh(remedy)
        assert (remedy.avg_rating, remedy.review_count) == (0.0, 0)

    def test_author_edit_of_approved_review_drops_it(
        self, test_session, users, remedy, make_review
    ):
        review = make_review(test_session, users["author"], remedy, rating=2)
        review_service.update_review_status(
            test_session, users["moderator"], review.id, STATUS_APPROVED
        )
        test_session.refresh(remedy)
        assert remedy.review_count == 1

        review_service.update_review(test_session, users["author"], review.id, {"rating": 5})

        test_session.refresh(remedy)
        assert review.status == STATUS_PENDING
        assert (remedy.avg_rating, remedy.review_count) == (0.0, 0)

    def test_delete_of_approved_review(self, test_session, users, remedy, make_review):
        keep = make_review(test_session, users["other"], remedy, rating=2, status=STATUS_APPROVED)
        gone = make_review(test_session, users["author"], remedy, rating=5, status=STATUS_APPROVED)
        aggregation_service.recompute_remedy_stats(test_session, remedy.id)

        review_service.delete_review(test_session, users["author"], gone.id)

        test_session.refresh(remedy)
        assert test_session.get(Review, keep.id) is not None
        assert (remedy.avg_rating, remedy.review_count) == (2.0, 1)

    def test_stats_match_approved_set_after_many_changes(
        self, test_session, users, remedy, make_user, review_payload
    ):
        reviewers = [make_user(test_session, f"r{i}@example.com", f"R{i}") for i in range(4)]
        reviews = [
            review_service.create_review(
                test_session, reviewer, remedy.id, review_payload(rating=rating)
            ).review
            for reviewer, rating in zip(reviewers, [5, 4, 4, 1])
        ]
        moderator = users["moderator"]
        for review in reviews[:3]:
            review_service.update_review_status(test_session, moderator, review.id, STATUS_APPROVED)
        review_service.update_review_status(test_session, moderator, reviews[3].id, STATUS_FLAGGED)

        test_session.refresh(remedy)
        assert (remedy.avg_rating, remedy.review_count) == (4.3, 3)


class TestRecomputeFailure:
    """A failed recomputation is reported but never undoes the review change."""

    def test_failure_keeps_mutation_and_reports_stale(
        self, test_session, users, remedy, make_review, monkeypatch
    ):
        review = make_review(test_session, users["author"], remedy, rating=4)
        test_session.commit()
        monkeypatch.setattr(RemedyRepository, "update_stats", failing_update_stats)

        result = review_service.update_review_status(
            test_session, users["moderator"], review.id, STATUS_APPROVED
        )
        test_session.commit()

        assert result.stats_synced is False
        stored_review = test_session.get(Review, review.id)
        stored_remedy = test_session.get(Remedy, remedy.id)
        test_session.refresh(stored_review)
        test_session.refresh(stored_remedy)
        assert stored_review.status == STATUS_APPROVED
        assert stored_remedy.review_count == 0

    def test_on_review_mutated_returns_false(self, test_session, remedy, monkeypatch):
        def boom(db, remedy_id):
            raise RuntimeError("boom")

        monkeypatch.setattr(aggregation_service, "recompute_remedy_stats", boom)

        assert aggregation_service.on_review_mutated(test_session, remedy.id) is False

    def test_next_mutation_heals_stale_stats(
        self, test_session, users, remedy, make_review, monkeypatch
    ):
        first = make_review(test_session, users["author"], remedy, rating=4)
        second = make_review(test_session, users["other"], remedy, rating=2)

        with monkeypatch.context() as patched:
            patched.setattr(RemedyRepository, "update_stats", failing_update_stats)
            stale = review_service.update_review_status(
                test_session, users["moderator"], first.id, STATUS_APPROVED
            )
        assert stale.stats_synced is False

        synced = review_service.update_review_status(
            test_session, users["moderator"], second.id, STATUS_APPROVED
        )

        assert synced.stats_synced is True
        test_session.refresh(remedy)
        assert (remedy.avg_rating, remedy.review_count) == (3.0, 2)


@pytest.mark.parametrize("status", [STATUS_PENDING, STATUS_FLAGGED])
def test_non_approving_status_change_still_recomputes(
    test_session, users, remedy, make_review, status
):
    review = make_review(test_session, users["author"], remedy, rating=4)
    remedy.avg_rating = 4.9
    remedy.review_count = 7
    test_session.flush()

    review_service.update_review_status(test_session, users["moderator"], review.id, status)

    test_session.refresh(remedy)
    assert (remedy.avg_rating, remedy.review_count) == (0.0, 0)
