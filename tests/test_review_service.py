"""
Tests for review authoring, visibility and moderation rules.
"""

import pytest

from zencure.constants import STATUS_APPROVED, STATUS_FLAGGED, STATUS_PENDING
from zencure.exceptions import (
    AuthorizationError,
    ConflictError,
    InputValidationError,
    NotFoundError,
)
from zencure.models import Comment, Review
from zencure.services import review_service

MISSING_ID = "00000000-0000-4000-8000-000000000000"


class TestCreateReview:
    def test_creates_pending_review(self, test_session, users, remedy, review_payload):
        result = review_service.create_review(
            test_session, users["author"], remedy.id, review_payload()
        )

        assert result.stats_synced is True
        assert result.review.status == STATUS_PENDING
        assert result.review.helpful_count == 0
        assert result.review.user_id == users["author"].id

    def test_duplicate_is_conflict(self, test_session, users, remedy, review_payload):
        review_service.create_review(test_session, users["author"], remedy.id, review_payload())

        with pytest.raises(ConflictError, match="already reviewed"):
            review_service.create_review(
                test_session, users["author"], remedy.id, review_payload(rating=1)
            )

        count = test_session.query(Review).filter(Review.remedy_id == remedy.id).count()
        assert count == 1

    def test_malformed_remedy_id(self, test_session, users, review_payload):
        with pytest.raises(InputValidationError, match="invalid remedy id format"):
            review_service.create_review(
                test_session, users["author"], "not-a-uuid", review_payload()
            )

    def test_missing_remedy(self, test_session, users, review_payload):
        with pytest.raises(NotFoundError, match="remedy not found"):
            review_service.create_review(
                test_session, users["author"], MISSING_ID, review_payload()
            )

    def test_missing_fields(self, test_session, users, remedy, review_payload):
        payload = review_payload()
        del payload["title"]

        with pytest.raises(InputValidationError, match="Missing required fields"):
            review_service.create_review(test_session, users["author"], remedy.id, payload)

    @pytest.mark.parametrize("rating", [0, 6, 2.5])
    def test_out_of_range_rating(self, test_session, users, remedy, review_payload, rating):
        with pytest.raises(InputValidationError):
            review_service.create_review(
                test_session, users["author"], remedy.id, review_payload(rating=rating)
            )


class TestUpdateReview:
    def test_author_edit_resets_status(self, test_session, users, remedy, make_review):
        review = make_review(test_session, users["author"], remedy, status=STATUS_APPROVED)

        result = review_service.update_review(
            test_session, users["author"], review.id, {"title": "Changed my mind"}
        )

        assert result.review.title == "Changed my mind"
        assert result.review.status == STATUS_PENDING
        assert result.review.content == "Helped within an hour."

    def test_author_cannot_self_approve(self, test_session, users, remedy, make_review):
        review = make_review(test_session, users["author"], remedy)

        result = review_service.update_review(
            test_session, users["author"], review.id, {"status": STATUS_APPROVED}
        )

        assert result.review.status == STATUS_PENDING

    def test_moderator_edit_keeps_status(self, test_session, users, remedy, make_review):
        review = make_review(test_session, users["author"], remedy, status=STATUS_APPROVED)

        result = review_service.update_review(
            test_session, users["moderator"], review.id, {"content": "Trimmed"}
        )

        assert result.review.status == STATUS_APPROVED
        assert result.review.content == "Trimmed"

    def test_blank_text_keeps_previous_value(self, test_session, users, remedy, make_review):
        review = make_review(test_session, users["author"], remedy)
        title = review.title

        result = review_service.update_review(
            test_session, users["author"], review.id, {"title": "", "content": "", "rating": 2}
        )

        assert result.review.title == title
        assert result.review.content == "Helped within an hour."
        assert result.review.rating == 2

    def test_moderator_edit_sets_status(self, test_session, users, remedy, make_review):
        review = make_review(test_session, users["author"], remedy, status=STATUS_APPROVED)

        result = review_service.update_review(
            test_session, users["admin"], review.id, {"status": STATUS_FLAGGED}
        )

        assert result.review.status == STATUS_FLAGGED

    def test_stranger_is_rejected(self, test_session, users, remedy, make_review):
        review = make_review(test_session, users["author"], remedy)

        with pytest.raises(AuthorizationError, match="not authorized to update this review"):
            review_service.update_review(test_session, users["other"], review.id, {"title": "x"})

    def test_error_order(self, test_session, users):
        """Malformed ids fail validation before any lookup; unknown ids are not found."""
        with pytest.raises(InputValidationError):
            review_service.update_review(test_session, users["other"], "bad", {})
        with pytest.raises(NotFoundError):
            review_service.update_review(test_session, users["other"], MISSING_ID, {})


class TestDeleteReview:
    def test_author_deletes_with_comments(self, test_session, users, remedy, make_review):
        review = make_review(test_session, users["author"], remedy)
        test_session.add(Comment(user_id=users["other"].id, review_id=review.id, content="Same"))
        test_session.flush()

        result = review_service.delete_review(test_session, users["author"], review.id)

        assert result.review is None
        assert test_session.query(Review).count() == 0
        assert test_session.query(Comment).count() == 0

    def test_moderator_may_delete(self, test_session, users, remedy, make_review):
        review = make_review(test_session, users["author"], remedy)
        review_service.delete_review(test_session, users["moderator"], review.id)

        assert test_session.get(Review, review.id) is None

    def test_stranger_is_rejected(self, test_session, users, remedy, make_review):
        review = make_review(test_session, users["author"], remedy)

        with pytest.raises(AuthorizationError, match="not authorized to delete this review"):
            review_service.delete_review(test_session, users["other"], review.id)


class TestHelpful:
    def test_other_user_increments_by_one(self, test_session, users, remedy, make_review):
        review = make_review(test_session, users["author"], remedy, status=STATUS_APPROVED)

        review_service.mark_review_helpful(test_session, users["other"], review.id)
        updated = review_service.mark_review_helpful(test_session, users["moderator"], review.id)

        assert updated.helpful_count == 2

    def test_author_cannot_mark_own_review(self, test_session, users, remedy, make_review):
        review = make_review(test_session, users["author"], remedy, status=STATUS_APPROVED)

        with pytest.raises(InputValidationError, match="cannot mark your own review as helpful"):
            review_service.mark_review_helpful(test_session, users["author"], review.id)

        test_session.refresh(review)
        assert review.helpful_count == 0

    @pytest.mark.parametrize("status", [STATUS_PENDING, STATUS_FLAGGED])
    def test_unapproved_review_still_counts(
        self, test_session, users, remedy, make_review, status
    ):
        review = make_review(test_session, users["author"], remedy, status=status)

        updated = review_service.mark_review_helpful(test_session, users["other"], review.id)

        assert updated.helpful_count == 1
        assert updated.status == status


class TestVisibility:
    def test_pending_hidden_from_strangers(self, test_session, users, remedy, make_review):
        review = make_review(test_session, users["author"], remedy)

        with pytest.raises(NotFoundError):
            review_service.get_review(test_session, users["other"], review.id)
        with pytest.raises(NotFoundError):
            review_service.get_review(test_session, None, review.id)

        assert review_service.get_review(test_session, users["author"], review.id) is review
        assert review_service.get_review(test_session, users["moderator"], review.id) is review

    def test_list_for_remedy_shows_only_approved(
        self, test_session, users, remedy, make_review
    ):
        approved = make_review(test_session, users["author"], remedy, status=STATUS_APPROVED)
        make_review(test_session, users["other"], remedy, status=STATUS_PENDING)
        make_review(test_session, users["moderator"], remedy, status=STATUS_FLAGGED)

        page = review_service.list_reviews_for_remedy(test_session, remedy.id, page=1, limit=10)

        assert [review.id for review in page.items] == [approved.id]
        assert (page.total, page.pages) == (1, 1)


class TestModerationQueue:
    def test_pending_listing_requires_privilege(self, test_session, users):
        with pytest.raises(AuthorizationError):
            review_service.list_pending_reviews(test_session, users["author"])

    def test_pending_listing(self, test_session, users, remedy, make_review):
        pending = make_review(test_session, users["author"], remedy)
        make_review(test_session, users["other"], remedy, status=STATUS_APPROVED)

        page = review_service.list_pending_reviews(test_session, users["moderator"])

        assert [review.id for review in page.items] == [pending.id]

    def test_invalid_status_checked_first(self, test_session, users):
        with pytest.raises(InputValidationError, match="invalid status value"):
            review_service.update_review_status(test_session, users["moderator"], "bad", "live")

    def test_regular_user_cannot_moderate(self, test_session, users, remedy, make_review):
        review = make_review(test_session, users["author"], remedy)

        with pytest.raises(AuthorizationError):
            review_service.update_review_status(
                test_session, users["author"], review.id, STATUS_APPROVED
            )
