"""
Tests for the admin catalogue and user management services.
"""

import pytest

from zencure.constants import ROLE_MODERATOR, STATUS_APPROVED, STATUS_PENDING
from zencure.exceptions import (
    AuthorizationError,
    ConflictError,
    InputValidationError,
    NotFoundError,
)
from zencure.services import admin_service, remedy_service

MISSING_ID = "00000000-0000-4000-8000-000000000000"


def remedy_data(source_ids, **overrides):
    data = {
        "name": "Valerian Root",
        "description": "Calming root extract.",
        "categories": ["Herbs"],
        "symptoms": [
            {"name": "Insomnia", "relevance_score": 85},
            {"name": "Anxiety", "relevance_score": 60},
        ],
        "source_ids": source_ids,
    }
    data.update(overrides)
    return data


class TestUserRoles:
    def test_promote_user(self, test_session, users):
        user = admin_service.update_user_role(test_session, users["author"].id, ROLE_MODERATOR)

        assert user.role == ROLE_MODERATOR
        assert user.is_privileged

    def test_requires_both_fields(self, test_session, users):
        with pytest.raises(InputValidationError, match="User ID and role are required"):
            admin_service.update_user_role(test_session, users["author"].id, None)

    def test_rejects_unknown_role(self, test_session, users):
        with pytest.raises(InputValidationError, match="Invalid role"):
            admin_service.update_user_role(test_session, users["author"].id, "superuser")

    def test_unknown_user(self, test_session):
        with pytest.raises(NotFoundError, match="user not found"):
            admin_service.update_user_role(test_session, MISSING_ID, ROLE_MODERATOR)

    def test_list_users(self, test_session, users):
        emails = {user.email for user in admin_service.list_users(test_session)}
        assert emails == {user.email for user in users.values()}


class TestCreateRemedy:
    def test_creates_with_zero_stats(self, test_session, make_source):
        source = make_source(test_session)

        remedy = admin_service.create_remedy(test_session, remedy_data([source.id]))

        assert (remedy.avg_rating, remedy.review_count) == (0.0, 0)
        assert [s.name for s in remedy.symptoms] == ["Insomnia", "Anxiety"]
        assert source.remedy_ids == [remedy.id]

    def test_ignores_client_supplied_stats(self, test_session, make_source):
        source = make_source(test_session)

        remedy = admin_service.create_remedy(
            test_session, remedy_data([source.id], avg_rating=5.0, review_count=99)
        )

        assert (remedy.avg_rating, remedy.review_count) == (0.0, 0)

    @pytest.mark.parametrize(
        "overrides",
        [{"name": ""}, {"description": None}, {"categories": None}, {"source_ids": None}],
    )
    def test_missing_fields(self, test_session, make_source, overrides):
        source = make_source(test_session)

        with pytest.raises(InputValidationError, match="Missing required fields"):
            admin_service.create_remedy(test_session, remedy_data([source.id], **overrides))

    def test_empty_lists_accepted(self, test_session):
        remedy = admin_service.create_remedy(
            test_session, remedy_data([], categories=[], symptoms=[])
        )

        assert remedy.sources == []
        assert remedy.symptoms == []

    def test_sourceless_remedy_ranks_without_credibility(self, test_session, fixed_now):
        symptoms = [{"name": "Headache", "relevance_score": 80}]
        remedy = admin_service.create_remedy(
            test_session, remedy_data([], name="Cold Compress", symptoms=symptoms)
        )

        results = remedy_service.query_remedies(test_session, ["Headache"], now=fixed_now)

        assert [r.remedy.id for r in results] == [remedy.id]
        assert results[0].breakdown.credibility == 0
        assert results[0].breakdown.symptoms == pytest.approx(8.0)

    def test_duplicate_name(self, test_session, make_source, make_remedy):
        source = make_source(test_session)
        make_remedy(test_session, "Valerian Root")

        with pytest.raises(ConflictError, match="already exists"):
            admin_service.create_remedy(test_session, remedy_data([source.id]))

    def test_unknown_source(self, test_session):
        with pytest.raises(NotFoundError, match=f"Source with ID {MISSING_ID} not found"):
            admin_service.create_remedy(test_session, remedy_data([MISSING_ID]))

    def test_source_ids_checked_one_at_a_time(self, test_session):
        with pytest.raises(InputValidationError, match="invalid source id format"):
            admin_service.create_remedy(test_session, remedy_data(["garbage", MISSING_ID]))
        with pytest.raises(NotFoundError, match=f"Source with ID {MISSING_ID} not found"):
            admin_service.create_remedy(test_session, remedy_data([MISSING_ID, "garbage"]))

    def test_symptom_relevance_range(self, test_session, make_source):
        source = make_source(test_session)
        symptoms = [{"name": "Insomnia", "relevance_score": 140}]

        with pytest.raises(InputValidationError, match="relevance_score"):
            admin_service.create_remedy(
                test_session, remedy_data([source.id], symptoms=symptoms)
            )


class TestCreateSource:
    def test_defaults(self, test_session):
        source = admin_service.create_source(
            test_session,
            {"title": "Trial", "url": "https://example.com/trial", "credibility_score": 7},
        )

        assert source.authors == []
        assert source.publisher == ""
        assert source.is_peer_reviewed is False
        assert source.publication_date is not None
        assert source.remedy_ids == []

    def test_links_remedies(self, test_session, remedy):
        source = admin_service.create_source(
            test_session,
            {
                "title": "Trial",
                "url": "https://example.com/trial",
                "credibility_score": 7,
                "remedy_ids": [remedy.id],
            },
        )

        assert source.remedy_ids == [remedy.id]

    @pytest.mark.parametrize("credibility", [0, 11])
    def test_credibility_range(self, test_session, credibility):
        with pytest.raises(InputValidationError):
            admin_service.create_source(
                test_session,
                {"title": "T", "url": "https://example.com/x", "credibility_score": credibility},
            )

    def test_duplicate_url(self, test_session, make_source):
        make_source(test_session, "https://example.com/dup")

        with pytest.raises(ConflictError, match="A source with this URL already exists"):
            admin_service.create_source(
                test_session,
                {"title": "T", "url": "https://example.com/dup", "credibility_score": 5},
            )

    def test_unknown_remedy(self, test_session):
        with pytest.raises(NotFoundError):
            admin_service.create_source(
                test_session,
                {
                    "title": "T",
                    "url": "https://example.com/x",
                    "credibility_score": 5,
                    "remedy_ids": [MISSING_ID],
                },
            )


class TestModerationListings:
    def test_symptoms_are_unique_and_sorted(self, test_session, remedy, make_remedy):
        make_remedy(test_session, "Ginger", symptoms=(("Nausea", 90), ("Bloating", 20)))

        assert admin_service.list_unique_symptoms(test_session) == [
            "Bloating",
            "Headache",
            "Nausea",
        ]

    def test_list_reviews_filters(self, test_session, users, remedy, make_review):
        approved = make_review(test_session, users["author"], remedy, status=STATUS_APPROVED)
        make_review(test_session, users["other"], remedy, status=STATUS_PENDING)

        everything = admin_service.list_reviews(test_session, users["moderator"])
        only_approved = admin_service.list_reviews(
            test_session, users["moderator"], status=STATUS_APPROVED
        )
        by_author = admin_service.list_reviews(
            test_session, users["admin"], user_id=users["author"].id
        )

        assert len(everything) == 2
        assert [r.id for r in only_approved] == [approved.id]
        assert [r.id for r in by_author] == [approved.id]

    def test_list_reviews_rejects_bad_filters(self, test_session, users):
        with pytest.raises(InputValidationError):
            admin_service.list_reviews(test_session, users["moderator"], status="gone")
        with pytest.raises(InputValidationError):
            admin_service.list_reviews(test_session, users["moderator"], remedy_id="x")

    def test_listings_need_privilege(self, test_session, users):
        with pytest.raises(AuthorizationError):
            admin_service.list_reviews(test_session, users["author"])
        with pytest.raises(AuthorizationError):
            admin_service.list_comments(test_session, users["other"])
