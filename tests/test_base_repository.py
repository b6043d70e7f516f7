import pytest

from zencure.repositories import ReviewRepository, UserRepository


def test_count_unknown_filter_key_raises(test_session):
    repo = UserRepository(test_session)

    with pytest.raises(ValueError, match="Unknown filter key"):
        repo.count(typo_key=5)


def test_count_with_filters(test_session, users):
    repo = UserRepository(test_session)

    assert repo.count() == 4
    assert repo.count(role="moderator") == 1


def test_increment_refreshes_instance(test_session, users, remedy, make_review):
    review = make_review(test_session, users["author"], remedy)
    repo = ReviewRepository(test_session)

    repo.increment(review, "helpful_count")
    repo.increment(review, "helpful_count", amount=2)

    assert review.helpful_count == 3


def test_update_ignores_unknown_attributes(test_session, users):
    repo = UserRepository(test_session)
    user = repo.update(users["author"], name="Renamed", nickname="ignored")

    assert user.name == "Renamed"
    assert not hasattr(user, "nickname")
