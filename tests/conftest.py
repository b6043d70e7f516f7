"""
Pytest fixtures for ZenCure tests.

Every test gets a fresh in-memory SQLite database. The engine uses a
StaticPool, so all sessions share one connection: commit or close a session
before another one (or an API request) touches the database.
"""

import os
from datetime import datetime, timedelta, timezone

# Point the app's own database manager at memory before settings are cached
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from zencure.constants import ROLE_ADMIN, ROLE_MODERATOR, ROLE_USER, STATUS_PENDING  # noqa: E402
from zencure.db import Base, create_engine_for_url  # noqa: E402
from zencure.models import Remedy, RemedySymptom, Review, Source, User  # noqa: E402
from zencure.passwords import hash_password  # noqa: E402

FIXED_NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)
DEFAULT_PASSWORD = "password123"


@pytest.fixture(scope="function")
def test_db():
    """Create a fresh in-memory database with all tables."""
    db_url = "sqlite://"
    engine = create_engine_for_url(db_url)
    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(
        bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
    )

    yield db_url, TestingSessionLocal, engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def test_session(test_db):
    """Get a test session from the test database."""
    _, TestingSessionLocal, _ = test_db
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


# =============================================================================
# Record builders
# =============================================================================


def build_user(session, email="user@example.com", name="Test User", role=ROLE_USER) -> User:
    user = User(
        email=email,
        name=name,
        password_hash=hash_password(DEFAULT_PASSWORD),
        role=role,
    )
    session.add(user)
    session.flush()
    return user


def build_source(session, url="https://example.com/study", credibility=8, title="Study") -> Source:
    source = Source(title=title, url=url, credibility_score=credibility, authors=[], publisher="")
    session.add(source)
    session.flush()
    return source


def build_remedy(
    session,
    name="Peppermint Oil",
    symptoms=(("Headache", 90),),
    sources=(),
    created_at=None,
    avg_rating=0.0,
    review_count=0,
) -> Remedy:
    remedy = Remedy(
        name=name,
        description=f"{name} description",
        categories=["Essential Oils"],
        warnings=[],
        avg_rating=avg_rating,
        review_count=review_count,
        symptoms=[
            RemedySymptom(name=symptom, relevance_score=score, position=position)
            for position, (symptom, score) in enumerate(symptoms)
        ],
        sources=list(sources),
    )
    if created_at is not None:
        remedy.created_at = created_at
        remedy.updated_at = created_at
    session.add(remedy)
    session.flush()
    return remedy


def build_review(session, user, remedy, rating=4, status=STATUS_PENDING) -> Review:
    review = Review(
        user_id=user.id,
        remedy_id=remedy.id,
        rating=rating,
        effectiveness=rating,
        side_effects=rating,
        ease=rating,
        title="Worked for me",
        content="Helped within an hour.",
        status=status,
    )
    session.add(review)
    session.flush()
    return review


def build_review_payload(rating=4, **overrides) -> dict:
    payload = {
        "rating": rating,
        "effectiveness": 4,
        "side_effects": 5,
        "ease": 4,
        "title": "Worked for me",
        "content": "Helped within an hour.",
    }
    payload.update(overrides)
    return payload


# =============================================================================
# Common fixtures
# =============================================================================


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def users(test_session):
    """An author, a second regular user, a moderator and an admin."""
    return {
        "author": build_user(test_session, "author@example.com", "Author"),
        "other": build_user(test_session, "other@example.com", "Other"),
        "moderator": build_user(
            test_session, "mod@example.com", "Moderator", role=ROLE_MODERATOR
        ),
        "admin": build_user(test_session, "admin@example.com", "Admin", role=ROLE_ADMIN),
    }


@pytest.fixture
def remedy(test_session):
    """Remedy with two sources (credibility 8 and 6) and a Headache symptom, 10 days old."""
    sources = [
        build_source(test_session, "https://example.com/a", credibility=8),
        build_source(test_session, "https://example.com/b", credibility=6),
    ]
    return build_remedy(
        test_session,
        symptoms=(("Headache", 90), ("Nausea", 40)),
        sources=sources,
        created_at=FIXED_NOW - timedelta(days=10),
    )


# Builders as fixtures; each takes the session to write through as first argument


@pytest.fixture
def make_user():
    return build_user


@pytest.fixture
def make_source():
    return build_source


@pytest.fixture
def make_remedy():
    return build_remedy


@pytest.fixture
def make_review():
    return build_review


@pytest.fixture
def review_payload():
    return build_review_payload
