from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from backend.app.auth.jwt import create_user_token
from backend.app.main import create_app
from zencure.constants import ROLE_ADMIN, ROLE_MODERATOR, ROLE_USER
from zencure.db import get_db
from zencure.models import User


@pytest.fixture
def test_app_client(test_db) -> Iterator[tuple[TestClient, sessionmaker]]:
    db_url, TestingSessionLocal, engine = test_db

    app = create_app()

    def override_get_db() -> Iterator[Session]:
        db = TestingSessionLocal()
        try:
            yield db
            db.commit()  # Auto-commit on success like production
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client, TestingSessionLocal


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_user_token(user.id)}"}


@pytest.fixture
def seed(test_app_client) -> Callable:
    """
    Run ``fn(session)`` in its own committed session and return its result.

    The API shares the test connection, so seeding must be committed before
    any request is made.
    """
    _, TestingSessionLocal = test_app_client

    def run(fn):
        session = TestingSessionLocal()
        try:
            result = fn(session)
            session.commit()
            return result
        finally:
            session.close()

    return run


@pytest.fixture
def api_users(seed, make_user) -> dict[str, User]:
    """Committed author, other, moderator and admin accounts."""
    return seed(
        lambda session: {
            "author": make_user(session, "author@example.com", "Author", ROLE_USER),
            "other": make_user(session, "other@example.com", "Other", ROLE_USER),
            "moderator": make_user(session, "mod@example.com", "Moderator", ROLE_MODERATOR),
            "admin": make_user(session, "admin@example.com", "Admin", ROLE_ADMIN),
        }
    )


@pytest.fixture
def authorized_client(
    test_app_client, api_users
) -> Iterator[tuple[TestClient, Callable[[str], dict[str, str]], sessionmaker]]:
    """Client plus a ``headers_for(role_key)`` helper issuing real bearer tokens."""
    client, TestingSessionLocal = test_app_client

    def headers_for(key: str) -> dict[str, str]:
        return auth_headers(api_users[key])

    yield client, headers_for, TestingSessionLocal
