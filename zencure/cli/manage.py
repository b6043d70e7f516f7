"""
ZenCure management CLI.

    zencure create-admin --email admin@zencure.com --password ...
    zencure create-admin --email mod@zencure.com --role moderator
    zencure seed [--file catalogue.json]

Commands run against ``DATABASE_URL`` (or ``--database-url``) and create any
missing tables first.
"""

import argparse
import json
import os
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from zencure.constants import ROLE_ADMIN, ROLE_MODERATOR
from zencure.db import db
from zencure.exceptions import ConflictError, NotFoundError, ServiceError
from zencure.logging import get_logger
from zencure.models import User
from zencure.repositories import RemedyRepository, SourceRepository, UserRepository
from zencure.services import admin_service, auth_service

from . import catalogue

logger = get_logger("cli")

ADMIN_PASSWORD_ENV = "ZENCURE_ADMIN_PASSWORD"


def _init_database(database_url: str | None) -> None:
    db.initialize(database_url)
    db.create_all_tables()


def create_privileged_user(
    session: Session, email: str, password: str, name: str, role: str
) -> tuple[User, bool]:
    """
    Register a user and give them ``role``.

    An existing account with the email is left untouched.

    Returns:
        (user, created)
    """
    try:
        user = auth_service.register_user(session, email, password, name)
    except ConflictError:
        return UserRepository(session).get_by_email(email.strip().lower()), False
    admin_service.update_user_role(session, user.id, role)
    return user, True


def _parse_dates(sources: list[dict[str, Any]]) -> list[dict[str, Any]]:
    parsed = []
    for source in sources:
        source = dict(source)
        if isinstance(source.get("publication_date"), str):
            source["publication_date"] = datetime.fromisoformat(source["publication_date"])
        parsed.append(source)
    return parsed


def seed_catalogue(
    session: Session, sources: list[dict[str, Any]], remedies: list[dict[str, Any]]
) -> dict[str, int]:
    """
    Add sources, then remedies linked to them by URL.

    Entries whose URL or name is already stored are skipped, so re-running
    the seed is harmless. Links are made through the admin service, which
    keeps both sides of each remedy/source reference in step.

    Raises:
        NotFoundError: A remedy names a source URL that is not in the store.
    """
    counts = {"sources": 0, "remedies": 0, "skipped": 0}
    source_repo = SourceRepository(session)
    remedy_repo = RemedyRepository(session)

    for data in _parse_dates(sources):
        if source_repo.get_by_url(data["url"]) is not None:
            counts["skipped"] += 1
            continue
        admin_service.create_source(session, data)
        counts["sources"] += 1

    for data in remedies:
        if remedy_repo.get_by_name(data["name"]) is not None:
            counts["skipped"] += 1
            continue
        source_ids = []
        for url in data.get("source_urls", []):
            source = source_repo.get_by_url(url)
            if source is None:
                raise NotFoundError(f"Source with URL {url} not found")
            source_ids.append(source.id)
        payload = {key: value for key, value in data.items() if key != "source_urls"}
        admin_service.create_remedy(session, {**payload, "source_ids": source_ids})
        counts["remedies"] += 1

    logger.info("catalogue_seeded", **counts)
    return counts


def cmd_create_admin(args) -> int:
    password = args.password or os.getenv(ADMIN_PASSWORD_ENV)
    if not password:
        print(f"Error: pass --password or set {ADMIN_PASSWORD_ENV}")
        return 1

    _init_database(args.database_url)
    with db.session() as session:
        user, created = create_privileged_user(
            session, args.email, password, args.name, args.role
        )
        role = user.role

    if created:
        print(f"Created {role} {args.email}")
    else:
        print(f"User {args.email} already exists (role: {role}); left unchanged")
    return 0


def cmd_seed(args) -> int:
    if args.file:
        with open(args.file, encoding="utf-8") as f:
            data = json.load(f)
        sources, remedies = data.get("sources", []), data.get("remedies", [])
    else:
        sources, remedies = catalogue.SOURCES, catalogue.REMEDIES

    _init_database(args.database_url)
    with db.session() as session:
        counts = seed_catalogue(session, sources, remedies)

    print(
        f"Seeded {counts['sources']} sources and {counts['remedies']} remedies "
        f"({counts['skipped']} already present)"
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zencure", description="ZenCure - remedy catalogue and account management"
    )
    parser.add_argument("--database-url", help="Override DATABASE_URL")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    admin_parser = subparsers.add_parser(
        "create-admin", help="Create an admin or moderator account"
    )
    admin_parser.add_argument("--email", default="admin@zencure.com")
    admin_parser.add_argument("--name", default="Admin User")
    admin_parser.add_argument("--password", help=f"Defaults to ${ADMIN_PASSWORD_ENV}")
    admin_parser.add_argument("--role", choices=[ROLE_ADMIN, ROLE_MODERATOR], default=ROLE_ADMIN)

    seed_parser = subparsers.add_parser("seed", help="Load sources and remedies")
    seed_parser.add_argument(
        "--file", help='JSON file with "sources" and "remedies" lists (default: built-in)'
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {
        "create-admin": cmd_create_admin,
        "seed": cmd_seed,
    }
    if args.command not in commands:
        parser.print_help()
        return 1

    try:
        return commands[args.command](args)
    except ServiceError as e:
        print(f"Error: {e.detail}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
