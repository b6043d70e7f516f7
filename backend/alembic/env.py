"""Alembic environment. The database URL always comes from ZenCure settings."""

from alembic import context
from sqlalchemy import create_engine, pool

from zencure import models  # noqa: F401  # registers every table on Base.metadata
from zencure.config import get_settings
from zencure.db import Base, create_engine_for_url

target_metadata = Base.metadata
database_url = get_settings().database_url


def run_migrations_offline() -> None:
    """Emit SQL to stdout instead of executing it (``alembic upgrade --sql``)."""
    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    if database_url.startswith("sqlite"):
        engine = create_engine_for_url(database_url)
    else:
        engine = create_engine(database_url, poolclass=pool.NullPool)

    with engine.connect() as connection:
        # SQLite cannot ALTER most constraints in place; batch mode rebuilds the table
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()
    engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
