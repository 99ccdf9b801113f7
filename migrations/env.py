"""Alembic environment for the Radical API schema.

The database URL comes from ``ALEMBIC_URL`` when set, otherwise from the
application's ``DATABASE_URL`` setting (converted to a sync driver).
"""
from __future__ import annotations

import os
import sys
from logging.config import fileConfig
from pathlib import Path

from alembic import context
from sqlalchemy import engine_from_config, pool

# radical_api lives under src/; running alembic from a plain checkout needs it on the path.
SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from radical_api.core.settings import settings  # noqa: E402
from radical_api.db.session import Base  # noqa: E402

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _database_url() -> str:
    return os.getenv("ALEMBIC_URL") or config.get_main_option("sqlalchemy.url") or (
        settings.database_url_sync
    )


config.set_main_option("sqlalchemy.url", _database_url())

# Every model module is imported by radical_api.db.session, so this covers all tables.
target_metadata = Base.metadata


def include_object(obj, name, type_, reflected, compare_to):
    """Leave the alembic_version table out of autogenerated revisions."""
    return not (type_ == "table" and name == "alembic_version")


def run_migrations_offline() -> None:
    """Emit the proposal, vote and petition DDL as SQL without connecting."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        include_object=include_object,
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations over a live connection.

    SQLite cannot alter constraints in place, so revisions run in batch mode.
    """
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            include_object=include_object,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
