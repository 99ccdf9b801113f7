"""Dialect-aware ``INSERT ... ON CONFLICT`` construction."""

from __future__ import annotations

from typing import Any

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session


def dialect_insert(db: Session, model: type[Any]) -> Any:
    """Return an insert construct that supports ``on_conflict_do_update``.

    Both SQLite and PostgreSQL expose the same conflict API, so callers can
    build the upsert once and run it on either backend.
    """
    dialect = db.get_bind().dialect.name
    if dialect == "sqlite":
        return sqlite.insert(model)
    if dialect == "postgresql":
        return postgresql.insert(model)
    raise NotImplementedError(f"Upserts are not supported on the {dialect} dialect")
