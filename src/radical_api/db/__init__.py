"""Database session, time helpers and upsert support."""

from .session import Base, SessionLocal, create_tables, drop_tables, engine, get_db

__all__ = ["Base", "SessionLocal", "create_tables", "drop_tables", "engine", "get_db"]
