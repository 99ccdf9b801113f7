"""Database health probe."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ("users", "proposals", "votes", "petition_details")


@dataclass(frozen=True)
class HealthReport:
    status: str
    message: str
    table_status: dict[str, bool] = field(default_factory=dict)
    error: str | None = None

    @property
    def missing_tables(self) -> list[str]:
        return [name for name, present in self.table_status.items() if not present]

    def to_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {"status": self.status, "message": self.message}
        if self.error is not None:
            payload["error"] = self.error
        if self.table_status:
            payload["tableStatus"] = self.table_status
        if self.missing_tables:
            payload["missingTables"] = self.missing_tables
        return payload


def check_database(db: Session) -> HealthReport:
    """Probe connectivity and the presence of the core tables."""
    try:
        probe = db.execute(text("SELECT 1")).scalar_one()
    except SQLAlchemyError:
        logger.exception("Health check query failed")
        return HealthReport(
            status="error",
            message="Health check failed",
            error="Database query execution failed",
        )
    if probe != 1:
        return HealthReport(
            status="error",
            message="Health check failed",
            error="Database query failed to return expected result",
        )

    existing = set(inspect(db.get_bind()).get_table_names())
    table_status = {name: name in existing for name in REQUIRED_TABLES}
    if not all(table_status.values()):
        logger.warning("Missing tables: %s", [n for n, ok in table_status.items() if not ok])
        return HealthReport(
            status="warning",
            message="Database connected but some tables are missing",
            table_status=table_status,
        )
    return HealthReport(
        status="ok",
        message="Database connection and tables verified",
        table_status=table_status,
    )
