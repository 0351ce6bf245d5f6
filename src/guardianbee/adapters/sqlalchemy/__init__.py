"""SQLAlchemy adapter package for the case registry."""

from __future__ import annotations

from .mappings import (
    case_table,
    mapper_registry,
    report_table,
    start_mappers,
    sync_log_table,
)
from .repositories import (
    SqlAlchemyCaseRepository,
    SqlAlchemyReportRepository,
    SqlAlchemySyncLogRepository,
)

__all__ = [
    "SqlAlchemyCaseRepository",
    "SqlAlchemyReportRepository",
    "SqlAlchemySyncLogRepository",
    "case_table",
    "mapper_registry",
    "report_table",
    "start_mappers",
    "sync_log_table",
]
