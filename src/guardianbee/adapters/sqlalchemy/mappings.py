"""SQLAlchemy mapping metadata for the registry's domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers

from guardianbee.domain.model import (
    UNKNOWN_LOCATION,
    Case,
    Report,
    ReportStatus,
    RiskTag,
    RoleTag,
    SearchLog,
    SourceType,
    SyncLog,
    SyncStatus,
)

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class RiskTagSetType(TypeDecorator[frozenset[RiskTag]]):
    """Risk tags stored as a sorted, comma separated list of values."""

    impl = String
    cache_ok = True

    def process_bind_param(
        self, value: frozenset[RiskTag] | None, dialect: Dialect
    ) -> str | None:
        _ = dialect
        if value is None:
            return None
        return ",".join(sorted(tag.value for tag in value))

    def process_result_value(self, value: str | None, dialect: Dialect) -> frozenset[RiskTag]:
        _ = dialect
        if not value:
            return frozenset()
        return frozenset(RiskTag(item) for item in value.split(",") if item)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

case_table = Table(
    "cases",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("dedup_key", String, nullable=False, unique=True),
    Column("raw_name", String, nullable=False, default=""),
    Column("masked_name", String, nullable=False),
    Column("role", Enum(RoleTag, native_enum=False), nullable=False),
    Column("risk_tags", RiskTagSetType, nullable=False),
    Column("location", String, nullable=False, default=UNKNOWN_LOCATION),
    Column("case_date", String(10), nullable=True),
    Column("description", Text, nullable=False, default=""),
    Column("source_type", Enum(SourceType, native_enum=False), nullable=False),
    Column("source_link", String, nullable=False, unique=True),
    Column("verified", Boolean, nullable=False, default=False),
    Column("external_id", String, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False),
    Index("ix_cases_masked_name", "masked_name"),
    Index("ix_cases_location", "location"),
    Index("ix_cases_created_at", "created_at"),
)

report_table = Table(
    "reports",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("suspect_name", String, nullable=False),
    Column("description", Text, nullable=False),
    Column("location", String, nullable=False, default=UNKNOWN_LOCATION),
    Column("status", Enum(ReportStatus, native_enum=False), nullable=False),
    Column("review_note", Text, nullable=True),
    Column("submitter_ip", String(64), nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False),
    Index("ix_reports_status", "status"),
)

sync_log_table = Table(
    "sync_logs",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("source_name", String, nullable=False),
    Column("status", Enum(SyncStatus, native_enum=False), nullable=False),
    Column("record_count", Integer, nullable=False, default=0),
    Column("added", Integer, nullable=False, default=0),
    Column("skipped", Integer, nullable=False, default=0),
    Column("errors", Integer, nullable=False, default=0),
    Column("error_message", Text, nullable=True),
    Column("started_at", UTCDateTime(), nullable=False),
    Column("finished_at", UTCDateTime(), nullable=True),
    Index("ix_sync_logs_started_at", "started_at"),
)

search_log_table = Table(
    "search_logs",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("searched_name", String, nullable=True),
    Column("searched_area", String, nullable=True),
    Column("found", Boolean, nullable=False, default=False),
    Column("result_count", Integer, nullable=False, default=0),
    Column("created_at", UTCDateTime(), nullable=False),
    Index("ix_search_logs_created_at", "created_at"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Case, case_table)
    mapper_registry.map_imperatively(Report, report_table)
    mapper_registry.map_imperatively(SyncLog, sync_log_table)
    mapper_registry.map_imperatively(SearchLog, search_log_table)

    configure_mappers()
    return mapper_registry
