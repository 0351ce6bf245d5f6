"""Domain model for the child-safety case registry."""

from __future__ import annotations

from .base import Entity, TimestampedEntity, new_id, utcnow
from .case import (
    SENTINEL_LOCATIONS,
    UNKNOWN_LOCATION,
    Case,
    CaseDraft,
    CompositeKey,
    composite_key_of,
    dedup_key_of,
    is_unknown_location,
)
from .enums import MatchType, ReportStatus, RiskTag, RoleTag, SourceType, SyncStatus
from .report import Report
from .search import (
    ALL_AREAS,
    FOUND_DISCLAIMER,
    NOT_FOUND_DISCLAIMER,
    CaseFilter,
    SearchQuery,
    SearchResponse,
    SearchResult,
)
from .search_log import RegistryStats, SearchLog, SearchStats
from .sync_log import SyncLog

__all__ = [
    "ALL_AREAS",
    "FOUND_DISCLAIMER",
    "NOT_FOUND_DISCLAIMER",
    "SENTINEL_LOCATIONS",
    "UNKNOWN_LOCATION",
    "Case",
    "CaseDraft",
    "CaseFilter",
    "CompositeKey",
    "Entity",
    "MatchType",
    "RegistryStats",
    "Report",
    "ReportStatus",
    "RiskTag",
    "RoleTag",
    "SearchLog",
    "SearchQuery",
    "SearchResponse",
    "SearchResult",
    "SearchStats",
    "SourceType",
    "SyncLog",
    "SyncStatus",
    "TimestampedEntity",
    "composite_key_of",
    "dedup_key_of",
    "is_unknown_location",
    "new_id",
    "utcnow",
]
