"""Audit trail of registry searches and the counts derived from it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .base import Entity, utcnow

if TYPE_CHECKING:
    from datetime import datetime

    from .sync_log import SyncLog


@dataclass(eq=False, kw_only=True)
class SearchLog(Entity):
    searched_name: str | None = None
    searched_area: str | None = None
    found: bool = False
    result_count: int = 0
    created_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True, slots=True)
class SearchStats:
    total_searches: int = 0
    found_results: int = 0

    @property
    def not_found(self) -> int:
        return self.total_searches - self.found_results


@dataclass(frozen=True, slots=True, kw_only=True)
class RegistryStats:
    """Snapshot of registry size, coverage and freshness."""

    case_count: int
    cases_by_location: dict[str, int]
    locations: list[str]
    last_successful_sync: SyncLog | None
    searches: SearchStats
