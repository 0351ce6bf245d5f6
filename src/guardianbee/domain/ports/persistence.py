"""Ports for persisting registry aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from uuid import UUID

    from guardianbee.domain.model import (
        Case,
        CaseDraft,
        CaseFilter,
        Report,
        ReportStatus,
        SearchLog,
        SearchStats,
        SyncLog,
    )


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class CaseRepository(Protocol):
    """Key-based lookup/insert over the case registry.

    ``insert`` raises :class:`~guardianbee.domain.errors.DuplicateCase` when a
    unique dedup constraint rejects the row.
    """

    def find_by_dedup_key(
        self, masked_name: str, case_date: str | None, location: str
    ) -> Case | None: ...

    def find_by_source_link(self, source_link: str) -> Case | None: ...

    def insert(self, draft: CaseDraft) -> Case: ...

    def query(
        self,
        case_filter: CaseFilter,
        *,
        limit: int | None = None,
        offset: int = 0,
    ) -> tuple[list[Case], int]:
        """Matching cases ordered by descending ``created_at`` plus the total match count."""
        ...

    def count(self) -> int: ...

    def count_by_location(self) -> dict[str, int]:
        """Cases per location, most populated first."""
        ...

    def locations(self) -> list[str]:
        """Distinct non-blank locations in ascending order."""
        ...


@runtime_checkable
class ReportRepository(Repository["Report"], Protocol):
    """Persistence contract for community reports."""

    def get(self, report_id: UUID) -> Report | None: ...

    def list_reports(self, *, status: ReportStatus | None = None) -> list[Report]: ...

    def count_by_status(self) -> dict[ReportStatus, int]: ...


@runtime_checkable
class SyncLogRepository(Repository["SyncLog"], Protocol):
    """Persistence contract for sync audit records."""

    def recent(self, limit: int = 20) -> list[SyncLog]: ...

    def last_successful(self) -> SyncLog | None:
        """Most recently finished run that ingested its source, fully or partially."""
        ...


@runtime_checkable
class SearchLogRepository(Repository["SearchLog"], Protocol):
    """Persistence contract for the search audit trail."""

    def stats(self) -> SearchStats: ...
