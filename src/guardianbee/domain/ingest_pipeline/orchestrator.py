"""Concurrent, cancellable ingestion across source adapters."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from guardianbee.config.sync import DEFAULT_FETCH_TIMEOUT_SECONDS, DEFAULT_MAX_WORKERS
from guardianbee.domain.errors import FetchError, FetchTimeout, StorageError
from guardianbee.domain.model import SyncStatus, utcnow

from .deduplication import IngestCounts
from .normalization import normalize_records

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from guardianbee.domain.ports.fetching import FetchResult, SourceAdapter

    from .deduplication import DeduplicationEngine

log = getLogger(__name__)


@dataclass(slots=True)
class SourceRunSummary:
    source: str
    status: SyncStatus = SyncStatus.SUCCEEDED
    fetched: int = 0
    counts: IngestCounts = field(default_factory=IngestCounts)
    error: str | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None

    @property
    def added(self) -> int:
        return self.counts.added

    @property
    def skipped(self) -> int:
        return self.counts.skipped

    @property
    def errors(self) -> int:
        return self.counts.errors

    def fail(self, error: str) -> None:
        self.status = SyncStatus.FAILED
        self.error = error


@dataclass(slots=True)
class BatchSummary:
    sources: list[SourceRunSummary] = field(default_factory=list)
    cancelled: bool = False

    @property
    def synced(self) -> int:
        return sum(summary.fetched for summary in self.sources)

    @property
    def added(self) -> int:
        return sum(summary.added for summary in self.sources)

    @property
    def skipped(self) -> int:
        return sum(summary.skipped for summary in self.sources)

    @property
    def errors(self) -> int:
        return sum(summary.errors for summary in self.sources)

    @property
    def success(self) -> bool:
        return not self.cancelled and all(
            summary.status is not SyncStatus.FAILED for summary in self.sources
        )


@dataclass(slots=True)
class IngestionOrchestrator:
    """Run adapters concurrently (bounded by ``max_workers``) and ingest their drafts.

    Each fetch runs under ``fetch_timeout_seconds``; a timed-out or
    unreachable source contributes zero drafts and one error, and so does a
    source that fails in any other way. Setting the ``cancel`` event stops
    sources that have not started yet, while sources already running finish
    and keep their counts.
    """

    engine: DeduplicationEngine
    max_workers: int = DEFAULT_MAX_WORKERS
    fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS

    async def run(
        self,
        adapters: Sequence[SourceAdapter],
        *,
        cancel: asyncio.Event | None = None,
    ) -> BatchSummary:
        semaphore = asyncio.Semaphore(self.max_workers)
        summaries = [SourceRunSummary(source=adapter.name) for adapter in adapters]
        async with asyncio.TaskGroup() as group:
            for adapter, summary in zip(adapters, summaries, strict=True):
                group.create_task(self._run_source(adapter, summary, semaphore, cancel))
        cancelled = any(summary.status is SyncStatus.CANCELLED for summary in summaries)
        return BatchSummary(sources=summaries, cancelled=cancelled)

    async def _run_source(
        self,
        adapter: SourceAdapter,
        summary: SourceRunSummary,
        semaphore: asyncio.Semaphore,
        cancel: asyncio.Event | None,
    ) -> None:
        async with semaphore:
            if cancel is not None and cancel.is_set():
                summary.status = SyncStatus.CANCELLED
                log.info("Skipping %s: sync cancelled", adapter.name)
                return
            summary.started_at = utcnow()
            try:
                await self._ingest_source(adapter, summary)
            except StorageError as exc:
                summary.counts.errors += 1
                summary.fail(f"registry unavailable: {exc}")
                log.error("Registry unavailable while syncing %s: %s", adapter.name, exc)
            except Exception as exc:
                # One broken adapter must not cancel its siblings in the task group.
                summary.counts.errors += 1
                summary.fail(f"unexpected error: {exc}")
                log.exception("Syncing %s failed unexpectedly", adapter.name)
            finally:
                summary.finished_at = utcnow()

    async def _ingest_source(self, adapter: SourceAdapter, summary: SourceRunSummary) -> None:
        log.info("Starting %s sync", adapter.name)
        try:
            result = await self._fetch(adapter)
        except FetchError as exc:
            summary.counts.errors += 1
            summary.fail(str(exc))
            log.error("Fetching %s failed: %s", adapter.name, exc)
            return

        summary.fetched = len(result.records)
        summary.counts.errors += result.failed_items
        outcome = normalize_records(adapter, result.records)
        summary.counts.errors += outcome.errors

        await asyncio.to_thread(self.engine.ingest, outcome.drafts, counts=summary.counts)
        summary.status = SyncStatus.PARTIAL if summary.errors else SyncStatus.SUCCEEDED
        log.info(
            "Finished %s sync: fetched=%s, added=%s, skipped=%s, errors=%s",
            adapter.name,
            summary.fetched,
            summary.added,
            summary.skipped,
            summary.errors,
        )

    async def _fetch(self, adapter: SourceAdapter) -> FetchResult:
        try:
            async with asyncio.timeout(self.fetch_timeout_seconds):
                return await adapter.fetch()
        except TimeoutError as exc:
            raise FetchTimeout(
                adapter.name, f"fetch exceeded {self.fetch_timeout_seconds:g}s"
            ) from exc
