"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from contextlib import contextmanager
from logging import getLogger
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from guardianbee.adapters.community import CommunityReportAdapter
from guardianbee.adapters.export import export_reports_xlsx
from guardianbee.adapters.government import (
    GOVERNMENT_REGISTRIES,
    government_adapters,
    government_resilience,
)
from guardianbee.adapters.judicial import JudicialRecordAdapter, judicial_resilience
from guardianbee.adapters.news import NewsFeedAdapter, news_resilience
from guardianbee.adapters.notification import SmtpReportNotifier
from guardianbee.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyRegistryUnitOfWork,
    is_started,
    startup,
)
from guardianbee.config import (
    MatchingConfig,
    MissingConfigurationError,
    SourcePacing,
    SyncConfig,
    get_judicial_config,
    get_matching_config,
    get_notification_policy,
    get_smtp_config,
    get_source_pacing,
    get_sync_config,
)
from guardianbee.domain.ingest_pipeline import (
    BatchSummary,
    DeduplicationEngine,
    IngestionOrchestrator,
    SourceRunSummary,
)
from guardianbee.domain.model import RegistryStats, SearchLog, SearchQuery, SyncLog, utcnow
from guardianbee.domain.ports.unit_of_work import RegistryUnitOfWork
from guardianbee.domain.reporting import ReportDesk
from guardianbee.domain.search import SearchResolver

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from pathlib import Path
    from types import FrameType
    from uuid import UUID

    from guardianbee.config import NotificationPolicy
    from guardianbee.domain.model import Report, ReportStatus, SearchResponse
    from guardianbee.domain.ports.fetching import SourceAdapter
    from guardianbee.domain.ports.notification import ReportNotifier
    from guardianbee.domain.reporting import ReportSubmission

type UnitOfWorkFactory = Callable[[], RegistryUnitOfWork]

log = getLogger(__name__)

GOVERNMENT_GROUP = "government"
SOURCE_NAMES: tuple[str, ...] = (
    *(page.kind.value for page in GOVERNMENT_REGISTRIES),
    "judicial",
    "news",
    "community",
)


def _registry_uow_factory(unit_of_work_factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if unit_of_work_factory is not None:
        return unit_of_work_factory
    if not is_started():
        startup()
    return SqlAlchemyRegistryUnitOfWork


def _expand_source_names(names: Sequence[str]) -> list[str]:
    expanded: list[str] = []
    for name in names:
        if name == GOVERNMENT_GROUP:
            expanded.extend(page.kind.value for page in GOVERNMENT_REGISTRIES)
        elif name in SOURCE_NAMES:
            expanded.append(name)
        else:
            choices = ", ".join((GOVERNMENT_GROUP, *SOURCE_NAMES))
            raise ValueError(f"Unknown source {name!r}; expected one of: {choices}")
    return list(dict.fromkeys(expanded))


def build_adapters(
    names: Sequence[str] | None,
    *,
    unit_of_work_factory: UnitOfWorkFactory,
    pacing: SourcePacing | None = None,
) -> list[SourceAdapter]:
    """Adapters for ``names`` (all sources when ``None``).

    Without explicit names the judicial source is only included when its
    credentials are configured.
    """

    active_pacing = pacing or get_source_pacing()
    explicit = names is not None
    selected = _expand_source_names(names) if names is not None else list(SOURCE_NAMES)

    adapters: list[SourceAdapter] = list(
        government_adapters(
            resilience=government_resilience(active_pacing.government_delay_seconds),
            pages=tuple(page for page in GOVERNMENT_REGISTRIES if page.kind.value in selected),
        )
    )
    if "judicial" in selected:
        try:
            judicial_config = get_judicial_config()
        except MissingConfigurationError:
            if explicit:
                raise
            log.info("Judicial API credentials not configured; skipping judicial source")
        else:
            adapters.append(
                JudicialRecordAdapter(
                    config=judicial_config,
                    resilience=judicial_resilience(
                        judicial_config, active_pacing.judicial_delay_seconds
                    ),
                )
            )
    if "news" in selected:
        adapters.append(
            NewsFeedAdapter(resilience=news_resilience(active_pacing.news_delay_seconds))
        )
    if "community" in selected:
        adapters.append(CommunityReportAdapter(unit_of_work_factory=unit_of_work_factory))
    return adapters


def _sync_log(summary: SourceRunSummary) -> SyncLog:
    return SyncLog(
        source_name=summary.source,
        status=summary.status,
        record_count=summary.fetched,
        added=summary.added,
        skipped=summary.skipped,
        errors=summary.errors,
        error_message=summary.error,
        started_at=summary.started_at or utcnow(),
        finished_at=summary.finished_at,
    )


def record_sync_logs(summary: BatchSummary, unit_of_work_factory: UnitOfWorkFactory) -> None:
    with unit_of_work_factory() as uow:
        for source_summary in summary.sources:
            uow.repositories.sync_logs.add(_sync_log(source_summary))
        uow.commit()


def _request_cancel(cancel: asyncio.Event) -> None:
    if not cancel.is_set():
        log.warning("Interrupted: letting running sources finish and skipping the rest")
    cancel.set()


@contextmanager
def _cancel_on_sigint(cancel: asyncio.Event) -> Iterator[None]:
    loop = asyncio.get_running_loop()

    def handler(_signal_received: int, _frame: FrameType | None) -> None:
        # Defer to the loop; nothing else is safe from inside a signal handler.
        loop.call_soon_threadsafe(_request_cancel, cancel)

    previous = signal(SIGINT, handler)
    try:
        yield
    finally:
        signal(SIGINT, previous)


async def _run_batch(
    orchestrator: IngestionOrchestrator,
    adapters: Sequence[SourceAdapter],
    cancel: asyncio.Event | None,
    *,
    handle_sigint: bool,
) -> BatchSummary:
    if not handle_sigint:
        return await orchestrator.run(adapters, cancel=cancel)
    event = cancel or asyncio.Event()
    with _cancel_on_sigint(event):
        return await orchestrator.run(adapters, cancel=event)


def sync_sources(
    *,
    sources: Sequence[str] | None = None,
    adapters: Sequence[SourceAdapter] | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    sync_config: SyncConfig | None = None,
    cancel: asyncio.Event | None = None,
    handle_sigint: bool = False,
) -> BatchSummary:
    """Fetch every selected source, ingest the drafts and record one sync log per source.

    With ``handle_sigint`` a Ctrl+C sets the cancel event instead of aborting.
    Sources already running finish, and the partial batch is still logged
    and returned.
    """

    effective_uow = _registry_uow_factory(unit_of_work_factory)
    config = sync_config or get_sync_config()
    active = (
        list(adapters)
        if adapters is not None
        else build_adapters(sources, unit_of_work_factory=effective_uow)
    )
    orchestrator = IngestionOrchestrator(
        engine=DeduplicationEngine(effective_uow),
        max_workers=config.max_workers,
        fetch_timeout_seconds=config.fetch_timeout_seconds,
    )
    log.info(
        "Starting sync: sources=%s, max_workers=%s, timeout=%ss",
        ",".join(adapter.name for adapter in active),
        config.max_workers,
        config.fetch_timeout_seconds,
    )

    summary = asyncio.run(_run_batch(orchestrator, active, cancel, handle_sigint=handle_sigint))
    record_sync_logs(summary, effective_uow)

    log.info(
        f"Finished sync: synced={summary.synced}, added={summary.added}, "
        f"skipped={summary.skipped}, errors={summary.errors}, success={summary.success}, "
        f"cancelled={summary.cancelled}"
    )
    return summary


def record_search(response: SearchResponse, unit_of_work_factory: UnitOfWorkFactory) -> None:
    with unit_of_work_factory() as uow:
        uow.repositories.search_logs.add(
            SearchLog(
                searched_name=response.searched_name,
                searched_area=response.searched_area,
                found=response.found,
                result_count=response.total,
            )
        )
        uow.commit()


def search_registry(
    *,
    name: str | None = None,
    area: str | None = None,
    limit: int | None = None,
    offset: int = 0,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    policy: MatchingConfig | None = None,
) -> SearchResponse:
    factory = _registry_uow_factory(unit_of_work_factory)
    resolver = SearchResolver(unit_of_work_factory=factory, policy=policy or get_matching_config())
    response = resolver.search(SearchQuery(name=name, area=area, limit=limit, offset=offset))
    record_search(response, factory)
    return response


def _default_notifier() -> ReportNotifier | None:
    try:
        return SmtpReportNotifier(config=get_smtp_config())
    except MissingConfigurationError as exc:
        log.info("Report notifications disabled: %s", exc)
        return None


def _report_desk(
    unit_of_work_factory: UnitOfWorkFactory | None,
    notifier: ReportNotifier | None = None,
    policy: NotificationPolicy | None = None,
) -> ReportDesk:
    return ReportDesk(
        unit_of_work_factory=_registry_uow_factory(unit_of_work_factory),
        notifier=notifier,
        policy=policy or get_notification_policy(),
    )


def submit_report(
    *,
    suspect_name: str,
    description: str,
    location: str | None = None,
    submitter_ip: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    notifier: ReportNotifier | None = None,
    policy: NotificationPolicy | None = None,
) -> ReportSubmission:
    desk = _report_desk(unit_of_work_factory, notifier or _default_notifier(), policy)
    return desk.submit(
        suspect_name=suspect_name,
        description=description,
        location=location,
        submitter_ip=submitter_ip,
    )


def review_report(
    report_id: UUID,
    status: ReportStatus,
    *,
    note: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Report:
    desk = ReportDesk(unit_of_work_factory=_registry_uow_factory(unit_of_work_factory))
    return desk.review(report_id, status, note=note)


def export_reports(
    path: Path,
    *,
    status: ReportStatus | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Path:
    factory = _registry_uow_factory(unit_of_work_factory)
    with factory() as uow:
        reports = uow.repositories.reports.list_reports(status=status)
        counts = uow.repositories.reports.count_by_status()
    return export_reports_xlsx(path, reports, counts)


def recent_sync_logs(
    limit: int = 20, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> list[SyncLog]:
    factory = _registry_uow_factory(unit_of_work_factory)
    with factory() as uow:
        return uow.repositories.sync_logs.recent(limit)


def registry_stats(*, unit_of_work_factory: UnitOfWorkFactory | None = None) -> RegistryStats:
    factory = _registry_uow_factory(unit_of_work_factory)
    with factory() as uow:
        repositories = uow.repositories
        return RegistryStats(
            case_count=repositories.cases.count(),
            cases_by_location=repositories.cases.count_by_location(),
            locations=repositories.cases.locations(),
            last_successful_sync=repositories.sync_logs.last_successful(),
            searches=repositories.search_logs.stats(),
        )
