from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from guardianbee.domain.model import (
    CaseFilter,
    Report,
    ReportStatus,
    RiskTag,
    SearchLog,
    SearchStats,
    SyncLog,
    SyncStatus,
)
from tests.helpers.registry import make_draft

if TYPE_CHECKING:
    from collections.abc import Callable

    from guardianbee.adapters.sqlalchemy.unit_of_work import SqlAlchemyRegistryUnitOfWork
    from guardianbee.domain.model import CaseDraft

type UowFactory = Callable[[], SqlAlchemyRegistryUnitOfWork]


def _insert_all(factory: UowFactory, *drafts_and_ages: tuple[CaseDraft, int]) -> None:
    base = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)
    with factory() as uow:
        for draft, age in drafts_and_ages:
            case = uow.repositories.cases.insert(draft)
            case.created_at = base - timedelta(minutes=age)
        uow.commit()


def test_insert_round_trips_case_fields(sqlite_unit_of_work: UowFactory) -> None:
    draft = make_draft(
        "陳○華",
        raw_name="陳小華",
        case_date="2024-01-10",
        location="台中市",
        risk_tags=frozenset({RiskTag.NEGLECT, RiskTag.ABUSE}),
    )
    _insert_all(sqlite_unit_of_work, (draft, 0))

    with sqlite_unit_of_work() as uow:
        case = uow.repositories.cases.find_by_dedup_key("陳○華", "2024-01-10", "台中市")

    assert case is not None
    assert case.raw_name == "陳小華"
    assert case.risk_tags == {RiskTag.ABUSE, RiskTag.NEGLECT}
    assert case.role is draft.role
    assert case.source_type is draft.source_type
    assert case.created_at.tzinfo is not None
    assert case.dedup_key == "case:陳○華|2024-01-10|台中市"


def test_find_by_dedup_key_ignores_incomplete_keys(sqlite_unit_of_work: UowFactory) -> None:
    _insert_all(sqlite_unit_of_work, (make_draft("王○明", case_date=None), 0))

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.cases.find_by_dedup_key("王○明", None, "台北市") is None


def test_query_matches_any_variant_and_orders_newest_first(
    sqlite_unit_of_work: UowFactory,
) -> None:
    _insert_all(
        sqlite_unit_of_work,
        (make_draft("王○明", case_date="2025-01-01"), 30),
        (make_draft("陳○華", case_date="2025-01-02", raw_name="陳王華"), 10),
        (make_draft("林○○", case_date="2025-01-03"), 20),
        (make_draft("王○明", case_date="2025-01-04", location="台中市"), 0),
    )

    with sqlite_unit_of_work() as uow:
        cases, total = uow.repositories.cases.query(CaseFilter(name_variants=("王○明", "王")))
        paged, paged_total = uow.repositories.cases.query(
            CaseFilter(name_variants=("王",)), limit=1, offset=1
        )
        in_area, area_total = uow.repositories.cases.query(
            CaseFilter(name_variants=("王",), area="台北市")
        )

    assert [case.case_date for case in cases] == ["2025-01-04", "2025-01-02", "2025-01-01"]
    assert total == 3
    assert [case.case_date for case in paged] == ["2025-01-02"]
    assert paged_total == 3
    assert [case.case_date for case in in_area] == ["2025-01-02", "2025-01-01"]
    assert area_total == 2


def test_query_escapes_like_wildcards(sqlite_unit_of_work: UowFactory) -> None:
    _insert_all(sqlite_unit_of_work, (make_draft("王○明"), 0))

    with sqlite_unit_of_work() as uow:
        cases, total = uow.repositories.cases.query(CaseFilter(name_variants=("%",)))

    assert cases == []
    assert total == 0


def test_empty_filter_lists_every_case(sqlite_unit_of_work: UowFactory) -> None:
    _insert_all(
        sqlite_unit_of_work,
        (make_draft("王○明"), 0),
        (make_draft("陳○華"), 1),
    )

    with sqlite_unit_of_work() as uow:
        cases, total = uow.repositories.cases.query(CaseFilter())

    assert [case.masked_name for case in cases] == ["王○明", "陳○華"]
    assert total == 2


def test_reports_list_and_count_by_status(sqlite_unit_of_work: UowFactory) -> None:
    base = datetime(2025, 3, 1, tzinfo=UTC)
    pending = Report(suspect_name="王小明", description="在安親班打小孩被看到", created_at=base)
    approved = Report(
        suspect_name="陳小華",
        description="補習班老師體罰學生多次",
        status=ReportStatus.APPROVED,
        created_at=base + timedelta(hours=1),
    )
    with sqlite_unit_of_work() as uow:
        uow.repositories.reports.add(pending)
        uow.repositories.reports.add(approved)
        uow.commit()

    with sqlite_unit_of_work() as uow:
        everything = uow.repositories.reports.list_reports()
        only_approved = uow.repositories.reports.list_reports(status=ReportStatus.APPROVED)
        counts = uow.repositories.reports.count_by_status()

    assert [report.suspect_name for report in everything] == ["陳小華", "王小明"]
    assert [report.id for report in only_approved] == [approved.id]
    assert counts == {
        ReportStatus.PENDING: 1,
        ReportStatus.REVIEWING: 0,
        ReportStatus.APPROVED: 1,
        ReportStatus.REJECTED: 0,
    }


def test_sync_logs_recent_newest_first(sqlite_unit_of_work: UowFactory) -> None:
    base = datetime(2025, 3, 1, tzinfo=UTC)
    with sqlite_unit_of_work() as uow:
        for hour, name in enumerate(("crc", "news", "judicial")):
            uow.repositories.sync_logs.add(
                SyncLog(
                    source_name=name,
                    status=SyncStatus.SUCCEEDED,
                    started_at=base + timedelta(hours=hour),
                )
            )
        uow.commit()

    with sqlite_unit_of_work() as uow:
        recent = uow.repositories.sync_logs.recent(2)

    assert [entry.source_name for entry in recent] == ["judicial", "news"]
    assert recent[0].status is SyncStatus.SUCCEEDED


def test_case_counts_per_location(sqlite_unit_of_work: UowFactory) -> None:
    _insert_all(
        sqlite_unit_of_work,
        (make_draft("王○明", location="台北市"), 0),
        (make_draft("陳○華", location="台中市"), 1),
        (make_draft("林○○", location="台北市"), 2),
        (make_draft("張○○", location="高雄市"), 3),
        (make_draft("李○○", location="台北市", case_date=None), 4),
    )

    with sqlite_unit_of_work() as uow:
        cases = uow.repositories.cases
        count, by_location, locations = cases.count(), cases.count_by_location(), cases.locations()

    assert count == 5
    assert list(by_location.items()) == [("台北市", 3), ("台中市", 1), ("高雄市", 1)]
    assert locations == sorted(["台中市", "台北市", "高雄市"])


def test_empty_registry_has_no_locations(sqlite_unit_of_work: UowFactory) -> None:
    with sqlite_unit_of_work() as uow:
        assert uow.repositories.cases.count() == 0
        assert uow.repositories.cases.count_by_location() == {}
        assert uow.repositories.cases.locations() == []


def test_last_successful_sync_skips_failed_and_unfinished_runs(
    sqlite_unit_of_work: UowFactory,
) -> None:
    base = datetime(2025, 3, 1, tzinfo=UTC)
    runs = [
        ("crc", SyncStatus.SUCCEEDED, 0),
        ("news", SyncStatus.PARTIAL, 1),
        ("judicial", SyncStatus.FAILED, 2),
        ("ece", SyncStatus.CANCELLED, 3),
    ]
    with sqlite_unit_of_work() as uow:
        for name, status, hour in runs:
            uow.repositories.sync_logs.add(
                SyncLog(
                    source_name=name,
                    status=status,
                    started_at=base + timedelta(hours=hour),
                    finished_at=base + timedelta(hours=hour, minutes=5),
                )
            )
        uow.repositories.sync_logs.add(
            SyncLog(source_name="kindyinfo", status=SyncStatus.SUCCEEDED, started_at=base)
        )
        uow.commit()

    with sqlite_unit_of_work() as uow:
        last = uow.repositories.sync_logs.last_successful()

    assert last is not None
    assert last.source_name == "news"
    assert last.finished_at == base + timedelta(hours=1, minutes=5)


def test_last_successful_sync_is_none_without_runs(sqlite_unit_of_work: UowFactory) -> None:
    with sqlite_unit_of_work() as uow:
        assert uow.repositories.sync_logs.last_successful() is None


def test_search_log_stats_count_found_searches(sqlite_unit_of_work: UowFactory) -> None:
    with sqlite_unit_of_work() as uow:
        assert uow.repositories.search_logs.stats() == SearchStats()
        uow.repositories.search_logs.add(
            SearchLog(searched_name="王小明", found=True, result_count=2)
        )
        uow.repositories.search_logs.add(
            SearchLog(searched_name="陳小華", searched_area="台中市", result_count=0)
        )
        uow.repositories.search_logs.add(SearchLog(searched_area="台北市", found=True))
        uow.commit()

    with sqlite_unit_of_work() as uow:
        stats = uow.repositories.search_logs.stats()

    assert stats == SearchStats(total_searches=3, found_results=2)
    assert stats.not_found == 1
