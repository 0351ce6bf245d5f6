from __future__ import annotations

from datetime import UTC, datetime, timedelta

from guardianbee.app import registry_stats, search_registry
from guardianbee.config import MatchingConfig
from guardianbee.domain.model import SearchLog, SearchStats, SyncLog, SyncStatus
from tests.helpers.registry import FakeRegistry, make_case


def test_every_search_is_logged() -> None:
    registry = FakeRegistry()
    registry.cases.items.extend([make_case("王○明"), make_case("王○明", case_date="2025-02-01")])

    hit = search_registry(
        name="王小明", unit_of_work_factory=registry.unit_of_work, policy=MatchingConfig()
    )
    miss = search_registry(
        name="不存在的人名",
        area="台中市",
        unit_of_work_factory=registry.unit_of_work,
        policy=MatchingConfig(),
    )

    assert hit.found
    assert not miss.found
    logged = [
        (entry.searched_name, entry.searched_area, entry.found, entry.result_count)
        for entry in registry.search_logs.items
    ]
    assert logged == [("王小明", None, True, 2), ("不存在的人名", "台中市", False, 0)]
    assert registry.commits == 2


def test_registry_stats_summarizes_cases_syncs_and_searches() -> None:
    registry = FakeRegistry()
    registry.cases.items.extend(
        [
            make_case("王○明", location="台北市"),
            make_case("陳○華", location="台中市"),
            make_case("林○○", location="台北市"),
        ]
    )
    finished = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)
    registry.sync_logs.items.extend(
        [
            SyncLog(
                source_name="crc",
                status=SyncStatus.SUCCEEDED,
                started_at=finished - timedelta(hours=2),
                finished_at=finished - timedelta(hours=1),
            ),
            SyncLog(
                source_name="news",
                status=SyncStatus.FAILED,
                started_at=finished - timedelta(minutes=10),
                finished_at=finished,
            ),
        ]
    )
    registry.search_logs.items.extend(
        [SearchLog(searched_name="王小明", found=True, result_count=1), SearchLog()]
    )

    stats = registry_stats(unit_of_work_factory=registry.unit_of_work)

    assert stats.case_count == 3
    assert stats.cases_by_location == {"台北市": 2, "台中市": 1}
    assert stats.locations == ["台中市", "台北市"]
    assert stats.last_successful_sync is not None
    assert stats.last_successful_sync.source_name == "crc"
    assert stats.searches == SearchStats(total_searches=2, found_results=1)


def test_registry_stats_on_an_empty_registry() -> None:
    stats = registry_stats(unit_of_work_factory=FakeRegistry().unit_of_work)

    assert stats.case_count == 0
    assert stats.cases_by_location == {}
    assert stats.locations == []
    assert stats.last_successful_sync is None
    assert stats.searches.not_found == 0
