from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING
from uuid import uuid4

import pytest

from guardianbee import main as main_module
from guardianbee.domain.ingest_pipeline import BatchSummary, SourceRunSummary
from guardianbee.domain.model import (
    MatchType,
    RegistryStats,
    Report,
    ReportStatus,
    SearchResponse,
    SearchResult,
    SearchStats,
    SyncLog,
    SyncStatus,
)
from guardianbee.domain.reporting import ReportSubmission
from tests.helpers.registry import make_case

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.fixture(autouse=True)
def quiet_entry_point(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main_module, "load_dotenv", lambda: None)
    monkeypatch.setattr(main_module, "signal", lambda *_: None)
    monkeypatch.setattr(main_module, "configure_logging", lambda **_: None)


def _exit_code(argv: list[str]) -> int | str | None:
    with pytest.raises(SystemExit) as exc_info:
        main_module.main(argv)
    return exc_info.value.code


def _fake_sync(
    captured: dict[str, object], status: SyncStatus = SyncStatus.SUCCEEDED
) -> Callable[..., BatchSummary]:
    def fake(**kwargs: object) -> BatchSummary:
        captured.update(kwargs)
        return BatchSummary(sources=[SourceRunSummary(source="news", status=status, fetched=2)])

    return fake


def test_sync_defaults(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    captured: dict[str, object] = {}
    monkeypatch.setattr(main_module, "sync_sources", _fake_sync(captured))

    assert _exit_code(["sync"]) == 0

    assert captured["sources"] is None
    assert "total: synced=2" in capsys.readouterr().out


def test_sync_with_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}
    monkeypatch.setattr(main_module, "sync_sources", _fake_sync(captured))

    code = _exit_code(
        [
            "sync",
            "--source",
            "government",
            "--source",
            "news",
            "--max-workers",
            "5",
            "--timeout",
            "12.5",
        ]
    )

    assert code == 0
    assert captured["sources"] == ["government", "news"]
    config = captured["sync_config"]
    assert config.max_workers == 5  # type: ignore[attr-defined]
    assert config.fetch_timeout_seconds == 12.5  # type: ignore[attr-defined]


def test_sync_failure_exits_with_one(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main_module, "sync_sources", _fake_sync({}, SyncStatus.FAILED))

    assert _exit_code(["sync"]) == 1


def test_interrupted_sync_prints_partial_totals_and_exits_non_zero(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    captured: dict[str, object] = {}

    def interrupted(**kwargs: object) -> BatchSummary:
        captured.update(kwargs)
        return BatchSummary(
            sources=[
                SourceRunSummary(source="news", fetched=2, status=SyncStatus.SUCCEEDED),
                SourceRunSummary(source="crc", status=SyncStatus.CANCELLED),
            ],
            cancelled=True,
        )

    monkeypatch.setattr(main_module, "sync_sources", interrupted)

    assert _exit_code(["sync"]) == main_module.EXIT_CANCELLED

    assert captured["handle_sigint"] is True
    output = capsys.readouterr()
    assert "crc        cancelled" in output.out
    assert "total: synced=2" in output.out
    assert "Sync cancelled" in output.err


def test_sync_rejects_invalid_worker_count(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main_module, "sync_sources", _fake_sync({}))

    assert _exit_code(["sync", "--max-workers", "0"]) == 2


def test_sync_rejects_unknown_source() -> None:
    # argparse reports invalid choices with exit status 2
    assert _exit_code(["sync", "--source", "myspace"]) == 2


def test_search_prints_results(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    captured: dict[str, object] = {}
    case = make_case("王○明", location="台北市")

    def fake_search(**kwargs: object) -> SearchResponse:
        captured.update(kwargs)
        return SearchResponse(
            results=[SearchResult(case=case, similarity=95, match_type=MatchType.EXACT)],
            total=1,
            searched_name="王小明",
        )

    monkeypatch.setattr(main_module, "search_registry", fake_search)

    assert _exit_code(["search", "王小明", "--area", "台北市", "--limit", "5"]) == 0

    assert captured == {"name": "王小明", "area": "台北市", "limit": 5, "offset": 0}
    out = capsys.readouterr().out
    assert "王○明" in out
    assert "1 of 1 result(s)" in out


def test_search_value_error_exits_with_two(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def fake_search(**_: object) -> SearchResponse:
        raise ValueError("offset must not be negative")

    monkeypatch.setattr(main_module, "search_registry", fake_search)

    assert _exit_code(["search", "王小明", "--offset", "-1"]) == 2
    assert "offset must not be negative" in capsys.readouterr().err


def test_report_submit(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    captured: dict[str, object] = {}
    report = Report(suspect_name="王小明", description="安親班老師體罰學童")

    def fake_submit(**kwargs: object) -> ReportSubmission:
        captured.update(kwargs)
        return ReportSubmission(report=report, notified=False, notification_error="smtp down")

    monkeypatch.setattr(main_module, "submit_report", fake_submit)

    code = _exit_code(
        ["report", "submit", "--name", "王小明", "--description", "安親班老師體罰學童"]
    )

    assert code == 0
    assert captured == {
        "suspect_name": "王小明",
        "description": "安親班老師體罰學童",
        "location": None,
        "submitter_ip": None,
    }
    output = capsys.readouterr()
    assert str(report.id) in output.out
    assert "Notification failed: smtp down" in output.err


def test_report_review(monkeypatch: pytest.MonkeyPatch) -> None:
    report_id = uuid4()
    captured: list[object] = []

    def fake_review(rid: object, status: ReportStatus, *, note: str | None = None) -> Report:
        captured.extend([rid, status, note])
        report = Report(suspect_name="王小明", description="安親班老師體罰學童")
        report.review(status, note=note)
        return report

    monkeypatch.setattr(main_module, "review_report", fake_review)

    code = _exit_code(
        ["report", "review", str(report_id), "--status", "approved", "--note", "已查證"]
    )

    assert code == 0
    assert captured == [report_id, ReportStatus.APPROVED, "已查證"]


def test_report_review_unknown_id_exits_with_one(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_review(*_: object, **__: object) -> Report:
        raise LookupError("Report not found")

    monkeypatch.setattr(main_module, "review_report", fake_review)

    assert _exit_code(["report", "review", str(uuid4()), "--status", "rejected"]) == 1


def test_report_review_cannot_target_pending() -> None:
    assert _exit_code(["report", "review", str(uuid4()), "--status", "pending"]) == 2


def test_report_export(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_export(path: Path, *, status: ReportStatus | None = None) -> Path:
        captured.update(path=path, status=status)
        return path

    monkeypatch.setattr(main_module, "export_reports", fake_export)

    assert _exit_code(["report", "export", "out.xlsx", "--status", "pending"]) == 0
    assert captured == {"path": Path("out.xlsx"), "status": ReportStatus.PENDING}


def test_unexpected_errors_exit_with_one(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken(**_: object) -> BatchSummary:
        raise RuntimeError("boom")

    monkeypatch.setattr(main_module, "sync_sources", broken)

    assert _exit_code(["sync"]) == 1


def test_stats_prints_registry_summary(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    last_sync = SyncLog(
        source_name="crc",
        status=SyncStatus.SUCCEEDED,
        started_at=datetime(2025, 3, 1, 11, 0, tzinfo=UTC),
        finished_at=datetime(2025, 3, 1, 11, 5, tzinfo=UTC),
    )
    stats = RegistryStats(
        case_count=3,
        cases_by_location={"台北市": 2, "台中市": 1},
        locations=["台中市", "台北市"],
        last_successful_sync=last_sync,
        searches=SearchStats(total_searches=4, found_results=3),
    )
    monkeypatch.setattr(main_module, "registry_stats", lambda: stats)

    assert _exit_code(["stats"]) == 0

    output = capsys.readouterr().out
    assert "cases: 3" in output
    assert "last successful sync: 2025-03-01T11:05:00+00:00 (crc)" in output
    assert "searches: total=4 found=3 not_found=1" in output
    assert "  台北市\t2" in output


def test_stats_on_a_registry_that_never_synced(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    stats = RegistryStats(
        case_count=0,
        cases_by_location={},
        locations=[],
        last_successful_sync=None,
        searches=SearchStats(),
    )
    monkeypatch.setattr(main_module, "registry_stats", lambda: stats)

    assert _exit_code(["stats"]) == 0

    assert "last successful sync: never" in capsys.readouterr().out
