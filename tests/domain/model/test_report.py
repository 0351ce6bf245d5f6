from __future__ import annotations

from datetime import UTC, datetime

import pytest

from guardianbee.domain.model import (
    FOUND_DISCLAIMER,
    NOT_FOUND_DISCLAIMER,
    MatchType,
    Report,
    ReportStatus,
    SearchQuery,
    SearchResponse,
    SearchResult,
)
from tests.helpers.registry import make_case


def test_new_report_is_pending() -> None:
    report = Report(suspect_name="王小明", description="在安親班打小孩被看到")

    assert report.status is ReportStatus.PENDING
    assert report.review_note is None


def test_review_updates_status_note_and_timestamp() -> None:
    report = Report(suspect_name="王小明", description="在安親班打小孩被看到")
    reviewed_at = datetime(2025, 2, 1, tzinfo=UTC)

    report.review(ReportStatus.APPROVED, note="已查證", now=reviewed_at)

    assert report.status is ReportStatus.APPROVED
    assert report.review_note == "已查證"
    assert report.updated_at == reviewed_at


def test_review_cannot_return_to_pending() -> None:
    report = Report(suspect_name="王小明", description="在安親班打小孩被看到")

    with pytest.raises(ValueError, match="pending"):
        report.review(ReportStatus.PENDING)


def test_search_query_normalizes_blank_name_and_all_areas() -> None:
    query = SearchQuery(name="  ", area="全部地區")

    assert query.normalized_name is None
    assert query.normalized_area is None
    assert SearchQuery(name=" 王小明 ", area=" 台北市 ").normalized_area == "台北市"


def test_search_response_disclaimer_depends_on_results() -> None:
    empty = SearchResponse()
    found = SearchResponse(results=[SearchResult(make_case(), 95, MatchType.EXACT)], total=1)

    assert not empty.found
    assert empty.disclaimer == NOT_FOUND_DISCLAIMER
    assert found.found
    assert found.disclaimer == FOUND_DISCLAIMER
