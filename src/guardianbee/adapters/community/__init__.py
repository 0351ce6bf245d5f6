"""Approved community reports as a case source."""

from __future__ import annotations

from .adapter import CommunityReportAdapter, CommunityReportRecord, report_record, translate_report

__all__ = [
    "CommunityReportAdapter",
    "CommunityReportRecord",
    "report_record",
    "translate_report",
]
