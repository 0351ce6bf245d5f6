"""Report export adapters."""

from __future__ import annotations

from .xlsx import REPORT_COLUMNS, export_reports_xlsx

__all__ = ["REPORT_COLUMNS", "export_reports_xlsx"]
