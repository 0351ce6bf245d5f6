"""Write community reports to an XLSX workbook."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final

from openpyxl import Workbook
from openpyxl.styles import Font

from guardianbee.domain.model import ReportStatus

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    from guardianbee.domain.model import Report

log = getLogger(__name__)

REPORT_COLUMNS: Final[tuple[str, ...]] = (
    "id",
    "suspectName",
    "location",
    "description",
    "status",
    "reviewNote",
    "createdAt",
    "updatedAt",
)


def _row(report: Report) -> list[str]:
    return [
        str(report.id),
        report.suspect_name,
        report.location,
        report.description,
        report.status.value,
        report.review_note or "",
        report.created_at.isoformat(),
        report.updated_at.isoformat(),
    ]


def export_reports_xlsx(
    path: Path,
    reports: Sequence[Report],
    counts: Mapping[ReportStatus, int],
) -> Path:
    """Write ``reports`` plus a per-status summary to ``path``."""

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Reports"
    sheet.append(list(REPORT_COLUMNS))
    header_font = Font(bold=True)
    for idx in range(1, len(REPORT_COLUMNS) + 1):
        sheet.cell(row=1, column=idx).font = header_font
    for report in reports:
        sheet.append(_row(report))

    summary = workbook.create_sheet("Summary")
    summary.append(["status", "count"])
    for idx in (1, 2):
        summary.cell(row=1, column=idx).font = header_font
    for status in ReportStatus:
        summary.append([status.value, counts.get(status, 0)])
    summary.append(["total", sum(counts.values())])

    path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(path)
    log.info("Exported %s report(s) to %s", len(reports), path)
    return path
