"""Turn moderator-approved community reports into unverified case drafts."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from guardianbee.adapters.translation import build_draft, validate_record
from guardianbee.domain.locations import TAIWAN_TZ, canonical_spelling, extract_location
from guardianbee.domain.model import (
    UNKNOWN_LOCATION,
    CaseDraft,
    ReportStatus,
    SourceType,
    is_unknown_location,
)
from guardianbee.domain.naming import is_masked, mask
from guardianbee.domain.ports.fetching import FetchResult, SourceAdapter
from guardianbee.domain.taxonomy import classify_role, extract_risk_tags

if TYPE_CHECKING:
    from collections.abc import Callable

    from guardianbee.domain.model import Report
    from guardianbee.domain.ports.fetching import RawRecord
    from guardianbee.domain.ports.unit_of_work import RegistryUnitOfWork

log = getLogger(__name__)

SOURCE_LINK_PREFIX = "community:report:"


class CommunityReportRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    report_id: str = Field(min_length=1)
    suspect_name: str = Field(min_length=1)
    description: str = ""
    location: str = UNKNOWN_LOCATION
    created_at: datetime | None = None


def report_record(report: Report) -> RawRecord:
    return {
        "report_id": str(report.id),
        "suspect_name": report.suspect_name,
        "description": report.description,
        "location": report.location,
        "created_at": report.created_at.isoformat(),
    }


def translate_report(raw: RawRecord, *, source: str = "community") -> CaseDraft:
    record = validate_record(CommunityReportRecord, raw, source=source)
    location = canonical_spelling(record.location) or UNKNOWN_LOCATION
    if is_unknown_location(location):
        location = extract_location(record.description)
    case_date = None
    if record.created_at is not None:
        case_date = record.created_at.astimezone(TAIWAN_TZ).date().isoformat()
    return build_draft(
        source,
        raw,
        lambda: CaseDraft(
            raw_name="" if is_masked(record.suspect_name) else record.suspect_name,
            masked_name=mask(record.suspect_name),
            role=classify_role(record.description),
            risk_tags=extract_risk_tags(record.description),
            location=location,
            case_date=case_date,
            description=record.description,
            source_type=SourceType.COMMUNITY_SIGNAL,
            source_link=f"{SOURCE_LINK_PREFIX}{record.report_id}",
            verified=False,
            external_id=record.report_id,
        ),
    )


@dataclass(slots=True)
class CommunityReportAdapter:
    """Reads approved reports from the registry's own store."""

    unit_of_work_factory: Callable[[], RegistryUnitOfWork]

    @property
    def name(self) -> str:
        return "community"

    @property
    def source_type(self) -> SourceType:
        return SourceType.COMMUNITY_SIGNAL

    async def fetch(self) -> FetchResult:
        records = await asyncio.to_thread(self._approved_records)
        log.info("Community: %s approved report(s)", len(records))
        return FetchResult(records=records)

    def normalize(self, raw: RawRecord) -> CaseDraft:
        return translate_report(raw, source=self.name)

    def _approved_records(self) -> list[RawRecord]:
        with self.unit_of_work_factory() as uow:
            reports = uow.repositories.reports.list_reports(status=ReportStatus.APPROVED)
            return [report_record(report) for report in reports]


if TYPE_CHECKING:
    _adapter_check: type[SourceAdapter] = CommunityReportAdapter
