"""Translate government registry rows into case drafts."""

from __future__ import annotations

from typing import TYPE_CHECKING

from guardianbee.adapters.translation import build_draft, validate_record
from guardianbee.domain.locations import extract_location
from guardianbee.domain.model import CaseDraft, RoleTag, SourceType
from guardianbee.domain.naming import mask
from guardianbee.domain.source_links import synthesize_source_link
from guardianbee.domain.taxonomy import classify_role, extract_risk_tags

from .schema import CrcSanctionRow, EcePenaltyRow, KindyInfoPenaltyRow, NcwisPenaltyRow

if TYPE_CHECKING:
    from guardianbee.domain.ports.fetching import RawRecord


def translate_crc(raw: RawRecord, *, source: str = "crc") -> CaseDraft:
    row = validate_record(CrcSanctionRow, raw, source=source)
    return build_draft(
        source,
        raw,
        lambda: CaseDraft(
            raw_name=row.target,
            masked_name=mask(row.target),
            role=classify_role(row.target, row.violation),
            risk_tags=extract_risk_tags(row.violation),
            location=extract_location(row.county, row.target),
            case_date=row.date,
            description=f"違反{row.violation}",
            source_type=SourceType.GOVERNMENT_NOTICE,
            source_link=synthesize_source_link(
                row.page_url, row.county, row.target, row.violation, row.date
            ),
            verified=True,
        ),
    )


def translate_ncwis(raw: RawRecord, *, source: str = "ncwis") -> CaseDraft:
    row = validate_record(NcwisPenaltyRow, raw, source=source)
    role = RoleTag.DAYCARE if "托嬰" in row.category else RoleTag.NANNY
    category = row.category or "托育人員"
    violation = row.violation or "違反兒少相關法規"
    return build_draft(
        source,
        raw,
        lambda: CaseDraft(
            raw_name=row.name,
            masked_name=mask(row.name),
            role=role,
            risk_tags=extract_risk_tags(row.violation, row.category),
            location=extract_location(row.location, row.name),
            case_date=row.date,
            description=f"{category} - {violation}",
            source_type=SourceType.GOVERNMENT_NOTICE,
            source_link=synthesize_source_link(
                row.page_url, row.name, row.category, row.violation, row.date
            ),
            verified=True,
        ),
    )


def translate_ece(raw: RawRecord, *, source: str = "ece") -> CaseDraft:
    row = validate_record(EcePenaltyRow, raw, source=source)
    violation = row.violation or "違反幼兒教育及照顧法"
    return build_draft(
        source,
        raw,
        lambda: CaseDraft(
            raw_name=row.kindergarten,
            masked_name=row.kindergarten,
            role=RoleTag.KINDERGARTEN,
            risk_tags=extract_risk_tags(row.violation),
            location=extract_location(row.location, row.kindergarten),
            case_date=row.date,
            description=f"幼兒園 - {violation}",
            source_type=SourceType.GOVERNMENT_NOTICE,
            source_link=synthesize_source_link(
                row.page_url, row.kindergarten, row.violation, row.date
            ),
            verified=True,
        ),
    )


def translate_kindyinfo(raw: RawRecord, *, source: str = "kindyinfo") -> CaseDraft:
    row = validate_record(KindyInfoPenaltyRow, raw, source=source)
    penalty = row.penalty or (f"裁罰 {row.count} 次" if row.count else "違反幼兒教育及照顧法")
    return build_draft(
        source,
        raw,
        lambda: CaseDraft(
            raw_name=row.name,
            masked_name=row.name,
            role=RoleTag.KINDERGARTEN,
            risk_tags=extract_risk_tags(row.penalty),
            location=extract_location(row.city, row.name),
            case_date=row.date,
            description=f"{row.name} - {penalty}",
            source_type=SourceType.GOVERNMENT_NOTICE,
            source_link=synthesize_source_link(
                row.page_url, row.date, row.city, row.district, row.name
            ),
            verified=True,
        ),
    )
