"""Case drafts proposed by source adapters and the registry's stored cases."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .base import TimestampedEntity
from .enums import RiskTag, RoleTag, SourceType

if TYPE_CHECKING:
    from datetime import datetime

UNKNOWN_LOCATION = "未知"
# Compared case-insensitively.
SENTINEL_LOCATIONS = frozenset({UNKNOWN_LOCATION, "unknown"})

type CompositeKey = tuple[str, str, str]


def is_unknown_location(location: str) -> bool:
    area = location.strip()
    return not area or area.casefold() in SENTINEL_LOCATIONS


def composite_key_of(
    masked_name: str, case_date: str | None, location: str
) -> CompositeKey | None:
    """Return ``(masked_name, case_date, location)`` when every part is usable."""

    name = masked_name.strip()
    date = (case_date or "").strip()
    area = location.strip()
    if not name or not date or is_unknown_location(area):
        return None
    return name, date, area


def dedup_key_of(
    masked_name: str, case_date: str | None, location: str, source_link: str
) -> str:
    """Flatten the dedup key into the string stored under a unique constraint."""

    key = composite_key_of(masked_name, case_date, location)
    if key is None:
        return f"link:{source_link}"
    return "case:" + "|".join(key)


@dataclass(frozen=True, slots=True, kw_only=True)
class CaseDraft:
    """A normalized, not yet persisted, case proposed by a source adapter."""

    masked_name: str
    source_type: SourceType
    source_link: str
    raw_name: str = ""
    role: RoleTag = RoleTag.OTHER
    risk_tags: frozenset[RiskTag] = field(
        default_factory=lambda: frozenset({RiskTag.GENERIC_VIOLATION})
    )
    location: str = UNKNOWN_LOCATION
    case_date: str | None = None
    description: str = ""
    verified: bool = False
    external_id: str | None = None

    def __post_init__(self) -> None:
        if not self.masked_name.strip():
            raise ValueError("CaseDraft.masked_name must not be empty")
        if not self.risk_tags:
            raise ValueError("CaseDraft.risk_tags must contain at least one tag")
        if not self.source_link.strip():
            raise ValueError("CaseDraft.source_link must not be empty")

    @property
    def composite_key(self) -> CompositeKey | None:
        return composite_key_of(self.masked_name, self.case_date, self.location)

    @property
    def dedup_key(self) -> str:
        return dedup_key_of(self.masked_name, self.case_date, self.location, self.source_link)


@dataclass(eq=False, kw_only=True)
class Case(TimestampedEntity):
    """A case owned by the registry. Created once, never updated in place."""

    raw_name: str
    masked_name: str
    role: RoleTag
    risk_tags: frozenset[RiskTag]
    location: str
    case_date: str | None
    description: str
    source_type: SourceType
    source_link: str
    verified: bool
    external_id: str | None = None
    dedup_key: str = ""

    def __post_init__(self) -> None:
        if not self.dedup_key:
            self.dedup_key = dedup_key_of(
                self.masked_name, self.case_date, self.location, self.source_link
            )

    @classmethod
    def from_draft(cls, draft: CaseDraft, *, now: datetime | None = None) -> Case:
        case = cls(
            raw_name=draft.raw_name,
            masked_name=draft.masked_name,
            role=draft.role,
            risk_tags=draft.risk_tags,
            location=draft.location,
            case_date=draft.case_date,
            description=draft.description,
            source_type=draft.source_type,
            source_link=draft.source_link,
            verified=draft.verified,
            external_id=draft.external_id,
            dedup_key=draft.dedup_key,
        )
        if now is not None:
            case.created_at = now
            case.updated_at = now
        return case
