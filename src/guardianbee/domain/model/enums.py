"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class RoleTag(StrEnum):
    """Closed set of roles a suspect may hold towards children."""

    NANNY = "nanny"
    TUTOR = "tutor"
    CRAM_SCHOOL_TEACHER = "cram_school_teacher"
    COACH = "coach"
    SCHOOL_TEACHER = "school_teacher"
    DAYCARE = "daycare"
    KINDERGARTEN = "kindergarten"
    OTHER = "other"

    @property
    def label(self) -> str:
        return _ROLE_LABELS[self]


class RiskTag(StrEnum):
    """Closed set of violation categories."""

    ABUSE = "abuse"
    SEXUAL_HARASSMENT = "sexual_harassment"
    NEGLECT = "neglect"
    IMPROPER_DISCIPLINE = "improper_discipline"
    ILLEGAL_OPERATION = "illegal_operation"
    SAFETY_LAPSE = "safety_lapse"
    GENERIC_VIOLATION = "generic_violation"

    @property
    def label(self) -> str:
        return _RISK_LABELS[self]


class SourceType(StrEnum):
    GOVERNMENT_NOTICE = "government_notice"
    MEDIA_REPORT = "media_report"
    COMMUNITY_SIGNAL = "community_signal"


class MatchType(StrEnum):
    EXACT = "exact"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ReportStatus(StrEnum):
    PENDING = "pending"
    REVIEWING = "reviewing"
    APPROVED = "approved"
    REJECTED = "rejected"


class SyncStatus(StrEnum):
    SUCCEEDED = "succeeded"
    PARTIAL = "partial"
    FAILED = "failed"
    CANCELLED = "cancelled"


_ROLE_LABELS: dict[RoleTag, str] = {
    RoleTag.NANNY: "保母",
    RoleTag.TUTOR: "家教",
    RoleTag.CRAM_SCHOOL_TEACHER: "補習班老師",
    RoleTag.COACH: "教練",
    RoleTag.SCHOOL_TEACHER: "學校老師",
    RoleTag.DAYCARE: "托嬰中心",
    RoleTag.KINDERGARTEN: "幼兒園",
    RoleTag.OTHER: "其他",
}

_RISK_LABELS: dict[RiskTag, str] = {
    RiskTag.ABUSE: "虐待",
    RiskTag.SEXUAL_HARASSMENT: "性騷擾",
    RiskTag.NEGLECT: "疏忽照顧",
    RiskTag.IMPROPER_DISCIPLINE: "不當管教",
    RiskTag.ILLEGAL_OPERATION: "違規經營",
    RiskTag.SAFETY_LAPSE: "安全疏失",
    RiskTag.GENERIC_VIOLATION: "違反兒少法",
}
