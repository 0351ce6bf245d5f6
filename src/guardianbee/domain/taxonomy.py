"""Keyword classification of free text into roles and risk tags."""

from __future__ import annotations

from typing import Final

from guardianbee.domain.model import RiskTag, RoleTag

# First matching keyword wins, so more specific roles come first.
ROLE_KEYWORDS: Final[tuple[tuple[str, RoleTag], ...]] = (
    ("保母", RoleTag.NANNY),
    ("保姆", RoleTag.NANNY),
    ("褓姆", RoleTag.NANNY),
    ("托育人員", RoleTag.NANNY),
    ("居家托育", RoleTag.NANNY),
    ("nanny", RoleTag.NANNY),
    ("babysit", RoleTag.NANNY),
    ("托嬰", RoleTag.DAYCARE),
    ("daycare", RoleTag.DAYCARE),
    ("幼兒園", RoleTag.KINDERGARTEN),
    ("幼稚園", RoleTag.KINDERGARTEN),
    ("kindergarten", RoleTag.KINDERGARTEN),
    ("preschool", RoleTag.KINDERGARTEN),
    ("家教", RoleTag.TUTOR),
    ("家庭教師", RoleTag.TUTOR),
    ("私人教師", RoleTag.TUTOR),
    ("tutor", RoleTag.TUTOR),
    ("補習班", RoleTag.CRAM_SCHOOL_TEACHER),
    ("安親班", RoleTag.CRAM_SCHOOL_TEACHER),
    ("cram school", RoleTag.CRAM_SCHOOL_TEACHER),
    ("教練", RoleTag.COACH),
    ("coach", RoleTag.COACH),
    ("老師", RoleTag.SCHOOL_TEACHER),
    ("教師", RoleTag.SCHOOL_TEACHER),
    ("導師", RoleTag.SCHOOL_TEACHER),
    ("teacher", RoleTag.SCHOOL_TEACHER),
)

RISK_KEYWORDS: Final[dict[RiskTag, tuple[str, ...]]] = {
    RiskTag.ABUSE: ("虐", "傷害", "暴力", "體罰", "施暴", "毆打", "abuse", "violence"),
    RiskTag.SEXUAL_HARASSMENT: (
        "性侵",
        "性騷",
        "猥褻",
        "強制性交",
        "妨害性自主",
        "偷拍",
        "sexual",
        "molest",
    ),
    RiskTag.NEGLECT: ("疏忽", "照顧不當", "遺棄", "neglect"),
    RiskTag.IMPROPER_DISCIPLINE: ("管教", "處罰", "不當對待", "罰站", "discipline"),
    RiskTag.ILLEGAL_OPERATION: ("未立案", "違規", "超收", "無照", "unlicensed"),
    RiskTag.SAFETY_LAPSE: ("安全", "意外", "傷亡", "safety"),
}


def classify_role(*texts: str | None) -> RoleTag:
    """Map free text to a role; :attr:`RoleTag.OTHER` when nothing matches."""

    haystack = _haystack(texts)
    for keyword, role in ROLE_KEYWORDS:
        if keyword in haystack:
            return role
    return RoleTag.OTHER


def extract_risk_tags(*texts: str | None) -> frozenset[RiskTag]:
    """Every risk group whose keywords occur in the text; never empty."""

    haystack = _haystack(texts)
    tags = frozenset(
        tag
        for tag, keywords in RISK_KEYWORDS.items()
        if any(keyword in haystack for keyword in keywords)
    )
    return tags or frozenset({RiskTag.GENERIC_VIOLATION})


def _haystack(texts: tuple[str | None, ...]) -> str:
    return " ".join(text for text in texts if text).lower()
