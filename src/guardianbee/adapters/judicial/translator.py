"""Child-relevance screening and translation of judgments into case drafts."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final, NamedTuple
from urllib.parse import quote

from guardianbee.adapters.translation import build_draft, validate_record
from guardianbee.domain.locations import extract_location
from guardianbee.domain.model import UNKNOWN_LOCATION, CaseDraft, SourceType, is_unknown_location
from guardianbee.domain.naming import mask
from guardianbee.domain.source_links import with_position
from guardianbee.domain.taxonomy import classify_role, extract_risk_tags

from .schema import JID_PARTS, DefendantRecord

if TYPE_CHECKING:
    from guardianbee.domain.ports.fetching import RawRecord

    from .schema import JudgmentDocument

JUDGMENT_URL = "https://judgment.judicial.gov.tw/FJUD/data.aspx"

CHILD_CASE_KEYWORDS: Final[tuple[str, ...]] = (
    "性侵",
    "強制性交",
    "猥褻",
    "性騷擾",
    "妨害性自主",
    "虐待",
    "傷害",
    "遺棄",
    "凌虐",
    "兒童",
    "少年",
    "未成年",
    "幼童",
    "幼年",
    "兒童及少年福利",
    "兒少權法",
    "性侵害犯罪防治",
)

# District court prefixes in judgment ids.
COURT_LOCATIONS: Final[dict[str, str]] = {
    "TPD": "台北市",
    "SLD": "台北市",
    "PCD": "新北市",
    "TYD": "桃園市",
    "SCD": "新竹縣",
    "MLD": "苗栗縣",
    "TCD": "台中市",
    "CHD": "彰化縣",
    "NTD": "南投縣",
    "ULD": "雲林縣",
    "CYD": "嘉義縣",
    "TND": "台南市",
    "KSD": "高雄市",
    "CTD": "高雄市",
    "PTD": "屏東縣",
    "TTD": "台東縣",
    "HLD": "花蓮縣",
    "ILD": "宜蘭縣",
    "KLD": "基隆市",
    "PHD": "澎湖縣",
    "KMD": "金門縣",
    "LCD": "連江縣",
}

_DEFENDANT_PATTERN = re.compile(r"被\s*告\s*人?\s+([^\s，,。；;：:（）()]+)")
_NOT_A_NAME: Final[tuple[str, ...]] = ("律師", "辯護", "上訴", "聲請", "犯罪", "案件", "年籍")
MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 5


class JudgmentId(NamedTuple):
    court: str
    year: str
    case_type: str
    number: str
    date: str
    check: str


def parse_judgment_id(jid: str) -> JudgmentId | None:
    parts = jid.split(",")
    if len(parts) != JID_PARTS:
        return None
    return JudgmentId(*parts)


def is_child_related(title: str, content: str) -> bool:
    text = f"{title} {content}".lower()
    return any(keyword in text for keyword in CHILD_CASE_KEYWORDS)


def extract_defendants(content: str) -> list[str]:
    names: list[str] = []
    for match in _DEFENDANT_PATTERN.finditer(content):
        name = match.group(1).strip()
        if not MIN_NAME_LENGTH <= len(name) <= MAX_NAME_LENGTH:
            continue
        if any(word in name for word in _NOT_A_NAME) or name in names:
            continue
        names.append(name)
    return names


def judgment_link(jid: str) -> str:
    return f"{JUDGMENT_URL}?ty=JD&id={quote(jid, safe='')}"


def format_judgment_date(value: str) -> str | None:
    digits = value.strip()
    if len(digits) == 8 and digits.isdigit():
        return f"{digits[:4]}-{digits[4:6]}-{digits[6:]}"
    return digits or None


def court_location(jid: str) -> str:
    parsed = parse_judgment_id(jid)
    if parsed is None:
        return UNKNOWN_LOCATION
    return COURT_LOCATIONS.get(parsed.court[:3].upper(), UNKNOWN_LOCATION)


def defendant_records(document: JudgmentDocument) -> list[RawRecord]:
    """One raw record per defendant of a child-related judgment; none otherwise."""

    content = document.content
    if not is_child_related(document.title, content):
        return []
    defendants = extract_defendants(content)
    return [
        {
            "jid": document.jid,
            "defendant": name,
            "title": document.title,
            "date": document.date,
            "content": content,
            "position": str(position),
            "defendant_count": str(len(defendants)),
        }
        for position, name in enumerate(defendants, start=1)
    ]


def translate_judgment(raw: RawRecord, *, source: str = "judicial") -> CaseDraft:
    record = validate_record(DefendantRecord, raw, source=source)
    location = court_location(record.jid)
    if is_unknown_location(location):
        location = extract_location(record.content)
    return build_draft(
        source,
        raw,
        lambda: CaseDraft(
            raw_name=record.defendant,
            masked_name=mask(record.defendant),
            role=classify_role(record.title, record.content),
            risk_tags=extract_risk_tags(record.title, record.content),
            location=location,
            case_date=format_judgment_date(record.date),
            description=record.title,
            source_type=SourceType.GOVERNMENT_NOTICE,
            source_link=with_position(
                judgment_link(record.jid), record.position, record.defendant_count
            ),
            verified=True,
            external_id=record.jid,
        ),
    )
