"""Screening of news items and suspect-name extraction from headlines."""

from __future__ import annotations

import re
from dataclasses import dataclass
from email.utils import parsedate_to_datetime
from typing import TYPE_CHECKING, Final

from guardianbee.adapters.translation import build_draft, validate_record
from guardianbee.domain.locations import TAIWAN_TZ, extract_location
from guardianbee.domain.model import CaseDraft, SourceType
from guardianbee.domain.naming import MASK_GLYPH, is_masked, mask
from guardianbee.domain.source_links import with_position
from guardianbee.domain.taxonomy import classify_role, extract_risk_tags

from .schema import NewsMentionRecord

if TYPE_CHECKING:
    from guardianbee.domain.ports.fetching import RawRecord

CHILD_SAFETY_KEYWORDS: Final[tuple[str, ...]] = (
    "性侵",
    "猥褻",
    "性騷",
    "虐童",
    "虐嬰",
    "兒虐",
    "不當對待",
    "不當管教",
    "體罰",
    "兒童",
    "幼童",
    "男童",
    "女童",
    "未成年",
    "少女",
    "少年",
    "學童",
    "保母",
    "保姆",
    "托嬰",
    "幼兒園",
    "補習班",
    "安親班",
    "家教",
    "教練",
)

SUSPECT_MARKERS: Final[tuple[str, ...]] = (
    "被告人",
    "被告",
    "嫌犯",
    "男子",
    "女子",
    "保母",
    "保姆",
    "老師",
    "教師",
    "教練",
    "園長",
    "負責人",
)

# Kinship terms and victim descriptions are never suspect names.
INVALID_NAME_PARTS: Final[tuple[str, ...]] = (
    "哥哥",
    "妹妹",
    "父親",
    "母親",
    "爸爸",
    "媽媽",
    "叔叔",
    "叔伯",
    "阿姨",
    "表哥",
    "表妹",
    "堂哥",
    "堂妹",
    "男童",
    "女童",
    "父",
    "母",
    "兄",
    "姐",
    "弟",
    "妹",
)

FUNCTION_CHARACTERS: Final[frozenset[str]] = frozenset("涉被遭在於因將把對與和的稱指向為已也都就")

COMMON_SURNAMES: Final[frozenset[str]] = frozenset(
    "陳林黃張李王吳劉蔡楊許鄭謝洪郭邱曾廖賴徐周葉蘇莊呂江何蕭羅高潘簡朱鍾游彭詹胡施沈余盧梁趙顏柯翁魏孫戴"
    "范方宋鄧杜傅侯曹薛丁卓阮馬董温溫唐藍石蔣古紀姚連馮歐程湯田康姜白汪鄒尤巫鐘涂龔嚴韓袁金童陸夏柳凃邵錢"
)

_MARKER_PATTERN = re.compile(
    r"(?:" + "|".join(SUSPECT_MARKERS) + r")\s*([\u4e00-\u9fff][○〇Ｏ●某\u4e00-\u9fff]{1,2})"
)
_SURNAME_PATTERN = re.compile(
    r"([\u4e00-\u9fff])姓(?:男子|女子|男|女|" + "|".join(SUSPECT_MARKERS) + r")"
)


@dataclass(frozen=True, slots=True)
class NewsItem:
    title: str
    link: str
    summary: str = ""
    pub_date: str = ""
    feed: str = ""


def is_child_related(title: str, summary: str = "") -> bool:
    text = f"{title} {summary}"
    return any(keyword in text for keyword in CHILD_SAFETY_KEYWORDS)


def _clean_candidate(candidate: str) -> str | None:
    while len(candidate) > 2 and candidate[-1] in FUNCTION_CHARACTERS:
        candidate = candidate[:-1]
    if candidate[0] in FUNCTION_CHARACTERS:
        return None
    if any(part in candidate for part in INVALID_NAME_PARTS):
        return None
    if not is_masked(candidate) and candidate[0] not in COMMON_SURNAMES:
        return None
    return candidate


def extract_suspect_names(text: str) -> list[str]:
    """Suspect names mentioned in ``text``, in order of appearance, de-duplicated.

    ``王姓男子`` yields ``王○○``; ``某`` placeholders are kept and masked later.
    """

    found: list[tuple[int, str]] = []
    for match in _MARKER_PATTERN.finditer(text):
        name = _clean_candidate(match.group(1))
        if name is not None:
            found.append((match.start(1), name))
    for match in _SURNAME_PATTERN.finditer(text):
        surname = match.group(1)
        if surname in COMMON_SURNAMES:
            found.append((match.start(1), surname + MASK_GLYPH * 2))
    found.sort()
    return list(dict.fromkeys(name for _, name in found))


def mention_records(item: NewsItem) -> list[RawRecord]:
    """One raw record per suspect named by a child-related item; none otherwise."""

    if not is_child_related(item.title, item.summary):
        return []
    names = extract_suspect_names(f"{item.title} {item.summary}")
    return [
        {
            "title": item.title,
            "link": item.link,
            "summary": item.summary,
            "pub_date": item.pub_date,
            "feed": item.feed,
            "suspect": name,
            "position": str(position),
            "name_count": str(len(names)),
        }
        for position, name in enumerate(names, start=1)
    ]


def news_date(value: str) -> str | None:
    """RFC 822 ``pubDate`` as an ISO date in Taiwan time."""

    if not value.strip():
        return None
    try:
        published = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if published.tzinfo is None:
        published = published.replace(tzinfo=TAIWAN_TZ)
    return published.astimezone(TAIWAN_TZ).date().isoformat()


def translate_mention(raw: RawRecord, *, source: str = "news") -> CaseDraft:
    record = validate_record(NewsMentionRecord, raw, source=source)
    return build_draft(
        source,
        raw,
        lambda: CaseDraft(
            raw_name="" if is_masked(record.suspect) else record.suspect,
            masked_name=mask(record.suspect),
            role=classify_role(record.title, record.summary),
            risk_tags=extract_risk_tags(record.title, record.summary),
            location=extract_location(record.title, record.summary),
            case_date=news_date(record.pub_date),
            description=record.title,
            source_type=SourceType.MEDIA_REPORT,
            source_link=with_position(record.link, record.position, record.name_count),
            verified=False,
        ),
    )
