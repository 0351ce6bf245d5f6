"""Best-effort extraction of Taiwan's administrative divisions from text."""

from __future__ import annotations

from datetime import timedelta, timezone
from typing import Final

from guardianbee.domain.model import UNKNOWN_LOCATION

TAIWAN_TZ: Final = timezone(timedelta(hours=8), name="Asia/Taipei")

DIVISIONS: Final[tuple[str, ...]] = (
    "台北市",
    "新北市",
    "桃園市",
    "台中市",
    "台南市",
    "高雄市",
    "基隆市",
    "新竹市",
    "新竹縣",
    "苗栗縣",
    "彰化縣",
    "南投縣",
    "雲林縣",
    "嘉義市",
    "嘉義縣",
    "屏東縣",
    "宜蘭縣",
    "花蓮縣",
    "台東縣",
    "澎湖縣",
    "金門縣",
    "連江縣",
)


def canonical_spelling(text: str) -> str:
    """Fold alternate spellings ("臺" for "台") onto one canonical form."""

    return text.replace("臺", "台")


def extract_location(*texts: str | None) -> str:
    """Return the division mentioned first across ``texts``, or :data:`UNKNOWN_LOCATION`."""

    for text in texts:
        if not text:
            continue
        normalized = canonical_spelling(text)
        hits = [(normalized.find(division), division) for division in DIVISIONS]
        found = [hit for hit in hits if hit[0] >= 0]
        if found:
            return min(found)[1]
    return UNKNOWN_LOCATION
