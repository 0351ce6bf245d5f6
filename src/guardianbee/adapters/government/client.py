"""Fetch and normalize government penalty registries."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from guardianbee.adapters.http_resilience import (
    RateLimit,
    ResilienceConfig,
    ResilientClient,
    translate_http_errors,
)
from guardianbee.config.sources import DEFAULT_USER_AGENT, GOVERNMENT_DELAY_SECONDS
from guardianbee.domain.model import SourceType
from guardianbee.domain.ports.fetching import FetchResult, SourceAdapter

from .parser import parse_crc, parse_ece, parse_kindyinfo, parse_ncwis
from .translator import translate_crc, translate_ece, translate_kindyinfo, translate_ncwis

if TYPE_CHECKING:
    from guardianbee.domain.model import CaseDraft
    from guardianbee.domain.ports.fetching import RawRecord

log = getLogger(__name__)

_TIMEOUT_SECONDS = 30.0


class RegistryKind(StrEnum):
    CRC = "crc"
    NCWIS = "ncwis"
    ECE = "ece"
    KINDYINFO = "kindyinfo"


@dataclass(frozen=True, slots=True)
class RegistryPage:
    kind: RegistryKind
    title: str
    urls: tuple[str, ...]


GOVERNMENT_REGISTRIES: tuple[RegistryPage, ...] = (
    RegistryPage(
        RegistryKind.CRC,
        "CRC兒少法裁罰公告",
        ("https://crc.sfaa.gov.tw/ChildYoungLaw/Sanction",),
    ),
    RegistryPage(
        RegistryKind.NCWIS,
        "衛福部托育媒合平臺",
        ("https://ncwisweb.sfaa.gov.tw/home/penalty",),
    ),
    RegistryPage(
        RegistryKind.ECE,
        "全國教保資訊網",
        ("https://ap.ece.moe.edu.tw/webecems/punishSearch.aspx",),
    ),
    RegistryPage(
        RegistryKind.KINDYINFO,
        "KindyInfo幼園通",
        (
            "https://www.kindyinfo.com/blog/preschool-penalties",
            "https://www.kindyinfo.com/blog/preschool-penalties/2024",
            "https://www.kindyinfo.com/blog/preschool-penalties/2023",
        ),
    ),
)

type _Parser = Callable[[str, str], list[RawRecord]]
type _Translator = Callable[..., CaseDraft]

_HANDLERS: dict[RegistryKind, tuple[_Parser, _Translator]] = {
    RegistryKind.CRC: (parse_crc, translate_crc),
    RegistryKind.NCWIS: (parse_ncwis, translate_ncwis),
    RegistryKind.ECE: (parse_ece, translate_ece),
    RegistryKind.KINDYINFO: (parse_kindyinfo, translate_kindyinfo),
}


def government_resilience(delay_seconds: float = GOVERNMENT_DELAY_SECONDS) -> ResilienceConfig:
    return ResilienceConfig(
        name="government",
        timeout_seconds=_TIMEOUT_SECONDS,
        ratelimit=RateLimit.paced(delay_seconds),
        default_headers={
            "User-Agent": DEFAULT_USER_AGENT,
            "Accept-Language": "zh-TW,zh;q=0.9",
        },
    )


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class GovernmentRegistryAdapter:
    """One government registry; every listed page is fetched in order."""

    page: RegistryPage
    resilience: ResilienceConfig = field(default_factory=government_resilience)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    @property
    def name(self) -> str:
        return self.page.kind.value

    @property
    def source_type(self) -> SourceType:
        return SourceType.GOVERNMENT_NOTICE

    async def fetch(self) -> FetchResult:
        parse, _ = _HANDLERS[self.page.kind]
        result = FetchResult()
        async with self.client_factory(self.resilience) as client:
            for url in self.page.urls:
                async with translate_http_errors(self.name):
                    response = await client.get(url)
                    response.raise_for_status()
                rows = parse(response.text, url)
                log.info("%s: %s row(s) from %s", self.page.title, len(rows), url)
                result.records.extend(rows)
        return result

    def normalize(self, raw: RawRecord) -> CaseDraft:
        _, translate = _HANDLERS[self.page.kind]
        return translate(raw, source=self.name)


def government_adapters(
    *,
    resilience: ResilienceConfig | None = None,
    pages: tuple[RegistryPage, ...] = GOVERNMENT_REGISTRIES,
) -> list[GovernmentRegistryAdapter]:
    config = resilience or government_resilience()
    return [GovernmentRegistryAdapter(page=page, resilience=config) for page in pages]


if TYPE_CHECKING:
    _adapter_check: SourceAdapter = GovernmentRegistryAdapter(page=GOVERNMENT_REGISTRIES[0])
