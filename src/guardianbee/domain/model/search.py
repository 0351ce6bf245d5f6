"""Search queries, structured registry filters and ranked results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .case import Case
    from .enums import MatchType

ALL_AREAS = "全部地區"
FOUND_DISCLAIMER = "本資料僅供參考，非絕對比對結果。如有疑慮，請進一步查證。"
NOT_FOUND_DISCLAIMER = "本資料庫查無異常紀錄（這不代表 100% 安全，請持續保持警覺）"


@dataclass(frozen=True, slots=True)
class SearchQuery:
    name: str | None = None
    area: str | None = None
    limit: int | None = None
    offset: int = 0

    @property
    def normalized_name(self) -> str | None:
        if self.name is None:
            return None
        return self.name.strip() or None

    @property
    def normalized_area(self) -> str | None:
        if self.area is None:
            return None
        area = self.area.strip()
        if not area or area == ALL_AREAS:
            return None
        return area


@dataclass(frozen=True, slots=True)
class CaseFilter:
    """Structured registry predicate.

    A case matches when any of ``name_variants`` is a substring of its masked
    (or raw) name and, if ``area`` is set, its location contains ``area``.
    An empty filter matches every case.
    """

    name_variants: tuple[str, ...] = ()
    area: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.name_variants and self.area is None

    def matches(self, case: Case) -> bool:
        if self.name_variants and not any(
            variant in case.masked_name or (case.raw_name and variant in case.raw_name)
            for variant in self.name_variants
        ):
            return False
        return self.area is None or self.area in case.location


@dataclass(frozen=True, slots=True)
class SearchResult:
    case: Case
    similarity: int
    match_type: MatchType


@dataclass(frozen=True, slots=True)
class SearchResponse:
    results: list[SearchResult] = field(default_factory=list)
    total: int = 0
    has_more: bool = False
    searched_name: str | None = None
    searched_area: str | None = None

    @property
    def found(self) -> bool:
        return bool(self.results)

    @property
    def disclaimer(self) -> str:
        return FOUND_DISCLAIMER if self.found else NOT_FOUND_DISCLAIMER
