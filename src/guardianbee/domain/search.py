"""Resolve a (possibly masked or partial) name against the registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from guardianbee.config.matching import MatchingConfig
from guardianbee.domain.model import (
    CaseFilter,
    MatchType,
    SearchResponse,
    SearchResult,
)
from guardianbee.domain.naming import variants
from guardianbee.domain.similarity import classify, is_match, score_case

if TYPE_CHECKING:
    from collections.abc import Callable

    from guardianbee.domain.model import Case, SearchQuery
    from guardianbee.domain.ports.unit_of_work import RegistryUnitOfWork

log = getLogger(__name__)


def build_filter(query: SearchQuery) -> CaseFilter:
    name = query.normalized_name
    name_variants = tuple(variants(name)) if name else ()
    return CaseFilter(name_variants=name_variants, area=query.normalized_area)


@dataclass(slots=True)
class SearchResolver:
    """Rank registry cases against a search query.

    With a name, candidates matched by any name variant are scored and only
    those at or above the match threshold survive, best score first (newest
    first among equal scores). Without a name nothing is scored: matching
    cases come back newest first with similarity 0 and match type low.
    """

    unit_of_work_factory: Callable[[], RegistryUnitOfWork]
    policy: MatchingConfig = field(default_factory=MatchingConfig)

    def search(self, query: SearchQuery) -> SearchResponse:
        if query.offset < 0:
            raise ValueError("offset must not be negative")
        limit = self._clamp_limit(query.limit)
        name = query.normalized_name
        case_filter = build_filter(query)

        with self.unit_of_work_factory() as uow:
            if name is None:
                cases, total = uow.repositories.cases.query(
                    case_filter, limit=limit, offset=query.offset
                )
                results = [SearchResult(case, 0, MatchType.LOW) for case in cases]
            else:
                candidates, _ = uow.repositories.cases.query(case_filter)
                ranked = self._rank(name, candidates)
                total = len(ranked)
                results = ranked[query.offset : query.offset + limit]

        log.info(
            "Search name=%r area=%r: %s of %s result(s)",
            name,
            case_filter.area,
            len(results),
            total,
        )
        return SearchResponse(
            results=results,
            total=total,
            has_more=query.offset + len(results) < total,
            searched_name=name,
            searched_area=case_filter.area,
        )

    def _rank(self, name: str, candidates: list[Case]) -> list[SearchResult]:
        scored: list[SearchResult] = []
        for case in candidates:
            similarity = score_case(name, case)
            if is_match(similarity, self.policy):
                scored.append(SearchResult(case, similarity, classify(similarity, self.policy)))
        scored.sort(
            key=lambda result: (result.similarity, result.case.created_at, str(result.case.id)),
            reverse=True,
        )
        return scored

    def _clamp_limit(self, limit: int | None) -> int:
        if limit is None:
            return self.policy.default_limit
        return max(1, min(limit, self.policy.max_limit))
