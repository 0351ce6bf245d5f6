"""Mask-aware name similarity scoring."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rapidfuzz.distance import Levenshtein

from guardianbee.config.matching import MatchingConfig
from guardianbee.domain.model import MatchType
from guardianbee.domain.naming import MASK_CHARACTERS, strip_mask

if TYPE_CHECKING:
    from guardianbee.domain.model import Case

EXACT_SCORE = 100
STRUCTURAL_SCORE = 95

_DEFAULT_POLICY = MatchingConfig()


def matches_mask(query: str, masked: str) -> bool:
    """True when ``masked`` has the query's length and agrees on every unmasked position."""

    if not query or len(query) != len(masked):
        return False
    return all(
        candidate in MASK_CHARACTERS or candidate == expected
        for expected, candidate in zip(query, masked, strict=True)
    )


def score_pair(query: str, candidate: str) -> int:
    """Score one query/candidate pair in [0, 100].

    Rules are tried in order and the first that applies decides: equal after
    stripping mask glyphs (100), structural masked match (95), otherwise
    normalized Levenshtein distance over the stripped strings.
    """

    stripped_query = strip_mask(query)
    stripped_candidate = strip_mask(candidate)
    if stripped_query and stripped_query == stripped_candidate:
        return EXACT_SCORE
    if matches_mask(query, candidate):
        return STRUCTURAL_SCORE

    max_len = max(len(stripped_query), len(stripped_candidate))
    if max_len == 0:
        return 0
    distance = Levenshtein.distance(stripped_query, stripped_candidate)
    return max(0, round(100 * (max_len - distance) / max_len))


def score(query: str, masked_name: str, raw_name: str | None = None) -> int:
    """Best score of ``query`` against the masked and, when known, raw candidate name."""

    best = score_pair(query, masked_name)
    if raw_name:
        best = max(best, score_pair(query, raw_name))
    return best


def score_case(query: str, case: Case) -> int:
    return score(query, case.masked_name, case.raw_name or None)


def classify(value: int, policy: MatchingConfig = _DEFAULT_POLICY) -> MatchType:
    if value >= policy.exact_at:
        return MatchType.EXACT
    if value >= policy.high_at:
        return MatchType.HIGH
    if value >= policy.medium_at:
        return MatchType.MEDIUM
    return MatchType.LOW


def is_match(value: int, policy: MatchingConfig = _DEFAULT_POLICY) -> bool:
    return value >= policy.match_threshold
