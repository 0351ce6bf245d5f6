"""Similarity thresholds used when resolving searches."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_int
from .errors import ConfigurationError

DEFAULT_MATCH_THRESHOLD = 50
DEFAULT_EXACT_AT = 95
DEFAULT_HIGH_AT = 80
DEFAULT_MEDIUM_AT = 60
DEFAULT_SEARCH_LIMIT = 15
MAX_SEARCH_LIMIT = 100


@dataclass(frozen=True, slots=True)
class MatchingConfig:
    """Score policy: the match threshold and the match-type breakpoints.

    A candidate is a match when its score is at least ``match_threshold``.
    ``exact_at``/``high_at``/``medium_at`` are inclusive lower bounds of the
    corresponding match types; anything below ``medium_at`` is low.
    """

    match_threshold: int = DEFAULT_MATCH_THRESHOLD
    exact_at: int = DEFAULT_EXACT_AT
    high_at: int = DEFAULT_HIGH_AT
    medium_at: int = DEFAULT_MEDIUM_AT
    default_limit: int = DEFAULT_SEARCH_LIMIT
    max_limit: int = MAX_SEARCH_LIMIT

    def __post_init__(self) -> None:
        for name in ("match_threshold", "exact_at", "high_at", "medium_at"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ConfigurationError(f"{name} must be between 0 and 100, got {value}")
        if not self.medium_at <= self.high_at <= self.exact_at:
            raise ConfigurationError(
                "Match breakpoints must satisfy medium <= high <= exact "
                f"(got {self.medium_at}/{self.high_at}/{self.exact_at})"
            )
        if not 1 <= self.default_limit <= self.max_limit:
            raise ConfigurationError("default_limit must be between 1 and max_limit")


def get_matching_config() -> MatchingConfig:
    return MatchingConfig(
        match_threshold=env_int("GUARDIANBEE_MATCH_THRESHOLD", DEFAULT_MATCH_THRESHOLD),
        exact_at=env_int("GUARDIANBEE_MATCH_EXACT", DEFAULT_EXACT_AT),
        high_at=env_int("GUARDIANBEE_MATCH_HIGH", DEFAULT_HIGH_AT),
        medium_at=env_int("GUARDIANBEE_MATCH_MEDIUM", DEFAULT_MEDIUM_AT),
    )
