"""Per-source request pacing and shared HTTP defaults."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float
from .errors import ConfigurationError

DEFAULT_USER_AGENT = "guardianbee/0.1 (+child-safety registry sync)"
GOVERNMENT_DELAY_SECONDS = 1.0
JUDICIAL_DELAY_SECONDS = 0.5
NEWS_DELAY_SECONDS = 1.0


@dataclass(frozen=True, slots=True)
class SourcePacing:
    """Minimum delay between two outbound requests to the same source."""

    government_delay_seconds: float = GOVERNMENT_DELAY_SECONDS
    judicial_delay_seconds: float = JUDICIAL_DELAY_SECONDS
    news_delay_seconds: float = NEWS_DELAY_SECONDS

    def __post_init__(self) -> None:
        for name in ("government_delay_seconds", "judicial_delay_seconds", "news_delay_seconds"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive")


def get_source_pacing() -> SourcePacing:
    return SourcePacing(
        government_delay_seconds=env_float("GUARDIANBEE_GOV_DELAY", GOVERNMENT_DELAY_SECONDS),
        judicial_delay_seconds=env_float("GUARDIANBEE_JUDICIAL_DELAY", JUDICIAL_DELAY_SECONDS),
        news_delay_seconds=env_float("GUARDIANBEE_NEWS_DELAY", NEWS_DELAY_SECONDS),
    )
