"""Synchronization defaults for the ingestion orchestrator."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float, env_int
from .errors import ConfigurationError

DEFAULT_MAX_WORKERS = 3
DEFAULT_FETCH_TIMEOUT_SECONDS = 300.0


@dataclass(frozen=True, slots=True)
class SyncConfig:
    max_workers: int = DEFAULT_MAX_WORKERS
    fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ConfigurationError("max_workers must be at least 1")
        if self.fetch_timeout_seconds <= 0:
            raise ConfigurationError("fetch_timeout_seconds must be positive")


def get_sync_config() -> SyncConfig:
    return SyncConfig(
        max_workers=env_int("GUARDIANBEE_SYNC_WORKERS", DEFAULT_MAX_WORKERS),
        fetch_timeout_seconds=env_float(
            "GUARDIANBEE_FETCH_TIMEOUT", DEFAULT_FETCH_TIMEOUT_SECONDS
        ),
    )
