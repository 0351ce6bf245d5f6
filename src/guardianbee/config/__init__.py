"""Application configuration helpers."""

from __future__ import annotations

from .env import env_float, env_int, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .judicial import JudicialConfig, get_judicial_config
from .matching import MatchingConfig, get_matching_config
from .notification import (
    NotificationPolicy,
    SmtpConfig,
    get_notification_policy,
    get_smtp_config,
)
from .sources import SourcePacing, get_source_pacing
from .sync import SyncConfig, get_sync_config

__all__ = [
    "ConfigurationError",
    "JudicialConfig",
    "MatchingConfig",
    "MissingConfigurationError",
    "NotificationPolicy",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SmtpConfig",
    "SourcePacing",
    "SyncConfig",
    "env_float",
    "env_int",
    "get_judicial_config",
    "get_matching_config",
    "get_notification_policy",
    "get_smtp_config",
    "get_source_pacing",
    "get_sync_config",
    "require_env_vars",
]
