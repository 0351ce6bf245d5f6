"""Report notification configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import StrEnum

from .env import env_int, require_env_vars
from .errors import ConfigurationError

DEFAULT_SMTP_PORT = 587


class NotificationPolicy(StrEnum):
    """Whether a failed notification fails the report submission."""

    BEST_EFFORT = "best-effort"
    REQUIRED = "required"


@dataclass(frozen=True, slots=True)
class SmtpConfig:
    host: str
    port: int
    user: str
    password: str
    recipient: str
    sender: str
    use_starttls: bool = True


def get_notification_policy() -> NotificationPolicy:
    raw = os.getenv("GUARDIANBEE_NOTIFY_POLICY", NotificationPolicy.BEST_EFFORT.value)
    try:
        return NotificationPolicy(raw.strip().lower())
    except ValueError as exc:
        choices = ", ".join(policy.value for policy in NotificationPolicy)
        raise ConfigurationError(
            f"GUARDIANBEE_NOTIFY_POLICY must be one of: {choices} (got {raw!r})"
        ) from exc


def get_smtp_config() -> SmtpConfig:
    values = require_env_vars(("SMTP_HOST", "SMTP_USER", "SMTP_PASSWORD", "REPORT_NOTIFY_TO"))
    sender = os.getenv("REPORT_NOTIFY_FROM") or values["SMTP_USER"]
    return SmtpConfig(
        host=values["SMTP_HOST"],
        port=env_int("SMTP_PORT", DEFAULT_SMTP_PORT),
        user=values["SMTP_USER"],
        password=values["SMTP_PASSWORD"],
        recipient=values["REPORT_NOTIFY_TO"],
        sender=sender,
    )
