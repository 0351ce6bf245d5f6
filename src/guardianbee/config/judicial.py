"""Judicial open-data API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars

JUDICIAL_BASE_URL = "https://data.judicial.gov.tw/jdg/api"
JUDICIAL_TIMEOUT_SECONDS = 60.0
DEFAULT_MAX_DOCUMENTS = 500


@dataclass(frozen=True, slots=True)
class JudicialConfig:
    """Holds judicial API credentials and run limits."""

    user: str
    password: str
    base_url: str = JUDICIAL_BASE_URL
    timeout_seconds: float = JUDICIAL_TIMEOUT_SECONDS
    max_documents: int = DEFAULT_MAX_DOCUMENTS


def get_judicial_config(*, max_documents: int | None = None) -> JudicialConfig:
    values = require_env_vars(("JUDICIAL_API_USER", "JUDICIAL_API_PASSWORD"))
    return JudicialConfig(
        user=values["JUDICIAL_API_USER"],
        password=values["JUDICIAL_API_PASSWORD"],
        max_documents=max_documents or DEFAULT_MAX_DOCUMENTS,
    )
