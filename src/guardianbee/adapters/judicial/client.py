"""Judicial open-data API client: token handling, change lists, documents."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from guardianbee.adapters.http_resilience import (
    RateLimit,
    ResilienceConfig,
    ResilientClient,
    translate_http_errors,
)
from guardianbee.config.judicial import JudicialConfig, get_judicial_config
from guardianbee.config.sources import DEFAULT_USER_AGENT, JUDICIAL_DELAY_SECONDS
from guardianbee.domain.errors import FetchUnavailable
from guardianbee.domain.locations import TAIWAN_TZ
from guardianbee.domain.model import SourceType
from guardianbee.domain.ports.fetching import FetchResult, SourceAdapter

from .schema import AuthResponse, JudgmentDocument, JudgmentListDay
from .translator import defendant_records, translate_judgment

if TYPE_CHECKING:
    from guardianbee.domain.model import CaseDraft
    from guardianbee.domain.ports.fetching import RawRecord

log = getLogger(__name__)

SERVICE_START_HOUR = 0
SERVICE_END_HOUR = 6
TOKEN_TTL = timedelta(hours=5, minutes=30)


def in_service_window(now: datetime) -> bool:
    """The API only answers between 00:00 and 06:00 Taiwan time."""

    local = now.astimezone(TAIWAN_TZ)
    return SERVICE_START_HOUR <= local.hour < SERVICE_END_HOUR


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JudicialAPIError(RuntimeError):
    """Raised when the judicial API answers with an error payload."""

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


@dataclass(slots=True)
class TokenCache:
    """Bearer token of one client, valid until ``expires_at``."""

    ttl: timedelta = TOKEN_TTL
    token: str | None = None
    expires_at: datetime | None = None

    def get(self, now: datetime) -> str | None:
        if self.token is None or self.expires_at is None or now >= self.expires_at:
            return None
        return self.token

    def store(self, token: str, now: datetime) -> str:
        self.token = token
        self.expires_at = now + self.ttl
        return token

    def clear(self) -> None:
        self.token = None
        self.expires_at = None


def judicial_resilience(
    config: JudicialConfig | None = None,
    delay_seconds: float = JUDICIAL_DELAY_SECONDS,
) -> ResilienceConfig:
    active = config or get_judicial_config()
    return ResilienceConfig(
        name="judicial",
        base_url=active.base_url,
        timeout_seconds=active.timeout_seconds,
        ratelimit=RateLimit.paced(delay_seconds),
        default_headers={"User-Agent": DEFAULT_USER_AGENT},
    )


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class JudicialRecordAdapter:
    """Child-related judgments published in the last week, one record per defendant."""

    config: JudicialConfig = field(default_factory=get_judicial_config)
    resilience: ResilienceConfig | None = None
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    token_cache: TokenCache = field(default_factory=TokenCache)
    clock: Callable[[], datetime] = _utcnow

    @property
    def name(self) -> str:
        return "judicial"

    @property
    def source_type(self) -> SourceType:
        return SourceType.GOVERNMENT_NOTICE

    async def fetch(self) -> FetchResult:
        if not in_service_window(self.clock()):
            raise FetchUnavailable(
                self.name, "the judicial API only serves requests 00:00-06:00 Asia/Taipei"
            )

        result = FetchResult()
        resilience = self.resilience or judicial_resilience(self.config)
        async with self.client_factory(resilience) as client:
            try:
                jids = await self._changed_judgments(client)
            except (JudicialAPIError, ValidationError) as exc:
                raise FetchUnavailable(self.name, f"change list unavailable: {exc}") from exc

            for jid in jids[: self.config.max_documents]:
                try:
                    document = await self._document(client, jid)
                except (FetchUnavailable, JudicialAPIError, ValidationError) as exc:
                    result.failed_items += 1
                    log.warning("Skipping judgment %s: %s", jid, exc)
                    continue
                result.records.extend(defendant_records(document))

        log.info(
            "Judicial: %s judgment(s) listed, %s defendant record(s), %s failure(s)",
            len(jids),
            len(result.records),
            result.failed_items,
        )
        return result

    def normalize(self, raw: RawRecord) -> CaseDraft:
        return translate_judgment(raw, source=self.name)

    async def _token(self, client: ResilientClient) -> str:
        now = self.clock()
        cached = self.token_cache.get(now)
        if cached is not None:
            return cached
        payload = await self._post(
            client, "/Auth", {"user": self.config.user, "password": self.config.password}
        )
        auth = AuthResponse.model_validate(payload)
        log.info("Obtained judicial API token")
        return self.token_cache.store(auth.token, now)

    async def _changed_judgments(self, client: ResilientClient) -> list[str]:
        token = await self._token(client)
        payload = await self._post(client, "/JList", {"token": token})
        if not isinstance(payload, list):
            raise JudicialAPIError("Unexpected change list payload")
        days = [JudgmentListDay.model_validate(item) for item in payload]
        return [jid for day in days for jid in day.jids]

    async def _document(self, client: ResilientClient, jid: str) -> JudgmentDocument:
        token = await self._token(client)
        payload = await self._post(client, "/JDoc", {"token": token, "j": jid})
        return JudgmentDocument.model_validate(payload)

    async def _post(
        self, client: ResilientClient, path: str, body: dict[str, str]
    ) -> object:
        async with translate_http_errors(self.name):
            response = await client.post(path, json=body)
            response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as exc:
            raise JudicialAPIError(f"Invalid JSON from {path}") from exc
        if isinstance(payload, dict) and payload.get("error"):
            message = str(payload["error"])
            if "token" in message.lower():
                self.token_cache.clear()
            code = payload.get("code")
            raise JudicialAPIError(message, code=str(code) if code is not None else None)
        return payload


if TYPE_CHECKING:
    _adapter_check: SourceAdapter = JudicialRecordAdapter()
