"""Error taxonomy shared by ingestion, search and report intake."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from guardianbee.domain.model import Report


class GuardianBeeError(Exception):
    """Base class for domain errors."""


class MalformedSourceRecord(GuardianBeeError):
    """A single raw record could not be normalized; the batch continues."""

    def __init__(self, source: str, reason: str, *, record: Mapping[str, str] | None = None):
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason
        self.record = dict(record) if record is not None else None


class FetchError(GuardianBeeError):
    """A source could not deliver its raw records."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source


class FetchTimeout(FetchError):
    """A source fetch exceeded its time budget."""


class FetchUnavailable(FetchError):
    """A source is unreachable, refused the request or is outside its service hours."""


class StorageError(GuardianBeeError):
    """Base class for registry storage failures."""


class StorageUnavailable(StorageError):
    """The registry cannot be reached at all."""


class RegistryWriteError(StorageError):
    """A single write was rejected for a reason other than a duplicate key."""


class DuplicateCase(GuardianBeeError):
    """An insert collided with an existing case on a unique dedup key."""

    def __init__(self, dedup_key: str) -> None:
        super().__init__(f"Case already registered under {dedup_key}")
        self.dedup_key = dedup_key


class InvalidReport(GuardianBeeError, ValueError):
    """A report submission failed validation."""


class NotifierError(GuardianBeeError):
    """The notification channel could not deliver a message."""


class NotificationFailure(GuardianBeeError):
    """The report was stored but the downstream notification failed."""

    def __init__(self, message: str, *, report: Report) -> None:
        super().__init__(message)
        self.report = report
