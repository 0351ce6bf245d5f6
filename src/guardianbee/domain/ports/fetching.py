"""Ports for obtaining raw source records and normalizing them."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from guardianbee.domain.model import CaseDraft, SourceType

type RawRecord = Mapping[str, str]


@dataclass(slots=True)
class FetchResult:
    """Raw field sets delivered by one source fetch.

    ``failed_items`` counts items the source listed but could not deliver
    (e.g. a single judgment document that failed to download).
    """

    records: list[RawRecord] = field(default_factory=list)
    failed_items: int = 0


@runtime_checkable
class SourceAdapter(Protocol):
    """One external source: fetches raw field sets and maps each to a draft.

    ``normalize`` raises :class:`~guardianbee.domain.errors.MalformedSourceRecord`
    for a record it cannot map; ``fetch`` raises
    :class:`~guardianbee.domain.errors.FetchError` subclasses when the source
    as a whole is unreachable.
    """

    @property
    def name(self) -> str: ...

    @property
    def source_type(self) -> SourceType: ...

    async def fetch(self) -> FetchResult: ...

    def normalize(self, raw: RawRecord) -> CaseDraft: ...
