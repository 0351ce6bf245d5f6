"""Mapping raw source records to case drafts."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from guardianbee.domain.errors import MalformedSourceRecord

if TYPE_CHECKING:
    from collections.abc import Iterable

    from guardianbee.domain.model import CaseDraft
    from guardianbee.domain.ports.fetching import RawRecord, SourceAdapter

log = getLogger(__name__)


@dataclass(slots=True)
class NormalizationOutcome:
    drafts: list[CaseDraft] = field(default_factory=list)
    errors: int = 0


def normalize_records(adapter: SourceAdapter, records: Iterable[RawRecord]) -> NormalizationOutcome:
    """Normalize every record, skipping (and counting) malformed ones."""

    outcome = NormalizationOutcome()
    for raw in records:
        try:
            outcome.drafts.append(adapter.normalize(raw))
        except MalformedSourceRecord as exc:
            outcome.errors += 1
            log.warning("Skipping malformed %s record: %s", adapter.name, exc.reason)
    return outcome
