"""Idempotent insertion of case drafts into the registry."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from guardianbee.domain.errors import DuplicateCase, RegistryWriteError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from guardianbee.domain.model import CaseDraft
    from guardianbee.domain.ports.persistence import CaseRepository
    from guardianbee.domain.ports.unit_of_work import RegistryUnitOfWork

log = getLogger(__name__)


@dataclass(slots=True)
class IngestCounts:
    added: int = 0
    skipped: int = 0
    errors: int = 0

    def merge(self, other: IngestCounts) -> IngestCounts:
        return IngestCounts(
            added=self.added + other.added,
            skipped=self.skipped + other.skipped,
            errors=self.errors + other.errors,
        )


class KeyedLocks:
    """One lock per dedup key, created on demand and dropped once unused."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}
        self._holders: dict[str, int] = {}

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())
            self._holders[key] = self._holders.get(key, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._guard:
                self._holders[key] -= 1
                if self._holders[key] == 0:
                    del self._holders[key]
                    del self._locks[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


@dataclass(slots=True)
class DeduplicationEngine:
    """Insert drafts that are not yet registered; skip the rest.

    A draft is a duplicate when a stored case shares its composite key
    ``(masked_name, case_date, location)`` or its ``source_link``. Each
    draft commits on its own. Writes for the same dedup key are serialized
    in-process, and the storage layer enforces the key with unique
    constraints.
    """

    unit_of_work_factory: Callable[[], RegistryUnitOfWork]
    locks: KeyedLocks = field(default_factory=KeyedLocks)

    def ingest(
        self, drafts: Iterable[CaseDraft], *, counts: IngestCounts | None = None
    ) -> IngestCounts:
        """Ingest ``drafts``, accumulating into ``counts`` when given.

        :class:`~guardianbee.domain.errors.StorageUnavailable` propagates; the
        counts accumulated up to that point stay in ``counts``.
        """

        tally = counts if counts is not None else IngestCounts()
        with self.unit_of_work_factory() as uow:
            cases = uow.repositories.cases
            for draft in drafts:
                with self.locks.hold(draft.dedup_key):
                    try:
                        if _is_registered(cases, draft):
                            tally.skipped += 1
                            continue
                        cases.insert(draft)
                        uow.commit()
                    except DuplicateCase:
                        uow.rollback()
                        tally.skipped += 1
                    except RegistryWriteError as exc:
                        uow.rollback()
                        tally.errors += 1
                        log.warning("Failed to store case from %s: %s", draft.source_link, exc)
                    else:
                        tally.added += 1
        return tally


def _is_registered(cases: CaseRepository, draft: CaseDraft) -> bool:
    key = draft.composite_key
    if key is not None and cases.find_by_dedup_key(*key) is not None:
        return True
    return cases.find_by_source_link(draft.source_link) is not None
