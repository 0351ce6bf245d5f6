"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import FetchResult, RawRecord, SourceAdapter
from .notification import ReportNotifier
from .persistence import CaseRepository, ReportRepository, Repository, SyncLogRepository
from .unit_of_work import (
    RegistryRepositories,
    RegistryUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "CaseRepository",
    "FetchResult",
    "RawRecord",
    "RegistryRepositories",
    "RegistryUnitOfWork",
    "ReportNotifier",
    "ReportRepository",
    "Repository",
    "RepositoryCollection",
    "SourceAdapter",
    "SyncLogRepository",
    "UnitOfWork",
]
