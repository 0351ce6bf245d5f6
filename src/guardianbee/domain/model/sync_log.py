"""Audit records of source synchronisation runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .base import Entity, utcnow

if TYPE_CHECKING:
    from datetime import datetime

    from .enums import SyncStatus


@dataclass(eq=False, kw_only=True)
class SyncLog(Entity):
    source_name: str
    status: SyncStatus
    record_count: int = 0
    added: int = 0
    skipped: int = 0
    errors: int = 0
    error_message: str | None = None
    started_at: datetime = field(default_factory=utcnow)
    finished_at: datetime | None = None
