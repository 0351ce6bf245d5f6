"""Community reports submitted by users and reviewed by moderators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .base import TimestampedEntity
from .case import UNKNOWN_LOCATION
from .enums import ReportStatus

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(eq=False, kw_only=True)
class Report(TimestampedEntity):
    suspect_name: str
    description: str
    location: str = UNKNOWN_LOCATION
    status: ReportStatus = ReportStatus.PENDING
    review_note: str | None = None
    submitter_ip: str | None = None

    def review(
        self, status: ReportStatus, *, note: str | None = None, now: datetime | None = None
    ) -> None:
        if status is ReportStatus.PENDING:
            raise ValueError("A report cannot be moved back to pending")
        self.status = status
        if note is not None:
            self.review_note = note
        self.touch(now)
