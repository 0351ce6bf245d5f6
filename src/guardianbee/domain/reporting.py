"""Report intake, moderation and the notification policy."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from guardianbee.config.notification import NotificationPolicy
from guardianbee.domain.errors import InvalidReport, NotificationFailure, NotifierError
from guardianbee.domain.locations import canonical_spelling
from guardianbee.domain.model import UNKNOWN_LOCATION, Report, ReportStatus, utcnow

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime
    from uuid import UUID

    from guardianbee.domain.ports.notification import ReportNotifier
    from guardianbee.domain.ports.unit_of_work import RegistryUnitOfWork

log = getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 10


@dataclass(frozen=True, slots=True)
class ReportSubmission:
    report: Report
    notified: bool
    notification_error: str | None = None


def notification_payload(report: Report) -> dict[str, str]:
    return {
        "suspectName": report.suspect_name,
        "location": report.location,
        "description": report.description,
        "submitterIp": report.submitter_ip or "",
        "timestamp": report.created_at.isoformat(),
    }


def validate_report(suspect_name: str, description: str, location: str | None) -> Report:
    name = suspect_name.strip()
    if not name:
        raise InvalidReport("suspect name is required")
    text = description.strip()
    if len(text) < MIN_DESCRIPTION_LENGTH:
        raise InvalidReport(
            f"description must be at least {MIN_DESCRIPTION_LENGTH} characters"
        )
    area = canonical_spelling(location.strip()) if location and location.strip() else None
    return Report(suspect_name=name, description=text, location=area or UNKNOWN_LOCATION)


@dataclass(slots=True)
class ReportDesk:
    """Stores reports first, then notifies according to ``policy``.

    Under ``BEST_EFFORT`` a failed notification is reported on the returned
    :class:`ReportSubmission`. Under ``REQUIRED`` it raises
    :class:`~guardianbee.domain.errors.NotificationFailure` carrying the
    already stored report. Storage errors propagate unchanged either way.
    """

    unit_of_work_factory: Callable[[], RegistryUnitOfWork]
    notifier: ReportNotifier | None = None
    policy: NotificationPolicy = NotificationPolicy.BEST_EFFORT

    def submit(
        self,
        *,
        suspect_name: str,
        description: str,
        location: str | None = None,
        submitter_ip: str | None = None,
        now: datetime | None = None,
    ) -> ReportSubmission:
        report = validate_report(suspect_name, description, location)
        report.submitter_ip = submitter_ip
        if now is not None:
            report.created_at = now
            report.updated_at = now

        with self.unit_of_work_factory() as uow:
            uow.repositories.reports.add(report)
            uow.commit()
        log.info("Stored report %s", report.id)

        if self.notifier is None:
            return ReportSubmission(report=report, notified=False)
        try:
            self.notifier(notification_payload(report))
        except NotifierError as exc:
            if self.policy is NotificationPolicy.REQUIRED:
                raise NotificationFailure(
                    f"Report {report.id} stored but notification failed: {exc}", report=report
                ) from exc
            log.warning("Notification for report %s failed: %s", report.id, exc)
            return ReportSubmission(report=report, notified=False, notification_error=str(exc))
        return ReportSubmission(report=report, notified=True)

    def review(
        self,
        report_id: UUID,
        status: ReportStatus,
        *,
        note: str | None = None,
    ) -> Report:
        with self.unit_of_work_factory() as uow:
            report = uow.repositories.reports.get(report_id)
            if report is None:
                raise LookupError(f"Unknown report {report_id}")
            report.review(status, note=note, now=utcnow())
            uow.commit()
        log.info("Report %s moved to %s", report_id, status)
        return report
