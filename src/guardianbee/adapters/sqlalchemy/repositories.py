"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, or_, select

from guardianbee.adapters.sqlalchemy.errors import translate_storage_errors
from guardianbee.adapters.sqlalchemy.mappings import (
    case_table,
    report_table,
    search_log_table,
    sync_log_table,
)
from guardianbee.domain.model import (
    Case,
    Report,
    ReportStatus,
    SearchLog,
    SearchStats,
    SyncLog,
    SyncStatus,
    composite_key_of,
    dedup_key_of,
)

if TYPE_CHECKING:
    import uuid

    from sqlalchemy import ColumnElement
    from sqlalchemy.orm import Session

    from guardianbee.domain.model import CaseDraft, CaseFilter


class SqlAlchemyCaseRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_dedup_key(
        self, masked_name: str, case_date: str | None, location: str
    ) -> Case | None:
        if composite_key_of(masked_name, case_date, location) is None:
            return None
        key = dedup_key_of(masked_name, case_date, location, "")
        stmt = select(Case).where(case_table.c.dedup_key == key)
        with translate_storage_errors():
            return self.session.execute(stmt).scalar_one_or_none()

    def find_by_source_link(self, source_link: str) -> Case | None:
        stmt = select(Case).where(case_table.c.source_link == source_link)
        with translate_storage_errors():
            return self.session.execute(stmt).scalar_one_or_none()

    def insert(self, draft: CaseDraft) -> Case:
        case = Case.from_draft(draft)
        with translate_storage_errors(dedup_key=case.dedup_key):
            self.session.add(case)
            self.session.flush()
        return case

    def query(
        self,
        case_filter: CaseFilter,
        *,
        limit: int | None = None,
        offset: int = 0,
    ) -> tuple[list[Case], int]:
        conditions = _filter_conditions(case_filter)
        count_stmt = select(func.count()).select_from(case_table).where(*conditions)
        stmt = (
            select(Case)
            .where(*conditions)
            .order_by(case_table.c.created_at.desc(), case_table.c.id.desc())
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        with translate_storage_errors():
            total = self.session.execute(count_stmt).scalar_one()
            cases = list(self.session.execute(stmt).scalars())
        return cases, total

    def count(self) -> int:
        with translate_storage_errors():
            return self.session.execute(select(func.count()).select_from(case_table)).scalar_one()

    def count_by_location(self) -> dict[str, int]:
        total = func.count().label("total")
        stmt = (
            select(case_table.c.location, total)
            .group_by(case_table.c.location)
            .order_by(total.desc(), case_table.c.location)
        )
        with translate_storage_errors():
            return dict(self.session.execute(stmt).tuples().all())

    def locations(self) -> list[str]:
        stmt = (
            select(case_table.c.location)
            .distinct()
            .where(func.trim(case_table.c.location) != "")
            .order_by(case_table.c.location)
        )
        with translate_storage_errors():
            return list(self.session.execute(stmt).scalars())


def _filter_conditions(case_filter: CaseFilter) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = []
    if case_filter.name_variants:
        conditions.append(
            or_(
                *(
                    or_(
                        case_table.c.masked_name.contains(variant, autoescape=True),
                        case_table.c.raw_name.contains(variant, autoescape=True),
                    )
                    for variant in case_filter.name_variants
                )
            )
        )
    if case_filter.area is not None:
        conditions.append(case_table.c.location.contains(case_filter.area, autoescape=True))
    return conditions


class SqlAlchemyReportRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Report) -> None:
        self.session.add(entity)

    def get(self, report_id: uuid.UUID) -> Report | None:
        with translate_storage_errors():
            return self.session.get(Report, report_id)

    def list_reports(self, *, status: ReportStatus | None = None) -> list[Report]:
        stmt = select(Report).order_by(report_table.c.created_at.desc())
        if status is not None:
            stmt = stmt.where(report_table.c.status == status)
        with translate_storage_errors():
            return list(self.session.execute(stmt).scalars())

    def count_by_status(self) -> dict[ReportStatus, int]:
        stmt = select(report_table.c.status, func.count()).group_by(report_table.c.status)
        counts = dict.fromkeys(ReportStatus, 0)
        with translate_storage_errors():
            for status, count in self.session.execute(stmt):
                counts[ReportStatus(status)] = count
        return counts


class SqlAlchemySyncLogRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: SyncLog) -> None:
        self.session.add(entity)

    def recent(self, limit: int = 20) -> list[SyncLog]:
        stmt = select(SyncLog).order_by(sync_log_table.c.started_at.desc()).limit(limit)
        with translate_storage_errors():
            return list(self.session.execute(stmt).scalars())

    def last_successful(self) -> SyncLog | None:
        stmt = (
            select(SyncLog)
            .where(
                sync_log_table.c.status.in_((SyncStatus.SUCCEEDED, SyncStatus.PARTIAL)),
                sync_log_table.c.finished_at.is_not(None),
            )
            .order_by(sync_log_table.c.finished_at.desc())
            .limit(1)
        )
        with translate_storage_errors():
            return self.session.execute(stmt).scalar_one_or_none()


class SqlAlchemySearchLogRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: SearchLog) -> None:
        self.session.add(entity)

    def stats(self) -> SearchStats:
        total_stmt = select(func.count()).select_from(search_log_table)
        found_stmt = total_stmt.where(search_log_table.c.found.is_(True))
        with translate_storage_errors():
            total = self.session.execute(total_stmt).scalar_one()
            found = self.session.execute(found_stmt).scalar_one()
        return SearchStats(total_searches=total, found_results=found)
