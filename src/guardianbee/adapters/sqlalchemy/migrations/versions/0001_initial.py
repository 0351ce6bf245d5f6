"""Create the cases, reports and sync_logs tables.

Revision ID: 0001
Revises:
Create Date: 2026-10-17
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

ROLE_TAGS = (
    "NANNY",
    "TUTOR",
    "CRAM_SCHOOL_TEACHER",
    "COACH",
    "SCHOOL_TEACHER",
    "DAYCARE",
    "KINDERGARTEN",
    "OTHER",
)
SOURCE_TYPES = ("GOVERNMENT_NOTICE", "MEDIA_REPORT", "COMMUNITY_SIGNAL")
REPORT_STATUSES = ("PENDING", "REVIEWING", "APPROVED", "REJECTED")
SYNC_STATUSES = ("SUCCEEDED", "PARTIAL", "FAILED", "CANCELLED")


def upgrade() -> None:
    op.create_table(
        "cases",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("dedup_key", sa.String(), nullable=False),
        sa.Column("raw_name", sa.String(), nullable=False),
        sa.Column("masked_name", sa.String(), nullable=False),
        sa.Column("role", sa.Enum(*ROLE_TAGS, name="roletag", native_enum=False), nullable=False),
        sa.Column("risk_tags", sa.String(), nullable=False),
        sa.Column("location", sa.String(), nullable=False),
        sa.Column("case_date", sa.String(length=10), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column(
            "source_type",
            sa.Enum(*SOURCE_TYPES, name="sourcetype", native_enum=False),
            nullable=False,
        ),
        sa.Column("source_link", sa.String(), nullable=False),
        sa.Column("verified", sa.Boolean(), nullable=False),
        sa.Column("external_id", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_cases")),
        sa.UniqueConstraint("dedup_key", name=op.f("uq_cases_dedup_key")),
        sa.UniqueConstraint("source_link", name=op.f("uq_cases_source_link")),
    )
    op.create_index("ix_cases_masked_name", "cases", ["masked_name"])
    op.create_index("ix_cases_location", "cases", ["location"])
    op.create_index("ix_cases_created_at", "cases", ["created_at"])

    op.create_table(
        "reports",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("suspect_name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("location", sa.String(), nullable=False),
        sa.Column(
            "status",
            sa.Enum(*REPORT_STATUSES, name="reportstatus", native_enum=False),
            nullable=False,
        ),
        sa.Column("review_note", sa.Text(), nullable=True),
        sa.Column("submitter_ip", sa.String(length=64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_reports")),
    )
    op.create_index("ix_reports_status", "reports", ["status"])

    op.create_table(
        "sync_logs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("source_name", sa.String(), nullable=False),
        sa.Column(
            "status",
            sa.Enum(*SYNC_STATUSES, name="syncstatus", native_enum=False),
            nullable=False,
        ),
        sa.Column("record_count", sa.Integer(), nullable=False),
        sa.Column("added", sa.Integer(), nullable=False),
        sa.Column("skipped", sa.Integer(), nullable=False),
        sa.Column("errors", sa.Integer(), nullable=False),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("finished_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_sync_logs")),
    )
    op.create_index("ix_sync_logs_started_at", "sync_logs", ["started_at"])


def downgrade() -> None:
    op.drop_index("ix_sync_logs_started_at", table_name="sync_logs")
    op.drop_table("sync_logs")
    op.drop_index("ix_reports_status", table_name="reports")
    op.drop_table("reports")
    op.drop_index("ix_cases_created_at", table_name="cases")
    op.drop_index("ix_cases_location", table_name="cases")
    op.drop_index("ix_cases_masked_name", table_name="cases")
    op.drop_table("cases")
