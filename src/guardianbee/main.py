#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from guardianbee.app import (
    GOVERNMENT_GROUP,
    SOURCE_NAMES,
    export_reports,
    recent_sync_logs,
    registry_stats,
    review_report,
    search_registry,
    submit_report,
    sync_sources,
)
from guardianbee.common.logging import configure_logging
from guardianbee.config import SyncConfig, get_sync_config
from guardianbee.domain.model import ReportStatus

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from guardianbee.domain.ingest_pipeline import BatchSummary
    from guardianbee.domain.model import RegistryStats, SearchResponse

log = logging.getLogger(__name__)

REVIEW_STATUSES = [status.value for status in ReportStatus if status is not ReportStatus.PENDING]
# Conventional exit status for a run stopped by SIGINT.
EXIT_CANCELLED = 130


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="guardianbee", description="Child-safety case registry"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    sync = commands.add_parser("sync", help="Fetch sources and ingest new cases")
    sync.add_argument(
        "--source",
        action="append",
        dest="sources",
        choices=[GOVERNMENT_GROUP, *SOURCE_NAMES],
        help="Source to sync; repeat for several (default: all configured sources)",
    )
    sync.add_argument("--max-workers", type=int, help="Number of sources fetched concurrently")
    sync.add_argument("--timeout", type=float, help="Per-source fetch timeout in seconds")

    search = commands.add_parser("search", help="Search the registry by name and area")
    search.add_argument("name", nargs="?", help="Full, partial or masked name")
    search.add_argument("--area", help="City or county, e.g. 台北市")
    search.add_argument("--limit", type=int, help="Page size")
    search.add_argument("--offset", type=int, default=0, help="Page offset (default: %(default)s)")

    report = commands.add_parser("report", help="Community report intake and moderation")
    report_commands = report.add_subparsers(dest="report_command", required=True)

    submit = report_commands.add_parser("submit", help="Submit a new report")
    submit.add_argument("--name", required=True, help="Name of the reported person")
    submit.add_argument("--description", required=True, help="What happened")
    submit.add_argument("--location", help="Where it happened")
    submit.add_argument("--ip", help="Submitter IP address")

    review = report_commands.add_parser("review", help="Move a report to a review status")
    review.add_argument("report_id", type=UUID)
    review.add_argument("--status", required=True, choices=REVIEW_STATUSES)
    review.add_argument("--note", help="Moderator note")

    export = report_commands.add_parser("export", help="Export reports to an XLSX workbook")
    export.add_argument("path", type=Path)
    export.add_argument("--status", choices=[status.value for status in ReportStatus])

    logs = commands.add_parser("sync-logs", help="Show the most recent sync runs")
    logs.add_argument("--limit", type=int, default=20, help="Number of runs (default: %(default)s)")

    commands.add_parser("stats", help="Show case counts per location and search statistics")

    return parser.parse_args(list(argv))


def _sync_config(args: argparse.Namespace) -> SyncConfig:
    defaults = get_sync_config()
    try:
        return SyncConfig(
            max_workers=(
                defaults.max_workers if args.max_workers is None else args.max_workers
            ),
            fetch_timeout_seconds=(
                defaults.fetch_timeout_seconds if args.timeout is None else args.timeout
            ),
        )
    except RuntimeError as exc:
        raise ValueError(str(exc)) from exc


def _print_batch(summary: BatchSummary) -> None:
    for source in summary.sources:
        line = (
            f"{source.source:<10} {source.status.value:<9} fetched={source.fetched} "
            f"added={source.added} skipped={source.skipped} errors={source.errors}"
        )
        if source.error:
            line += f" ({source.error})"
        print(line)
    print(
        f"total: synced={summary.synced} added={summary.added} "
        f"skipped={summary.skipped} errors={summary.errors}"
    )


def _print_search(response: SearchResponse) -> None:
    for result in response.results:
        case = result.case
        print(
            "\t".join(
                (
                    case.masked_name,
                    case.role.label,
                    case.location,
                    case.case_date or "-",
                    "、".join(sorted(tag.label for tag in case.risk_tags)),
                    f"{result.similarity}",
                    result.match_type.value,
                    case.source_link,
                )
            )
        )
    print(f"{len(response.results)} of {response.total} result(s)")
    print(response.disclaimer)


def _print_stats(stats: RegistryStats) -> None:
    print(f"cases: {stats.case_count}")
    last = stats.last_successful_sync
    if last is None:
        print("last successful sync: never")
    else:
        finished = (last.finished_at or last.started_at).isoformat()
        print(f"last successful sync: {finished} ({last.source_name})")
    searches = stats.searches
    print(
        f"searches: total={searches.total_searches} found={searches.found_results} "
        f"not_found={searches.not_found}"
    )
    for location, count in stats.cases_by_location.items():
        print(f"  {location}\t{count}")


def _run(args: argparse.Namespace) -> int:
    if args.command == "sync":
        summary = sync_sources(
            sources=args.sources, sync_config=_sync_config(args), handle_sigint=True
        )
        _print_batch(summary)
        if summary.cancelled:
            print("Sync cancelled by user (Ctrl+C); totals above are partial", file=sys.stderr)
            return EXIT_CANCELLED
        return 0 if summary.success else 1
    if args.command == "search":
        _print_search(
            search_registry(name=args.name, area=args.area, limit=args.limit, offset=args.offset)
        )
        return 0
    if args.command == "stats":
        _print_stats(registry_stats())
        return 0
    if args.command == "sync-logs":
        for entry in recent_sync_logs(args.limit):
            print(
                f"{entry.started_at.isoformat()} {entry.source_name:<10} {entry.status.value:<9} "
                f"records={entry.record_count} added={entry.added} errors={entry.errors}"
            )
        return 0

    if args.report_command == "submit":
        submission = submit_report(
            suspect_name=args.name,
            description=args.description,
            location=args.location,
            submitter_ip=args.ip,
        )
        print(f"Report {submission.report.id} stored")
        if submission.notification_error:
            print(f"Notification failed: {submission.notification_error}", file=sys.stderr)
        return 0
    if args.report_command == "review":
        report = review_report(args.report_id, ReportStatus(args.status), note=args.note)
        print(f"Report {report.id} is now {report.status.value}")
        return 0
    status = ReportStatus(args.status) if args.status else None
    print(f"Exported reports to {export_reports(args.path, status=status)}")
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    parsed_args = _parse_args(argv if argv is not None else sys.argv[1:])
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        exit_code = _run(parsed_args)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    except LookupError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:  # noqa: BLE001
        log.exception("guardianbee %s failed", parsed_args.command)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(exit_code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    main()
