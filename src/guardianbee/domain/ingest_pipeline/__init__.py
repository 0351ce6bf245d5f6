"""Ingestion pipeline: normalize raw records, deduplicate, orchestrate sources."""

from __future__ import annotations

from .deduplication import DeduplicationEngine, IngestCounts, KeyedLocks
from .normalization import NormalizationOutcome, normalize_records
from .orchestrator import BatchSummary, IngestionOrchestrator, SourceRunSummary

__all__ = [
    "BatchSummary",
    "DeduplicationEngine",
    "IngestCounts",
    "IngestionOrchestrator",
    "KeyedLocks",
    "NormalizationOutcome",
    "SourceRunSummary",
    "normalize_records",
]
