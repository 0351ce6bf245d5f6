"""Public interface for the judicial records adapter."""

from __future__ import annotations

from .client import (
    JudicialAPIError,
    JudicialRecordAdapter,
    TokenCache,
    in_service_window,
    judicial_resilience,
)
from .schema import AuthResponse, DefendantRecord, JudgmentDocument, JudgmentListDay
from .translator import (
    defendant_records,
    extract_defendants,
    is_child_related,
    judgment_link,
    parse_judgment_id,
    translate_judgment,
)

__all__ = [
    "AuthResponse",
    "DefendantRecord",
    "JudgmentDocument",
    "JudgmentListDay",
    "JudicialAPIError",
    "JudicialRecordAdapter",
    "TokenCache",
    "defendant_records",
    "extract_defendants",
    "in_service_window",
    "is_child_related",
    "judgment_link",
    "parse_judgment_id",
    "translate_judgment",
]
