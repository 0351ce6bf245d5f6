"""Helpers shared by the per-source translators."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ValidationError

from guardianbee.domain.errors import MalformedSourceRecord

if TYPE_CHECKING:
    from collections.abc import Callable

    from guardianbee.domain.model import CaseDraft
    from guardianbee.domain.ports.fetching import RawRecord


def validate_record[TModel: BaseModel](
    model: type[TModel], raw: RawRecord, *, source: str
) -> TModel:
    """Validate ``raw`` against ``model`` or raise :class:`MalformedSourceRecord`."""

    try:
        return model.model_validate(dict(raw))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'record'}: {error['msg']}"
            for error in exc.errors()
        )
        raise MalformedSourceRecord(source, problems, record=raw) from exc


def build_draft(source: str, raw: RawRecord, factory: Callable[[], CaseDraft]) -> CaseDraft:
    """Run ``factory``, reporting draft invariant violations as malformed records."""

    try:
        return factory()
    except ValueError as exc:
        raise MalformedSourceRecord(source, str(exc), record=raw) from exc
