"""Port for notifying moderators about new reports."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping


@runtime_checkable
class ReportNotifier(Protocol):
    """Delivers a flat key/value payload; raises NotifierError on delivery failure."""

    def __call__(self, payload: Mapping[str, str]) -> None: ...
