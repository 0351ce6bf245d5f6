"""Deterministic source links for items that have no URL of their own."""

from __future__ import annotations

import hashlib

FINGERPRINT_LENGTH = 16


def fingerprint(*parts: str | None) -> str:
    """Stable short hash of ``parts``; ``None`` and ``""`` hash alike."""

    joined = "\x1f".join((part or "").strip() for part in parts)
    return hashlib.sha1(joined.encode("utf-8"), usedforsecurity=False).hexdigest()[
        :FINGERPRINT_LENGTH
    ]


def synthesize_source_link(base: str, *parts: str | None) -> str:
    """``base`` plus a fragment derived from the item's identifying fields."""

    return f"{base}#{fingerprint(*parts)}"


def with_position(link: str, position: int, count: int) -> str:
    """Disambiguate one of several items sharing ``link`` by 1-based position."""

    if count <= 1:
        return link
    separator = "&" if "#" in link else "#"
    return f"{link}{separator}{position}"
