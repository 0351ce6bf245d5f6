"""Public interface for the government registry adapter."""

from __future__ import annotations

from .client import (
    GOVERNMENT_REGISTRIES,
    GovernmentRegistryAdapter,
    RegistryKind,
    RegistryPage,
    government_adapters,
    government_resilience,
)
from .parser import parse_crc, parse_ece, parse_kindyinfo, parse_ncwis
from .translator import translate_crc, translate_ece, translate_kindyinfo, translate_ncwis

__all__ = [
    "GOVERNMENT_REGISTRIES",
    "GovernmentRegistryAdapter",
    "RegistryKind",
    "RegistryPage",
    "government_adapters",
    "government_resilience",
    "parse_crc",
    "parse_ece",
    "parse_kindyinfo",
    "parse_ncwis",
    "translate_crc",
    "translate_ece",
    "translate_kindyinfo",
    "translate_ncwis",
]
