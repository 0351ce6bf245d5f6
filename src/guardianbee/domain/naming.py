"""Name masking and search-variant generation.

Personal names are stored masked: the first and last characters survive and
every interior character becomes :data:`MASK_GLYPH`. Organisation names
(kindergartens, daycare centres, cram schools) are never masked.
"""

from __future__ import annotations

from typing import Final

MASK_GLYPH: Final[str] = "○"
# Placeholders sources use instead of the glyph ("王某某", "李●明", "陳*華").
PLACEHOLDER_TOKENS: Final[tuple[str, ...]] = ("某", "●", "◯", "〇", "Ｏ", "*", "＊")
MASK_CHARACTERS: Final[frozenset[str]] = frozenset((MASK_GLYPH, *PLACEHOLDER_TOKENS))
DEFAULT_INSTITUTION_MARKERS: Final[tuple[str, ...]] = (
    "幼兒園",
    "幼稚園",
    "托嬰",
    "中心",
    "補習班",
    "安親班",
    "協會",
    "學校",
)


def is_institution(name: str, markers: tuple[str, ...] = DEFAULT_INSTITUTION_MARKERS) -> bool:
    return any(marker in name for marker in markers)


def is_masked(name: str) -> bool:
    return any(char in MASK_CHARACTERS for char in name)


def normalize_placeholders(name: str) -> str:
    for token in PLACEHOLDER_TOKENS:
        name = name.replace(token, MASK_GLYPH)
    return name


def strip_mask(name: str) -> str:
    return "".join(char for char in name if char not in MASK_CHARACTERS)


def mask(name: str, *, institution_markers: tuple[str, ...] = DEFAULT_INSTITUTION_MARKERS) -> str:
    """Return the masked form of ``name``; idempotent."""

    if is_institution(name, institution_markers):
        return name
    if is_masked(name):
        return normalize_placeholders(name)
    if len(name) <= 1:
        return name
    if len(name) == 2:
        return name[0] + MASK_GLYPH
    return name[0] + MASK_GLYPH * (len(name) - 2) + name[-1]


def variants(name: str) -> list[str]:
    """Ordered, de-duplicated substring patterns for matching ``name`` against stored names.

    The name itself, then each form with exactly one interior character
    masked, then the surname, then surname plus last character.
    """

    if len(name) < 2:
        return [name]

    candidates = [name]
    for position in range(1, len(name) - 1):
        candidates.append(name[:position] + MASK_GLYPH + name[position + 1 :])
    candidates.append(name[0])
    if len(name) >= 3:
        candidates.append(name[0] + name[-1])
    return list(dict.fromkeys(candidates))
