"""
Scale characteristics - short tags and degree labels derived from intervals.
"""

from __future__ import annotations

from collections.abc import Iterable

from chuk_mcp_scales.core.triad import (
    AUGMENTED_FIFTH,
    DIMINISHED_FIFTH,
    MAJOR_SEVENTH,
    MAJOR_SIXTH,
    MINOR_SEVENTH,
    PERFECT_FIFTH,
)

MINOR_THIRD = 3
MAJOR_THIRD = 4

# Interval above the root -> degree label relative to the major scale
INTERVAL_ROMAN_NUMERALS: dict[int, str] = {
    0: "I",
    1: "bII",
    2: "II",
    3: "bIII",
    4: "III",
    5: "IV",
    6: "#IV",
    7: "V",
    8: "#V",
    9: "VI",
    10: "bVII",
    11: "VII",
}


def analyze_scale_characteristics(intervals: Iterable[int]) -> list[str]:
    """
    Tag a scale by its third, fifth and seventh.

    Tags, in order:
    - third: "minor" or "major" (none when both are present)
    - fifth: "alt" when several fifths, else "dim", "aug" or "nat"
    - top: "maj7" or "7th" (none when both), else "6"
    """
    present = set(intervals)
    characteristics: list[str] = []

    has_minor_third = MINOR_THIRD in present
    has_major_third = MAJOR_THIRD in present
    if has_minor_third and not has_major_third:
        characteristics.append("minor")
    elif has_major_third and not has_minor_third:
        characteristics.append("major")

    fifths = [DIMINISHED_FIFTH in present, PERFECT_FIFTH in present, AUGMENTED_FIFTH in present]
    if sum(fifths) > 1:
        characteristics.append("alt")
    elif DIMINISHED_FIFTH in present:
        characteristics.append("dim")
    elif AUGMENTED_FIFTH in present:
        characteristics.append("aug")
    elif PERFECT_FIFTH in present:
        characteristics.append("nat")

    has_minor_seventh = MINOR_SEVENTH in present
    has_major_seventh = MAJOR_SEVENTH in present
    if has_major_seventh and not has_minor_seventh:
        characteristics.append("maj7")
    elif has_minor_seventh and not has_major_seventh:
        characteristics.append("7th")
    elif not has_minor_seventh and MAJOR_SIXTH in present:
        characteristics.append("6")

    return characteristics


def interval_to_roman_numeral(interval: int) -> str:
    """Degree label for an interval, "?" outside 0-11."""
    return INTERVAL_ROMAN_NUMERALS.get(interval, "?")


def intervals_to_roman_numerals(intervals: Iterable[int]) -> list[str]:
    return [interval_to_roman_numeral(interval) for interval in intervals]
