"""
Triad primitives - the chords built on each scale degree.

Degree d's triad stacks the scale notes at d, d+2 and d+4 (wrapping
around the scale). The triad is classified by the two stacked intervals
(root->third, third->fifth), labelled with a Roman numeral, and offered
the extensions the surrounding scale tones allow.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from chuk_mcp_scales.constants import OCTAVE_SEMITONES, TriadQuality


@dataclass(frozen=True)
class TriadQualityConfig:
    """Display settings for one triad quality."""

    suffix: str  # chord symbol suffix ("m", "°", ...)
    name_suffix: str  # long name suffix (" minor", ...)
    lower_numeral: bool  # minor-ish qualities use lower-case numerals
    numeral_suffix: str


TRIAD_QUALITY_CONFIG: dict[TriadQuality, TriadQualityConfig] = {
    TriadQuality.MAJOR: TriadQualityConfig("", " major", False, ""),
    TriadQuality.MINOR: TriadQualityConfig("m", " minor", True, ""),
    TriadQuality.DIMINISHED: TriadQualityConfig("°", " diminished", True, "°"),
    TriadQuality.AUGMENTED: TriadQualityConfig("+", " augmented", False, "+"),
    TriadQuality.SUS2: TriadQualityConfig("sus2", " sus2", False, "sus2"),
    TriadQuality.SUS4: TriadQualityConfig("sus4", " sus4", False, "sus4"),
}

# Keyed by (root -> third, third -> fifth) in semitones
INTERVAL_PATTERN_TO_QUALITY: dict[tuple[int, int], TriadQuality] = {
    (4, 3): TriadQuality.MAJOR,
    (3, 4): TriadQuality.MINOR,
    (3, 3): TriadQuality.DIMINISHED,
    (4, 4): TriadQuality.AUGMENTED,
    (2, 5): TriadQuality.SUS2,
    (5, 2): TriadQuality.SUS4,
}

# Interval pairs outside the table (unusual degree spacing) are labelled major
FALLBACK_TRIAD_QUALITY = TriadQuality.MAJOR

# Fifth sizes measured from the triad root
DIMINISHED_FIFTH = 6
PERFECT_FIFTH = 7
AUGMENTED_FIFTH = 8
MAJOR_SIXTH = 9
MINOR_SEVENTH = 10
MAJOR_SEVENTH = 11

ALTERED_FIFTH = "alt5"

_ROMAN_VALUES: tuple[tuple[int, str], ...] = (
    (10, "X"),
    (9, "IX"),
    (5, "V"),
    (4, "IV"),
    (1, "I"),
)


def to_roman(number: int) -> str:
    """Upper-case Roman numeral for a positive integer (I, II, ... XII)."""
    result = ""
    for value, numeral in _ROMAN_VALUES:
        while number >= value:
            result += numeral
            number -= value
    return result


@dataclass(frozen=True)
class Triad:
    """
    A triad built on one degree of a scale.

    ``degree`` is 0-based (0 = tonic). ``extensions`` lists the chord
    extensions the scale supports on this root (empty when none apply).
    """

    degree: int
    root: str
    quality: TriadQuality
    notes: tuple[str, str, str]
    roman_numeral: str
    extensions: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return triad_name(self.root, self.quality)

    @property
    def symbol(self) -> str:
        return triad_symbol(self.root, self.quality)


def determine_triad_quality(root_to_third: int, third_to_fifth: int) -> TriadQuality:
    """
    Classify a triad by its two stacked intervals.

    Pairs outside the table fall back to FALLBACK_TRIAD_QUALITY.
    """
    pattern = (root_to_third, third_to_fifth)
    if pattern in INTERVAL_PATTERN_TO_QUALITY:
        return INTERVAL_PATTERN_TO_QUALITY[pattern]
    return FALLBACK_TRIAD_QUALITY


def roman_numeral(degree: int, quality: TriadQuality) -> str:
    """Roman numeral for a 0-based degree, cased and suffixed by quality."""
    config = TRIAD_QUALITY_CONFIG[quality]
    base = to_roman(degree + 1)
    if config.lower_numeral:
        base = base.lower()
    return base + config.numeral_suffix


def triad_name(root: str, quality: TriadQuality) -> str:
    """Full name of a triad, e.g. "C major"."""
    return f"{root}{TRIAD_QUALITY_CONFIG[quality].name_suffix}"


def triad_symbol(root: str, quality: TriadQuality) -> str:
    """Abbreviated chord symbol of a triad, e.g. "Dm", "B°", "C+"."""
    return f"{root}{TRIAD_QUALITY_CONFIG[quality].suffix}"


def calculate_extensions(
    root_interval: int,
    fifth_interval: int,
    scale_intervals: Sequence[int],
) -> list[str]:
    """
    Extensions available on a triad from the surrounding scale tones.

    Args:
        root_interval: Interval of the triad root above the scale root
        fifth_interval: The triad's own fifth (6 dim, 7 perfect, 8 aug)
        scale_intervals: All intervals of the scale

    Returns:
        Extension labels in rule order
    """
    available = {(interval - root_interval) % OCTAVE_SEMITONES for interval in scale_intervals}
    extensions: list[str] = []

    scale_has_aug_fifth = AUGMENTED_FIFTH in available

    if fifth_interval == DIMINISHED_FIFTH and scale_has_aug_fifth:
        extensions.append(ALTERED_FIFTH)
    if fifth_interval == PERFECT_FIFTH and scale_has_aug_fifth:
        extensions.append("#5")
    if MAJOR_SIXTH in available and fifth_interval != AUGMENTED_FIFTH:
        extensions.append("6")
    if MAJOR_SEVENTH in available:
        extensions.append("maj7")
    elif MINOR_SEVENTH in available:
        extensions.append("7")

    return extensions


def display_extensions(triad: Triad) -> list[str]:
    """
    Expand ``alt5`` into separate ``#5`` / ``b5`` choices for display.

    ``b5`` is dropped for diminished triads, which already have it.
    """
    result: list[str] = []
    for extension in triad.extensions:
        if extension != ALTERED_FIFTH:
            result.append(extension)
            continue
        result.append("#5")
        if triad.quality != TriadQuality.DIMINISHED:
            result.append("b5")
    return result


def calculate_triads(
    notes: Sequence[str],
    intervals: Sequence[int],
    include_extensions: bool = True,
) -> list[Triad]:
    """
    Calculate the triad on every degree of a scale.

    Args:
        notes: Spelled scale notes, one per interval
        intervals: Scale intervals (semitones above the root)
        include_extensions: Compute available extensions per triad

    Returns:
        One Triad per scale degree
    """
    size = len(notes)
    triads: list[Triad] = []

    for degree in range(size):
        third = degree + 2
        fifth = degree + 4

        # Add an octave for every wrap past the last degree so scales with
        # more (or fewer) than seven notes keep their true distances
        root_interval = intervals[degree]
        third_interval = intervals[third % size] + OCTAVE_SEMITONES * (third // size)
        fifth_interval = intervals[fifth % size] + OCTAVE_SEMITONES * (fifth // size)

        root_to_third = (third_interval - root_interval) % OCTAVE_SEMITONES
        third_to_fifth = (fifth_interval - third_interval) % OCTAVE_SEMITONES

        quality = determine_triad_quality(root_to_third, third_to_fifth)

        extensions: list[str] = []
        if include_extensions:
            extensions = calculate_extensions(
                root_interval, root_to_third + third_to_fifth, intervals
            )

        triads.append(
            Triad(
                degree=degree,
                root=notes[degree],
                quality=quality,
                notes=(notes[degree], notes[third % size], notes[fifth % size]),
                roman_numeral=roman_numeral(degree, quality),
                extensions=tuple(extensions),
            )
        )

    return triads
