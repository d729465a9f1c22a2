"""
Chord primitives - ChordQuality, Chord and the chord symbol parser.

Chords are stacks of intervals above a root. A chord symbol is a root,
an optional quality and an optional slash bass: ``C``, ``Am``, ``F#maj7``,
``Bbdim7``, ``Dm7/G``. Qualities resolve through a fixed alias table onto
a fixed quality table; nothing else is guessed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from chuk_mcp_scales.constants import OCTAVE_SEMITONES, ErrorMessages
from chuk_mcp_scales.exceptions import UnparsableChordError

from .pitch import ACCIDENTAL_PATTERN, normalize_accidental, pitch_class_of, split_tokens


@dataclass(frozen=True)
class ChordQuality:
    """
    A chord quality defined by its intervals from the root.

    Intervals are measured from the root, not stacked.
    For example, a major triad is root + M3 + P5 (0, 4, 7 semitones).

    Immutable and hashable.
    """

    key: str
    intervals: tuple[int, ...]
    display_suffix: str
    description: str

    def get_pitch_classes(self, root: int) -> frozenset[int]:
        """Pitch classes of this quality built on ``root``."""
        return frozenset((root + interval) % OCTAVE_SEMITONES for interval in self.intervals)

    def __str__(self) -> str:
        return self.description


def _quality(key: str, intervals: tuple[int, ...], suffix: str, description: str) -> ChordQuality:
    return ChordQuality(key, intervals, suffix, description)


# The quality table - keys are the normalized quality strings
CHORD_QUALITIES: dict[str, ChordQuality] = {
    # Triads
    "": _quality("", (0, 4, 7), "", "major"),
    "m": _quality("m", (0, 3, 7), "m", "minor"),
    "dim": _quality("dim", (0, 3, 6), "dim", "diminished"),
    "aug": _quality("aug", (0, 4, 8), "aug", "augmented"),
    "sus2": _quality("sus2", (0, 2, 7), "sus2", "suspended 2nd"),
    "sus4": _quality("sus4", (0, 5, 7), "sus4", "suspended 4th"),
    # 7th chords
    "maj7": _quality("maj7", (0, 4, 7, 11), "maj7", "major 7th"),
    "m7": _quality("m7", (0, 3, 7, 10), "m7", "minor 7th"),
    "dim7": _quality("dim7", (0, 3, 6, 9), "dim7", "diminished 7th"),
    "7": _quality("7", (0, 4, 7, 10), "7", "dominant 7th"),
    "mmaj7": _quality("mmaj7", (0, 3, 7, 11), "mmaj7", "minor major 7th"),
    "m7b5": _quality("m7b5", (0, 3, 6, 10), "ø7", "half-diminished"),
    "aug7": _quality("aug7", (0, 4, 8, 10), "aug7", "augmented 7th"),
    "7sus4": _quality("7sus4", (0, 5, 7, 10), "7sus4", "dominant 7th sus4"),
    # 6th chords
    "6": _quality("6", (0, 4, 7, 9), "6", "major 6th"),
    "m6": _quality("m6", (0, 3, 7, 9), "m6", "minor 6th"),
}

# Alternative spellings, applied after lower-casing
QUALITY_ALIASES: dict[str, str] = {
    "min": "m",
    "minor": "m",
    "maj": "",  # major without 7 is just a major triad
    "major": "",
    "diminished": "dim",
    "augmented": "aug",
    "dominant": "7",
    "dom": "7",
    "-": "m",
    "mi": "m",
    "Δ": "maj7",
    "δ": "maj7",  # "Δ" after lower-casing
    "ø": "m7b5",
    "°": "dim",
    "+": "aug",
}

# Stored name for the empty (major triad) quality key
MAJOR_QUALITY_NAME = "major"

# Root letters match either case; accidentals stay case-sensitive ("B" is never a flat)
_SLASH_RE = re.compile(rf"^(.+)/([A-Ga-g]{ACCIDENTAL_PATTERN}?)$")
_CHORD_RE = re.compile(rf"^([A-Ga-g])({ACCIDENTAL_PATTERN}?)(.*)$")


def normalize_quality(quality: str) -> str:
    """Lower-case a quality string and resolve it through the alias table."""
    quality = quality.lower().strip()
    return QUALITY_ALIASES.get(quality, quality)


def _spell(letter: str, accidental: str) -> str:
    return letter.upper() + normalize_accidental(accidental)


@dataclass(frozen=True)
class Chord:
    """
    A concrete chord - root, quality and the resulting pitch-class set.

    ``quality`` is the quality table key (``"major"`` for the plain triad).
    For slash chords the bass pitch class is folded into ``pitch_classes``.
    """

    root: str
    root_pitch_class: int
    quality: str
    pitch_classes: frozenset[int]
    display_name: str
    bass: str | None = None
    bass_pitch_class: int | None = None

    @property
    def chord_quality(self) -> ChordQuality:
        """The quality table entry for this chord."""
        return CHORD_QUALITIES["" if self.quality == MAJOR_QUALITY_NAME else self.quality]

    @property
    def is_slash_chord(self) -> bool:
        return self.bass is not None

    @classmethod
    def parse(cls, symbol: str) -> Chord:
        """
        Parse a chord symbol, raising on failure.

        Raises:
            UnparsableChordError: if the root, bass or quality is not recognized
        """
        chord = parse_chord(symbol)
        if chord is None:
            raise UnparsableChordError(symbol)
        return chord

    def __str__(self) -> str:
        return self.display_name


def parse_chord(symbol: str) -> Chord | None:
    """
    Parse a single chord symbol.

    Args:
        symbol: e.g. "C", "Am", "F#maj7", "Bbdim7", "C/E"

    Returns:
        The Chord, or None if the root, bass or quality is invalid
    """
    trimmed = symbol.strip()
    if not trimmed:
        return None

    chord_part = trimmed
    bass: str | None = None
    bass_pitch_class: int | None = None

    slash_match = _SLASH_RE.match(trimmed)
    if slash_match:
        chord_part = slash_match.group(1).strip()
        bass_token = slash_match.group(2)
        bass = _spell(bass_token[0], bass_token[1:])
        bass_pitch_class = pitch_class_of(bass)
        if bass_pitch_class is None:
            return None

    match = _CHORD_RE.match(chord_part)
    if not match:
        return None

    letter, accidental, quality_str = match.groups()
    root = _spell(letter, accidental)
    root_pitch_class = pitch_class_of(root)
    if root_pitch_class is None:
        return None

    quality = normalize_quality(quality_str)
    chord_quality = CHORD_QUALITIES.get(quality)
    if chord_quality is None:
        return None

    pitch_classes = set(chord_quality.get_pitch_classes(root_pitch_class))
    if bass_pitch_class is not None:
        pitch_classes.add(bass_pitch_class)

    display_name = root + chord_quality.display_suffix
    if bass is not None:
        display_name += f"/{bass}"

    return Chord(
        root=root,
        root_pitch_class=root_pitch_class,
        quality=quality or MAJOR_QUALITY_NAME,
        pitch_classes=frozenset(pitch_classes),
        display_name=display_name,
        bass=bass,
        bass_pitch_class=bass_pitch_class,
    )


@dataclass(frozen=True)
class ParsedChords:
    """Result of parsing a chord list - valid chords plus per-token errors."""

    chords: tuple[Chord, ...] = ()
    errors: tuple[str, ...] = ()
    pitch_classes: frozenset[int] = frozenset()


def parse_chords(text: str) -> ParsedChords:
    """
    Parse multiple chord symbols separated by whitespace or commas.

    A bad token does not abort the parse: it is reported in ``errors``
    and the remaining chords are still returned.

    Args:
        text: e.g. "C Am F G" or "C, Am, F, G"

    Returns:
        Parsed chords, errors and the union of all chord pitch classes
    """
    if not text or not text.strip():
        return ParsedChords()

    chords: list[Chord] = []
    errors: list[str] = []
    pitch_classes: set[int] = set()

    for token in split_tokens(text):
        chord = parse_chord(token)
        if chord is None:
            errors.append(ErrorMessages.INVALID_CHORD.format(token=token))
            continue
        chords.append(chord)
        pitch_classes.update(chord.pitch_classes)

    return ParsedChords(
        chords=tuple(chords),
        errors=tuple(errors),
        pitch_classes=frozenset(pitch_classes),
    )


def supported_chord_types() -> list[str]:
    """Help text listing the chord symbols the parser understands."""
    return [
        "Major triads: C, D, E, etc.",
        "Minor triads: Cm, Dm, Em, etc.",
        "Diminished: Cdim, Ddim, etc.",
        "Augmented: Caug, Daug, etc.",
        "Suspended: Csus2, Dsus4, etc.",
        "Major 7th: Cmaj7, Dmaj7, etc.",
        "Minor 7th: Cm7, Dm7, etc.",
        "Dominant 7th: C7, D7, etc.",
        "Diminished 7th: Cdim7, Ddim7, etc.",
        "Half-diminished: Cm7b5, Dm7b5, etc.",
        "Major 6th: C6, D6, etc.",
        "Minor 6th: Cm6, Dm6, etc.",
        "Minor major 7th: Cmmaj7, Dmmaj7, etc.",
        "Slash chords: C/E, Dm7/G, etc.",
    ]
