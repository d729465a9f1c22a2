"""
Pitch primitives - PitchClass and note-name conversion.

PitchClass represents the 12 chromatic pitches (octave-independent).
Note names are the display form: a letter A-G plus an optional accidental.
Identity is always the pitch class, never the spelling.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import IntEnum

from chuk_mcp_scales.constants import OCTAVE_SEMITONES, ErrorMessages
from chuk_mcp_scales.exceptions import InvalidNoteError

# Display name mappings (module level to avoid IntEnum member issues)
NOTE_NAMES_SHARP = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")
NOTE_NAMES_FLAT = ("C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B")

_LETTER_PITCH_CLASSES = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}
_ACCIDENTAL_OFFSETS: dict[str, int] = {"": 0, "#": 1, "♯": 1, "b": -1, "♭": -1}

ACCIDENTAL_PATTERN = "[#b♯♭]"
NOTE_RE = re.compile(rf"^([A-G])({ACCIDENTAL_PATTERN}?)$")
# Note-list tokens may carry a trailing octave number, which is ignored
NOTE_TOKEN_RE = re.compile(rf"^([A-G])({ACCIDENTAL_PATTERN}?)(\d+)?$")
TOKEN_SPLIT_RE = re.compile(r"[\s,]+")


def normalize_accidental(accidental: str) -> str:
    """Map unicode accidentals onto their ASCII spelling."""
    if accidental in ("#", "♯"):
        return "#"
    if accidental in ("b", "♭"):
        return "b"
    return ""


def _letter_pitch_class(letter: str, accidental: str) -> int:
    return (_LETTER_PITCH_CLASSES[letter] + _ACCIDENTAL_OFFSETS[accidental]) % OCTAVE_SEMITONES


def pitch_class_of(note: str) -> int | None:
    """
    Convert a note name to its pitch class.

    Accepts ``[A-G]`` with an optional ``#``, ``b``, ``♯`` or ``♭``.

    Returns:
        The pitch class (0-11), or None if the note does not parse
    """
    match = NOTE_RE.match(note.strip())
    if not match:
        return None
    letter, accidental = match.groups()
    return _letter_pitch_class(letter, accidental)


def note_name_of(pitch_class: int, prefer_sharps: bool = True) -> str:
    """Spell a pitch class using the sharp or flat name set."""
    names = NOTE_NAMES_SHARP if prefer_sharps else NOTE_NAMES_FLAT
    return names[pitch_class % OCTAVE_SEMITONES]


class PitchClass(IntEnum):
    """
    The 12 chromatic pitch classes (0-11).

    Octave-independent - C4 and C5 are both PitchClass.C.
    Enharmonic equivalents share the same value (C# == Db == 1).

    Spelling is a display concern, handled at serialization.
    Internally, we use sharp names (Cs, Ds, etc.).
    """

    C = 0
    Cs = 1  # C# / Db
    D = 2
    Ds = 3  # D# / Eb
    E = 4
    F = 5
    Fs = 6  # F# / Gb
    G = 7
    Gs = 8  # G# / Ab
    A = 9
    As = 10  # A# / Bb
    B = 11

    def transpose(self, semitones: int) -> PitchClass:
        """Transpose by a number of semitones (positive or negative)."""
        return PitchClass((self.value + semitones) % OCTAVE_SEMITONES)

    def interval_to(self, other: PitchClass) -> int:
        """Get the ascending interval in semitones from this pitch class to another."""
        return (other.value - self.value) % OCTAVE_SEMITONES

    def to_midi(self, octave: int = 4) -> int:
        """Convert to MIDI note number. C4 = 60."""
        return self.value + (octave + 1) * OCTAVE_SEMITONES

    def spell(self, prefer_flats: bool = False) -> str:
        """Get human-readable name."""
        return note_name_of(self.value, prefer_sharps=not prefer_flats)

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        """
        Parse a pitch class from a string like 'C', 'C#', 'Db', 'F♯'.

        Raises:
            InvalidNoteError: if the name does not match the note grammar
        """
        pitch_class = pitch_class_of(name)
        if pitch_class is None:
            raise InvalidNoteError(name)
        return cls(pitch_class)


def scale_notes(root: int, intervals: Iterable[int], prefer_sharps: bool = True) -> list[str]:
    """
    Spell the notes of a scale, one per interval, in interval order.

    Args:
        root: Root pitch class
        intervals: Semitones above the root
        prefer_sharps: Spell with sharps (True) or flats (False)

    Returns:
        Note names (not necessarily pitch-ascending once wrapped)
    """
    return [note_name_of(root + interval, prefer_sharps) for interval in intervals]


def assign_octaves(notes: Sequence[str], base_octave: int = 4) -> list[tuple[str, int]]:
    """
    Give each note of an ascending scale an octave number.

    The octave increments whenever a note's pitch class is strictly lower
    than the previous note's. Only correct for input that ascends from
    the root (as produced by scale_notes); descending or unordered input
    is not detected.

    Raises:
        InvalidNoteError: if a note does not parse
    """
    result: list[tuple[str, int]] = []
    octave = base_octave
    previous: int | None = None
    for note in notes:
        current = PitchClass.parse(note).value
        if previous is not None and current < previous:
            octave += 1
        result.append((note, octave))
        previous = current
    return result


@dataclass(frozen=True)
class ParsedNotes:
    """Result of parsing a note list - valid notes plus per-token errors."""

    notes: tuple[str, ...] = ()
    pitch_classes: frozenset[int] = frozenset()
    errors: tuple[str, ...] = ()


def split_tokens(text: str) -> list[str]:
    """Split user input on whitespace and commas, dropping empty tokens."""
    return [token for token in TOKEN_SPLIT_RE.split(text.strip()) if token]


def parse_notes(text: str) -> ParsedNotes:
    """
    Parse a whitespace/comma separated list of note names.

    Trailing octave digits ("C4") are accepted and ignored. Invalid tokens
    are reported in ``errors``; the valid ones are still returned.
    """
    if not text or not text.strip():
        return ParsedNotes()

    notes: list[str] = []
    pitch_classes: set[int] = set()
    errors: list[str] = []

    for token in split_tokens(text):
        match = NOTE_TOKEN_RE.match(token)
        if not match:
            errors.append(ErrorMessages.INVALID_NOTE.format(token=token))
            continue
        letter, accidental, _octave = match.groups()
        notes.append(letter + normalize_accidental(accidental))
        pitch_classes.add(_letter_pitch_class(letter, accidental))

    return ParsedNotes(
        notes=tuple(notes),
        pitch_classes=frozenset(pitch_classes),
        errors=tuple(errors),
    )
