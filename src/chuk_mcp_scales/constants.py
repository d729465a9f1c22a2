"""
Constants and enums for the scale system.

No magic strings - use enums and Literal types for constrained values.
"""

from enum import Enum
from typing import Literal

# Size of the pitch-class space (12-EDO only)
OCTAVE_SEMITONES = 12


class TriadQuality(str, Enum):
    """Qualities a scale-degree triad can be classified as."""

    MAJOR = "major"
    MINOR = "minor"
    DIMINISHED = "diminished"
    AUGMENTED = "augmented"
    SUS2 = "sus2"
    SUS4 = "sus4"


class Direction(str, Enum):
    """Direction a scale degree moved by a semitone."""

    UP = "up"
    DOWN = "down"


class FitMode(str, Enum):
    """How a chord is matched against several selected scales."""

    ANY = "any"  # fits at least one scale
    ALL = "all"  # fits every scale


class ScalePattern(str, Enum):
    """Playback orderings for walking through a scale."""

    ASCENDING = "ascending"
    DESCENDING = "descending"
    ALTERNATING = "alternating"
    LADDER = "ladder"


# Supported meters for playback
TimeSignature = Literal["4/4", "3/4"]

# Catalog file formats, keyed by suffix
CATALOG_SUFFIXES: tuple[str, ...] = (".json", ".yaml", ".yml")


class ErrorMessages:
    """Standardized error messages."""

    INVALID_NOTE = 'Invalid note: "{token}"'
    INVALID_CHORD = 'Invalid chord: "{token}"'
    UNKNOWN_CHORD_TYPE = 'Unknown chord type: "{token}"'
    SCALE_NOT_FOUND = "Scale '{scale}' not found in catalog."
    INVALID_ROOT = "Invalid root note: '{root}'."
    NO_NOTES = "No valid notes given."
    NO_CHORDS = "No valid chords given."
    NO_CHORD_TYPES = "No valid chord types given."


class SuccessMessages:
    """Standardized success messages."""

    CATALOG_LOADED = "Loaded {count} scale types."
    MIDI_EXPORTED = "Exported '{name}' to {path}."
