"""
Core music primitives - the pitch-class layer.

These are the mathematical invariants everything else composes on:
- PitchClass: The 12 chromatic pitch classes (0-11) and note spelling
- Step arithmetic: intervals <-> steps, rotation, canonical signatures
- ScaleType: A catalog scale with its modal annotations
- Key: Root + scale type, resolves degrees to pitches
- ChordQuality / Chord: The chord symbol grammar
- Triad: Scale-degree triads, qualities, Roman numerals, extensions
"""

from chuk_mcp_scales.core.chord import (
    CHORD_QUALITIES,
    QUALITY_ALIASES,
    Chord,
    ChordQuality,
    ParsedChords,
    parse_chord,
    parse_chords,
    supported_chord_types,
)
from chuk_mcp_scales.core.pitch import (
    ParsedNotes,
    PitchClass,
    assign_octaves,
    note_name_of,
    parse_notes,
    pitch_class_of,
    scale_notes,
)
from chuk_mcp_scales.core.scale import (
    Key,
    ModeOf,
    ScaleType,
    interval_signature,
    intervals_to_steps,
    rotate_steps,
    steps_to_intervals,
)
from chuk_mcp_scales.core.triad import (
    Triad,
    calculate_extensions,
    calculate_triads,
    determine_triad_quality,
    display_extensions,
    roman_numeral,
    triad_name,
    triad_symbol,
)

__all__ = [
    # Pitch
    "PitchClass",
    "ParsedNotes",
    "pitch_class_of",
    "note_name_of",
    "scale_notes",
    "assign_octaves",
    "parse_notes",
    # Scale
    "ScaleType",
    "ModeOf",
    "Key",
    "intervals_to_steps",
    "steps_to_intervals",
    "rotate_steps",
    "interval_signature",
    # Chord
    "CHORD_QUALITIES",
    "QUALITY_ALIASES",
    "ChordQuality",
    "Chord",
    "ParsedChords",
    "parse_chord",
    "parse_chords",
    "supported_chord_types",
    # Triad
    "Triad",
    "calculate_triads",
    "calculate_extensions",
    "determine_triad_quality",
    "display_extensions",
    "roman_numeral",
    "triad_name",
    "triad_symbol",
]
