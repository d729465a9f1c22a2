"""
Playback boundary - scale patterns and MIDI rendering.

Nothing here plays audio. A scale is expanded into an ordered note
sequence and written as a MIDI file for whatever player the user has.
"""

from chuk_mcp_scales.playback.midi import (
    TICKS_PER_BEAT,
    MidiEvent,
    chord_to_events,
    events_to_midi,
    note_to_midi,
    render_midi,
    request_to_events,
)
from chuk_mcp_scales.playback.patterns import (
    PATTERN_STEPS,
    PlaybackRequest,
    SequenceNote,
    generate_note_sequence,
)

__all__ = [
    "PATTERN_STEPS",
    "TICKS_PER_BEAT",
    "MidiEvent",
    "PlaybackRequest",
    "SequenceNote",
    "chord_to_events",
    "events_to_midi",
    "generate_note_sequence",
    "note_to_midi",
    "render_midi",
    "request_to_events",
]
