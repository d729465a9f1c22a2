#!/usr/bin/env python3
"""
Example: Export scale walk-throughs as MIDI files.

This demonstrates the playback pipeline: a key's notes are expanded by
a pattern, laid out one note per beat and written with mido.

Usage:
    python examples/export_scale_midi.py
    # Creates: examples/output/*.mid
"""

from pathlib import Path

from chuk_mcp_scales.catalog import CatalogLoader
from chuk_mcp_scales.constants import ScalePattern
from chuk_mcp_scales.core import Key, PitchClass
from chuk_mcp_scales.playback import (
    TICKS_PER_BEAT,
    PlaybackRequest,
    chord_to_events,
    events_to_midi,
    render_midi,
)


def main() -> None:
    """Generate example MIDI files."""
    output_dir = Path(__file__).parent / "output"
    output_dir.mkdir(exist_ok=True)

    catalog = CatalogLoader().load()

    # Example 1: Every pattern over D dorian
    key = Key(PitchClass.D, catalog.require("dorian"))
    for pattern in ScalePattern:
        request = PlaybackRequest(notes=key.notes(), pattern=pattern, tempo=100)
        path = output_dir / f"d_dorian_{pattern.value}.mid"
        render_midi(request).save(str(path))
        print(f"  Created: {path}")

    # Example 2: A waltz through A harmonic minor
    key = Key(PitchClass.A, catalog.require("harmonic-minor"))
    request = PlaybackRequest(notes=key.notes(), time_signature="3/4", pattern="alternating")
    path = output_dir / "a_harmonic_minor_waltz.mid"
    render_midi(request).save(str(path))
    print(f"  Created: {path}")

    # Example 3: The degree triads of C major as block chords
    print("\nGenerating c_major_triads.mid...")
    mid = create_triad_progression(catalog.require("major").notes(PitchClass.C))
    path = output_dir / "c_major_triads.mid"
    mid.save(str(path))
    print(f"  Created: {path}")

    print("\nDone! Open the MIDI files in your DAW to hear them.")


def create_triad_progression(notes: list[str]):
    """Stack a triad on every degree, one half-note chord each."""
    events = []
    size = len(notes)
    for degree in range(size):
        triad = [notes[degree], notes[(degree + 2) % size], notes[(degree + 4) % size]]
        events.extend(chord_to_events(triad, octave=3, start_ticks=degree * TICKS_PER_BEAT * 2))
    return events_to_midi(events, tempo_bpm=90)


if __name__ == "__main__":
    main()
