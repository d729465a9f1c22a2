"""
MIDI rendering - the playback boundary.

Scales and chords are turned into MidiEvents and written with mido.
All operations are deterministic: same input -> same output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mido import Message, MetaMessage, MidiFile, MidiTrack, bpm2tempo

from chuk_mcp_scales.core.pitch import PitchClass, assign_octaves
from chuk_mcp_scales.playback.patterns import PlaybackRequest

if TYPE_CHECKING:
    from collections.abc import Sequence


# Standard ticks per beat (quarter note)
TICKS_PER_BEAT = 480

# Downbeats are quarter notes and louder; the rest are eighth notes
ACCENT_VELOCITY = 100
NORMAL_VELOCITY = 80
ACCENT_DURATION_TICKS = TICKS_PER_BEAT
NORMAL_DURATION_TICKS = TICKS_PER_BEAT // 2

# Block chords ring for a half note
CHORD_DURATION_TICKS = TICKS_PER_BEAT * 2

_EVENT_LIMITS = {"pitch": 127, "velocity": 127, "channel": 15}


@dataclass(frozen=True)
class MidiEvent:
    """One sounding note, timed in absolute ticks."""

    pitch: int
    start_ticks: int
    duration_ticks: int
    velocity: int
    channel: int = 0

    def __post_init__(self) -> None:
        for field_name, upper in _EVENT_LIMITS.items():
            value = getattr(self, field_name)
            if not 0 <= value <= upper:
                raise ValueError(f"{field_name} must be 0-{upper}, got {value}")
        if self.start_ticks < 0 or self.duration_ticks < 0:
            raise ValueError(
                f"Event times must be >= 0, got start={self.start_ticks} "
                f"duration={self.duration_ticks}"
            )

    @property
    def end_ticks(self) -> int:
        return self.start_ticks + self.duration_ticks

    def messages(self) -> list[tuple[int, Message]]:
        """The note_on / note_off pair at absolute tick positions."""
        note_on = Message("note_on", channel=self.channel, note=self.pitch, velocity=self.velocity)
        note_off = Message("note_off", channel=self.channel, note=self.pitch, velocity=0)
        return [(self.start_ticks, note_on), (self.end_ticks, note_off)]


def note_to_midi(note: str, octave: int) -> int:
    """MIDI note number of a spelled note in an octave (C4 = 60)."""
    return PitchClass.parse(note).to_midi(octave)


def events_to_midi(
    events: Sequence[MidiEvent],
    tempo_bpm: int = 120,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> MidiFile:
    """
    Write events into a single-track MidiFile.

    Args:
        events: Notes to write, in any order
        tempo_bpm: Tempo in beats per minute
        ticks_per_beat: Resolution (default 480)

    Returns:
        A mido MidiFile ready to be saved
    """
    timeline = [pair for event in events for pair in event.messages()]
    # note_off before note_on at the same tick
    timeline.sort(key=lambda item: (item[0], item[1].type != "note_off"))

    track = MidiTrack()
    track.append(MetaMessage("set_tempo", tempo=bpm2tempo(tempo_bpm), time=0))
    previous = 0
    for tick, message in timeline:
        track.append(message.copy(time=tick - previous))
        previous = tick
    track.append(MetaMessage("end_of_track", time=0))

    midi_file = MidiFile(ticks_per_beat=ticks_per_beat)
    midi_file.tracks.append(track)
    return midi_file


def request_to_events(request: PlaybackRequest) -> list[MidiEvent]:
    """
    Lay a playback request out as one note per beat.

    Silent slots still take their beat. The first beat of every measure
    is accented.
    """
    events: list[MidiEvent] = []

    for beat, pitch in enumerate(request.pitches()):
        if pitch is None:
            continue
        is_accent = beat % request.beats_per_measure == 0
        events.append(
            MidiEvent(
                pitch=pitch,
                start_ticks=beat * TICKS_PER_BEAT,
                duration_ticks=ACCENT_DURATION_TICKS if is_accent else NORMAL_DURATION_TICKS,
                velocity=ACCENT_VELOCITY if is_accent else NORMAL_VELOCITY,
            )
        )
    return events


def render_midi(request: PlaybackRequest) -> MidiFile:
    """Render a playback request to a MidiFile."""
    return events_to_midi(request_to_events(request), tempo_bpm=request.tempo)


def chord_to_events(
    notes: Sequence[str],
    octave: int = 4,
    start_ticks: int = 0,
    duration_ticks: int = CHORD_DURATION_TICKS,
    velocity: int = NORMAL_VELOCITY,
) -> list[MidiEvent]:
    """Stack chord notes upwards from ``octave`` as one block chord."""
    return [
        MidiEvent(
            pitch=note_to_midi(note, note_octave),
            start_ticks=start_ticks,
            duration_ticks=duration_ticks,
            velocity=velocity,
        )
        for note, note_octave in assign_octaves(notes, octave)
    ]
