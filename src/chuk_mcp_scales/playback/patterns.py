"""
Playback patterns - orderings for walking through a scale.

Patterns are written as degree numbers:
- 1-7: scale degrees
- 8: the tonic an octave up
- 0: silence

Degree d maps to ``notes[(d - 1) % N]`` raised by ``(d - 1) // N``
octaves, so the same tables work for scales of any size.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field, field_validator, model_validator

from chuk_mcp_scales.constants import ScalePattern, TimeSignature
from chuk_mcp_scales.core.pitch import PitchClass, assign_octaves, pitch_class_of

SILENCE = 0
MIDI_NOTE_MAX = 127

PATTERN_STEPS: dict[ScalePattern, tuple[int, ...]] = {
    ScalePattern.ASCENDING: (1, 2, 3, 4, 5, 6, 7, 8),
    ScalePattern.DESCENDING: (8, 7, 6, 5, 4, 3, 2, 1),
    ScalePattern.ALTERNATING: (1, 2, 3, 4, 5, 6, 7, 8, 7, 6, 5, 4, 3, 2, 1),
    ScalePattern.LADDER: (
        1, 2, 3, 2, 3, 4, 5, 4, 5, 6, 7, 6, 7, 8,
        7, 6, 7, 6, 5, 4, 5, 4, 3, 2, 3, 2, 1,
    ),  # fmt: skip
}


@dataclass(frozen=True)
class SequenceNote:
    """One slot of a playback sequence (``note`` is None for silence)."""

    note: str | None
    octave_offset: int = 0
    index: int | None = None  # position in the scale's note list

    @property
    def is_silence(self) -> bool:
        return self.note is None


def generate_note_sequence(
    notes: list[str] | tuple[str, ...],
    pattern: ScalePattern,
) -> list[SequenceNote]:
    """
    Expand a pattern into the notes to play.

    Args:
        notes: Scale notes from the root upwards
        pattern: Pattern to apply

    Returns:
        One SequenceNote per pattern step
    """
    if not notes:
        return []

    size = len(notes)
    sequence: list[SequenceNote] = []
    for step in PATTERN_STEPS[pattern]:
        if step == SILENCE:
            sequence.append(SequenceNote(note=None))
            continue
        index = (step - 1) % size
        sequence.append(
            SequenceNote(note=notes[index], octave_offset=(step - 1) // size, index=index)
        )
    return sequence


class PlaybackRequest(BaseModel):
    """What to play: scale notes, pattern, meter and tempo."""

    notes: list[str] = Field(..., min_length=1, description="Scale notes from the root upwards")
    tempo: int = Field(120, ge=20, le=300, description="Beats per minute")
    time_signature: TimeSignature = Field("4/4", description="Meter (sets the accent period)")
    pattern: ScalePattern = Field(ScalePattern.ASCENDING, description="Playback pattern")
    octave: int = Field(4, ge=0, le=8, description="Octave of the root note")

    @field_validator("notes")
    @classmethod
    def check_notes(cls, notes: list[str]) -> list[str]:
        invalid = [note for note in notes if pitch_class_of(note) is None]
        if invalid:
            raise ValueError(f"Invalid notes: {', '.join(invalid)}")
        return notes

    @property
    def beats_per_measure(self) -> int:
        return 3 if self.time_signature == "3/4" else 4

    @model_validator(mode="after")
    def check_pitch_range(self) -> PlaybackRequest:
        highest = max((pitch for pitch in self.pitches() if pitch is not None), default=0)
        if highest > MIDI_NOTE_MAX:
            raise ValueError(
                f"Octave {self.octave} is too high for this scale: the pattern reaches "
                f"MIDI note {highest} (max {MIDI_NOTE_MAX})"
            )
        return self

    def pitches(self) -> list[int | None]:
        """
        MIDI note number of every pattern slot, None for silence.

        Each note's octave comes from its position above the root (so
        A minor climbs A4 B4 C5 ...), plus the pattern's octave offset.
        """
        octaves = [octave for _, octave in assign_octaves(self.notes, self.octave)]
        return [
            None
            if item.note is None or item.index is None
            else PitchClass.parse(item.note).to_midi(octaves[item.index] + item.octave_offset)
            for item in generate_note_sequence(self.notes, self.pattern)
        ]
