"""
Chord-scale fit - does a chord's pitch-class set sit inside a scale?

Fit is pure set containment. Scale selections refer to catalog scales by
name; how an unknown name is treated depends on the mode:
- any: unknown scales are skipped
- all: an unknown scale means the chord does not fit
An empty selection applies no filter and everything fits.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from chuk_mcp_scales.catalog.catalog import Catalog
from chuk_mcp_scales.constants import OCTAVE_SEMITONES, FitMode
from chuk_mcp_scales.core.chord import Chord
from chuk_mcp_scales.core.pitch import PitchClass


@dataclass(frozen=True)
class ScaleSelection:
    """A scale picked by catalog name, played from a root."""

    scale: str  # catalog scale name (or id)
    root: str | int  # note name or pitch class


def _root_pitch_class(root: str | int) -> int:
    if isinstance(root, str):
        return PitchClass.parse(root).value
    return root % OCTAVE_SEMITONES


def scale_pitch_classes(root: str | int, intervals: Iterable[int]) -> frozenset[int]:
    """
    Pitch classes of a scale played from ``root``.

    Raises:
        InvalidNoteError: if ``root`` is a note name that does not parse
    """
    root_pc = _root_pitch_class(root)
    return frozenset((root_pc + interval) % OCTAVE_SEMITONES for interval in intervals)


def _chord_pitch_classes(chord: Chord | Iterable[int]) -> frozenset[int]:
    if isinstance(chord, Chord):
        return chord.pitch_classes
    return frozenset(chord)


def fits_in_scale(
    chord: Chord | Iterable[int],
    root: str | int,
    intervals: Iterable[int],
) -> bool:
    """True if every chord pitch class is in the scale."""
    return _chord_pitch_classes(chord) <= scale_pitch_classes(root, intervals)


def fits_in_any_scale(
    chord: Chord | Iterable[int],
    selections: Sequence[ScaleSelection],
    catalog: Catalog,
) -> bool:
    """True if the chord fits at least one selected scale (unknown names skipped)."""
    if not selections:
        return True

    pitch_classes = _chord_pitch_classes(chord)
    for selection in selections:
        scale_type = catalog.resolve(selection.scale)
        if scale_type is None:
            continue
        if fits_in_scale(pitch_classes, selection.root, scale_type.intervals):
            return True
    return False


def fits_in_all_scales(
    chord: Chord | Iterable[int],
    selections: Sequence[ScaleSelection],
    catalog: Catalog,
) -> bool:
    """True if the chord fits every selected scale (unknown names fail)."""
    if not selections:
        return True

    pitch_classes = _chord_pitch_classes(chord)
    for selection in selections:
        scale_type = catalog.resolve(selection.scale)
        if scale_type is None:
            return False
        if not fits_in_scale(pitch_classes, selection.root, scale_type.intervals):
            return False
    return True


def filter_chords(
    chords: Iterable[Chord],
    selections: Sequence[ScaleSelection],
    catalog: Catalog,
    mode: FitMode = FitMode.ANY,
) -> list[Chord]:
    """Keep the chords that fit the selected scales under ``mode``."""
    check = fits_in_all_scales if mode == FitMode.ALL else fits_in_any_scale
    return [chord for chord in chords if check(chord, selections, catalog)]
