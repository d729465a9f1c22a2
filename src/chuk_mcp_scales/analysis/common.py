"""
Common chords - triads shared between several keys.

Chords are identified by (root pitch class, triad quality), so enharmonic
spellings (C# / Db) count as the same chord.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from chuk_mcp_scales.constants import OCTAVE_SEMITONES, TriadQuality
from chuk_mcp_scales.core.scale import Key
from chuk_mcp_scales.core.triad import calculate_triads, triad_symbol


@dataclass(frozen=True)
class CommonChord:
    """A triad and the keys that contain it."""

    root: str
    root_pitch_class: int
    quality: TriadQuality
    symbol: str  # e.g. "C", "Dm", "F#°"
    count: int
    scale_names: tuple[str, ...]  # sorted "C Major" style names


@dataclass(frozen=True)
class CommonChordStats:
    total: int
    universal: int  # in every key
    shared: int  # in two or more keys, not all
    unique: int  # in one key only


def find_common_chords(keys: Sequence[Key], prefer_sharps: bool = True) -> list[CommonChord]:
    """
    Find the triads that appear in more than one of the given keys.

    With a single key every triad of that key is returned.

    Args:
        keys: Keys to compare (root + scale type)
        prefer_sharps: Spell results with sharps (True) or flats (False)

    Returns:
        Chords ranked by how many keys contain them, then root pitch class
    """
    if not keys:
        return []

    # (root pitch class, quality) -> first spelling seen and the keys containing it
    found: dict[tuple[int, TriadQuality], tuple[str, set[str]]] = {}

    for key in keys:
        notes = key.notes(prefer_sharps)
        scale_name = key.name(prefer_sharps)
        for triad in calculate_triads(notes, key.scale.intervals, include_extensions=False):
            root_pc = (key.root.value + key.scale.intervals[triad.degree]) % OCTAVE_SEMITONES
            chord_key = (root_pc, triad.quality)
            if chord_key in found:
                found[chord_key][1].add(scale_name)
            else:
                found[chord_key] = (triad.root, {scale_name})

    chords: list[CommonChord] = []
    for (root_pc, quality), (root, scale_names) in found.items():
        count = len(scale_names)
        if len(keys) == 1 or count >= 2:
            chords.append(
                CommonChord(
                    root=root,
                    root_pitch_class=root_pc,
                    quality=quality,
                    symbol=triad_symbol(root, quality),
                    count=count,
                    scale_names=tuple(sorted(scale_names)),
                )
            )

    chords.sort(key=lambda chord: (-chord.count, chord.root_pitch_class))
    return chords


def common_chord_stats(chords: Sequence[CommonChord], total_keys: int) -> CommonChordStats:
    """Count how widely the chords are shared."""
    return CommonChordStats(
        total=len(chords),
        universal=sum(1 for chord in chords if chord.count == total_keys),
        shared=sum(1 for chord in chords if 2 <= chord.count < total_keys),
        unique=sum(1 for chord in chords if chord.count == 1),
    )
