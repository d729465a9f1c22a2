"""
Scale finders - search every catalog scale on every root.

Two searches share the same brute-force shape (scale types x 12 roots):
- find_scales_containing: scales whose notes include a query note set
- find_scales_by_chord_types: scales whose degree triads include a set
  of triad qualities
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from chuk_mcp_scales.catalog.catalog import Catalog
from chuk_mcp_scales.constants import OCTAVE_SEMITONES, ErrorMessages, TriadQuality
from chuk_mcp_scales.core.pitch import note_name_of, split_tokens
from chuk_mcp_scales.core.scale import ScaleType
from chuk_mcp_scales.core.triad import calculate_triads


@dataclass(frozen=True)
class ScaleMatch:
    """A (scale, root) whose notes contain the query."""

    scale_type: ScaleType
    root: int
    root_name: str
    scale_notes: tuple[str, ...]
    pitch_classes: frozenset[int]
    extra_notes: int  # scale notes not in the query
    matched_notes: tuple[str, ...]  # scale notes that are in the query

    @property
    def name(self) -> str:
        return f"{self.root_name} {self.scale_type.name}"


def find_scales_containing(
    query: Iterable[int],
    catalog: Catalog,
    prefer_sharps: bool = True,
) -> list[ScaleMatch]:
    """
    Find every scale and root whose notes include all query pitch classes.

    Args:
        query: Pitch classes to look for
        catalog: Catalog to search
        prefer_sharps: Spell results with sharps (True) or flats (False)

    Returns:
        Matches ranked by fewest extra notes, then scale name
    """
    query_set = frozenset(pc % OCTAVE_SEMITONES for pc in query)
    if not query_set:
        return []

    matches: list[ScaleMatch] = []
    for scale_type in catalog:
        for root in range(OCTAVE_SEMITONES):
            pitch_classes = scale_type.pitch_classes(root)
            if not query_set <= pitch_classes:
                continue

            notes = scale_type.notes(root, prefer_sharps)
            matched = tuple(
                note
                for note, interval in zip(notes, scale_type.intervals)
                if (root + interval) % OCTAVE_SEMITONES in query_set
            )
            matches.append(
                ScaleMatch(
                    scale_type=scale_type,
                    root=root,
                    root_name=note_name_of(root, prefer_sharps),
                    scale_notes=tuple(notes),
                    pitch_classes=pitch_classes,
                    extra_notes=len(pitch_classes) - len(query_set),
                    matched_notes=matched,
                )
            )

    # Stable sort keeps catalog order, then root order, within ties
    matches.sort(key=lambda match: (match.extra_notes, match.scale_type.name))
    return matches


# Input token -> triad quality
CHORD_TYPE_ALIASES: dict[str, TriadQuality] = {
    "major": TriadQuality.MAJOR,
    "maj": TriadQuality.MAJOR,
    "M": TriadQuality.MAJOR,
    "minor": TriadQuality.MINOR,
    "min": TriadQuality.MINOR,
    "m": TriadQuality.MINOR,
    "diminished": TriadQuality.DIMINISHED,
    "dim": TriadQuality.DIMINISHED,
    "augmented": TriadQuality.AUGMENTED,
    "aug": TriadQuality.AUGMENTED,
    "sus2": TriadQuality.SUS2,
    "sus4": TriadQuality.SUS4,
}


@dataclass(frozen=True)
class ParsedChordTypes:
    """Result of parsing a chord-type list - qualities plus per-token errors."""

    types: frozenset[TriadQuality] = frozenset()
    errors: tuple[str, ...] = ()


def parse_chord_types(text: str) -> ParsedChordTypes:
    """
    Parse triad quality names separated by whitespace or commas.

    Each token is looked up as typed, then lower-cased, so ``M`` is major
    while ``MAJOR`` still resolves.

    Args:
        text: e.g. "major minor dim" or "maj, min, aug"
    """
    if not text or not text.strip():
        return ParsedChordTypes()

    types: set[TriadQuality] = set()
    errors: list[str] = []
    for token in split_tokens(text):
        quality = CHORD_TYPE_ALIASES.get(token) or CHORD_TYPE_ALIASES.get(token.lower())
        if quality is None:
            errors.append(ErrorMessages.UNKNOWN_CHORD_TYPE.format(token=token))
            continue
        types.add(quality)

    return ParsedChordTypes(types=frozenset(types), errors=tuple(errors))


def supported_chord_type_names() -> list[str]:
    """Help text listing the chord types parse_chord_types understands."""
    return [
        "major (or maj, M)",
        "minor (or min, m)",
        "diminished (or dim)",
        "augmented (or aug)",
        "sus2",
        "sus4",
    ]


@dataclass(frozen=True)
class ChordTypeMatch:
    """A (scale, root) whose degree triads include the query qualities."""

    scale_type: ScaleType
    root: int
    root_name: str
    scale_notes: tuple[str, ...]
    triad_counts: dict[TriadQuality, int] = field(hash=False)
    matched_types: frozenset[TriadQuality]  # every quality present, not just the query

    @property
    def name(self) -> str:
        return f"{self.root_name} {self.scale_type.name}"


def find_scales_by_chord_types(
    qualities: Iterable[TriadQuality],
    catalog: Catalog,
    prefer_sharps: bool = True,
) -> list[ChordTypeMatch]:
    """
    Find every scale and root whose triads include all query qualities.

    Args:
        qualities: Triad qualities to look for
        catalog: Catalog to search
        prefer_sharps: Spell results with sharps (True) or flats (False)

    Returns:
        Matches ranked by most distinct triad qualities, then scale name
    """
    query = frozenset(qualities)
    if not query:
        return []

    matches: list[ChordTypeMatch] = []
    for scale_type in catalog:
        for root in range(OCTAVE_SEMITONES):
            notes = scale_type.notes(root, prefer_sharps)
            triads = calculate_triads(notes, scale_type.intervals, include_extensions=False)

            counts: dict[TriadQuality, int] = {}
            for triad in triads:
                counts[triad.quality] = counts.get(triad.quality, 0) + 1

            found = frozenset(counts)
            if not query <= found:
                continue

            matches.append(
                ChordTypeMatch(
                    scale_type=scale_type,
                    root=root,
                    root_name=note_name_of(root, prefer_sharps),
                    scale_notes=tuple(notes),
                    triad_counts=counts,
                    matched_types=found,
                )
            )

    matches.sort(key=lambda match: (-len(match.triad_counts), match.scale_type.name))
    return matches
