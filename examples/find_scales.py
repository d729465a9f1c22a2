#!/usr/bin/env python3
"""
Example: Ask the scale catalog questions.

This demonstrates the analysis layer on the built-in catalog:
which scales contain some notes, which chords fit a key, and which
scales sit one or two alterations away.

Usage:
    python examples/find_scales.py
"""

from chuk_mcp_scales.analysis import (
    ScaleSelection,
    filter_chords,
    find_common_chords,
    find_relative_scales,
    find_scales_by_chord_types,
    find_scales_containing,
    find_second_degree_relatives,
    parse_chord_types,
)
from chuk_mcp_scales.catalog import CatalogLoader
from chuk_mcp_scales.core import (
    Key,
    PitchClass,
    calculate_triads,
    display_extensions,
    parse_chords,
    parse_notes,
)


def main() -> None:
    """Run a few catalog queries."""
    catalog = CatalogLoader().load()
    print(f"Catalog: {len(catalog)} scales in {len(catalog.families())} families")

    # Example 1: Scales containing a note set
    print("\nScales containing C Eb G Bb:")
    query = parse_notes("C Eb G Bb")
    for match in find_scales_containing(query.pitch_classes, catalog, prefer_sharps=False)[:8]:
        print(f"  {match.name:<32} +{match.extra_notes}  {' '.join(match.scale_notes)}")

    # Example 2: Triads of a key
    harmonic_minor = catalog.require("harmonic-minor")
    key = Key(PitchClass.A, harmonic_minor)
    print(f"\nTriads of {key}:")
    for triad in calculate_triads(key.notes(), harmonic_minor.intervals):
        extensions = ", ".join(display_extensions(triad)) or "-"
        print(f"  {triad.roman_numeral:<6} {triad.symbol:<5} ext: {extensions}")

    # Example 3: Chord-scale fit
    chords = parse_chords("Am Dm E7 Cmaj7 G7 F").chords
    selections = [ScaleSelection("harmonic-minor", "A")]
    fitting = filter_chords(chords, selections, catalog)
    print(f"\nChords fitting {key}: {', '.join(c.display_name for c in fitting)}")

    # Example 4: Relative scales
    natural_minor = catalog.require("natural-minor")
    notes = natural_minor.notes(PitchClass.A)
    print("\nRelatives of A Natural Minor:")
    for relative in find_relative_scales(natural_minor, catalog):
        changes = relative.describe(notes, relative.scale.notes(PitchClass.A))
        print(f"  {relative.scale.name:<24} {', '.join(changes)}")
    print("Two alterations away:")
    for relative in find_second_degree_relatives(natural_minor, catalog)[:6]:
        changes = relative.describe(notes, relative.scale.notes(PitchClass.A))
        print(f"  {relative.scale.name:<24} {', '.join(changes)}")

    # Example 5: Scales with augmented and diminished triads
    types = parse_chord_types("aug dim").types
    print("\nScales with augmented and diminished triads:")
    for match in find_scales_by_chord_types(types, catalog)[:5]:
        counts = ", ".join(f"{q.value}: {n}" for q, n in match.triad_counts.items())
        print(f"  {match.name:<32} {counts}")

    # Example 6: Chords shared by neighbouring keys
    major = catalog.require("major")
    keys = [Key(PitchClass.C, major), Key(PitchClass.G, major), Key(PitchClass.F, major)]
    print("\nChords shared by C, G and F major:")
    for chord in find_common_chords(keys):
        print(f"  {chord.symbol:<4} in {chord.count} keys")


if __name__ == "__main__":
    main()
