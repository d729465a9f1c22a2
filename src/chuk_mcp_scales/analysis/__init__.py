"""
Scale analysis - the questions asked of the catalog.

- fit: does a chord sit inside a scale (or any / all of several)?
- relatives: which scales are one or two half-step alterations away?
- finder: which scales contain a note set or a set of triad qualities?
- common: which triads do several keys share?
- characteristics: short descriptive tags for a scale

Every function takes the Catalog explicitly and returns fresh values.
"""

from chuk_mcp_scales.analysis.characteristics import (
    analyze_scale_characteristics,
    interval_to_roman_numeral,
    intervals_to_roman_numerals,
)
from chuk_mcp_scales.analysis.common import (
    CommonChord,
    CommonChordStats,
    common_chord_stats,
    find_common_chords,
)
from chuk_mcp_scales.analysis.finder import (
    CHORD_TYPE_ALIASES,
    ChordTypeMatch,
    ParsedChordTypes,
    ScaleMatch,
    find_scales_by_chord_types,
    find_scales_containing,
    parse_chord_types,
    supported_chord_type_names,
)
from chuk_mcp_scales.analysis.fit import (
    ScaleSelection,
    filter_chords,
    fits_in_all_scales,
    fits_in_any_scale,
    fits_in_scale,
    scale_pitch_classes,
)
from chuk_mcp_scales.analysis.relatives import (
    Modification,
    RelativeScale,
    find_all_differences,
    find_relative_scales,
    find_second_degree_relatives,
)

__all__ = [
    # Fit
    "ScaleSelection",
    "filter_chords",
    "fits_in_all_scales",
    "fits_in_any_scale",
    "fits_in_scale",
    "scale_pitch_classes",
    # Relatives
    "Modification",
    "RelativeScale",
    "find_all_differences",
    "find_relative_scales",
    "find_second_degree_relatives",
    # Finder
    "CHORD_TYPE_ALIASES",
    "ChordTypeMatch",
    "ParsedChordTypes",
    "ScaleMatch",
    "find_scales_by_chord_types",
    "find_scales_containing",
    "parse_chord_types",
    "supported_chord_type_names",
    # Common chords
    "CommonChord",
    "CommonChordStats",
    "common_chord_stats",
    "find_common_chords",
    # Characteristics
    "analyze_scale_characteristics",
    "interval_to_roman_numeral",
    "intervals_to_roman_numerals",
]
