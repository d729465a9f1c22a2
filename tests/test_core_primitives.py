"""
Tests for core scale primitives.

Tests cover:
- PitchClass, note parsing and octave assignment (pitch.py)
- Step arithmetic, ScaleType, Key (scale.py)
- ChordQuality, Chord and the chord symbol parser (chord.py)
- Degree triads, Roman numerals and extensions (triad.py)
"""

import pytest

from chuk_mcp_scales.constants import TriadQuality
from chuk_mcp_scales.core import (
    Chord,
    Key,
    ModeOf,
    PitchClass,
    ScaleType,
    assign_octaves,
    calculate_extensions,
    calculate_triads,
    determine_triad_quality,
    display_extensions,
    interval_signature,
    intervals_to_steps,
    note_name_of,
    parse_chord,
    parse_chords,
    parse_notes,
    pitch_class_of,
    roman_numeral,
    rotate_steps,
    scale_notes,
    steps_to_intervals,
    triad_symbol,
)
from chuk_mcp_scales.exceptions import (
    InvalidNoteError,
    MalformedCatalogEntryError,
    UnparsableChordError,
)

MAJOR = (0, 2, 4, 5, 7, 9, 11)
HARMONIC_MINOR = (0, 2, 3, 5, 7, 8, 11)
OCTATONIC_WHOLE_HALF = (0, 2, 3, 5, 6, 8, 9, 11)


class TestPitchClass:
    """Tests for PitchClass and note-name conversion."""

    def test_pitch_values(self) -> None:
        """Pitch classes have correct values."""
        assert PitchClass.C == 0
        assert PitchClass.E == 4
        assert PitchClass.A == 9
        assert PitchClass.B == 11

    def test_transpose_wraps(self) -> None:
        """Transposing wraps around the octave."""
        assert PitchClass.B.transpose(1) == PitchClass.C
        assert PitchClass.C.transpose(-1) == PitchClass.B

    def test_interval_to(self) -> None:
        """Ascending interval between pitch classes."""
        assert PitchClass.C.interval_to(PitchClass.G) == 7
        assert PitchClass.G.interval_to(PitchClass.C) == 5

    def test_to_midi(self) -> None:
        """Convert to MIDI note numbers."""
        assert PitchClass.C.to_midi(4) == 60
        assert PitchClass.A.to_midi(4) == 69

    def test_parse_accidentals(self) -> None:
        """Sharps and flats in ASCII and unicode."""
        assert PitchClass.parse("C#") == PitchClass.Cs
        assert PitchClass.parse("Db") == PitchClass.Cs
        assert PitchClass.parse("F♯") == PitchClass.Fs
        assert PitchClass.parse("B♭") == PitchClass.As

    def test_parse_wraps_around_c(self) -> None:
        """Cb and B# wrap across the octave boundary."""
        assert pitch_class_of("Cb") == 11
        assert pitch_class_of("B#") == 0

    def test_parse_invalid(self) -> None:
        """Unknown notes raise or return None."""
        assert pitch_class_of("H") is None
        assert pitch_class_of("c") is None
        assert pitch_class_of("C##") is None
        with pytest.raises(InvalidNoteError):
            PitchClass.parse("X")

    def test_note_name_of(self) -> None:
        """Spelling uses the sharp or flat name set."""
        assert note_name_of(1) == "C#"
        assert note_name_of(1, prefer_sharps=False) == "Db"
        assert note_name_of(13) == "C#"

    def test_spell(self) -> None:
        """PitchClass spelling follows the flat preference."""
        assert PitchClass.As.spell() == "A#"
        assert PitchClass.As.spell(prefer_flats=True) == "Bb"


class TestNoteLists:
    """Tests for scale spelling, note lists and octave assignment."""

    def test_scale_notes(self) -> None:
        """Spell a scale from a root."""
        assert scale_notes(0, MAJOR) == ["C", "D", "E", "F", "G", "A", "B"]
        assert scale_notes(5, MAJOR, prefer_sharps=False) == ["F", "G", "A", "Bb", "C", "D", "E"]

    def test_parse_notes_collects_errors(self) -> None:
        """Bad tokens are reported, good ones kept."""
        parsed = parse_notes("C4 E, G# Hb")
        assert parsed.notes == ("C", "E", "G#")
        assert parsed.pitch_classes == frozenset({0, 4, 8})
        assert parsed.errors == ('Invalid note: "Hb"',)

    def test_parse_notes_normalizes_unicode(self) -> None:
        """Unicode accidentals become ASCII."""
        parsed = parse_notes("C♯ E♭")
        assert parsed.notes == ("C#", "Eb")
        assert parsed.pitch_classes == frozenset({1, 3})

    def test_parse_notes_empty(self) -> None:
        """Blank input gives an empty result."""
        parsed = parse_notes("   ")
        assert parsed.notes == ()
        assert parsed.errors == ()

    def test_assign_octaves_wraps(self) -> None:
        """Octave increments when the pitch class drops."""
        result = assign_octaves(["A", "B", "C", "D"], 4)
        assert result == [("A", 4), ("B", 4), ("C", 5), ("D", 5)]

    def test_assign_octaves_invalid(self) -> None:
        """Invalid notes raise."""
        with pytest.raises(InvalidNoteError):
            assign_octaves(["C", "Q"])


class TestStepArithmetic:
    """Tests for interval/step conversion and rotation."""

    def test_intervals_to_steps(self) -> None:
        """The last step returns to the octave."""
        assert intervals_to_steps(MAJOR) == (2, 2, 1, 2, 2, 2, 1)

    def test_steps_to_intervals(self) -> None:
        """The closing step is not needed to place a degree."""
        assert steps_to_intervals((2, 2, 1, 2, 2, 2, 1)) == MAJOR

    def test_rotate_steps(self) -> None:
        """Rotating the major steps by one gives dorian."""
        rotated = rotate_steps((2, 2, 1, 2, 2, 2, 1), 1)
        assert rotated == (2, 1, 2, 2, 2, 1, 2)
        assert steps_to_intervals(rotated) == (0, 2, 3, 5, 7, 9, 10)

    def test_rotate_full_cycle(self) -> None:
        """Rotation by the length is the identity."""
        steps = (2, 2, 1, 2, 2, 2, 1)
        assert rotate_steps(steps, 7) == steps
        assert rotate_steps((), 3) == ()

    def test_interval_signature(self) -> None:
        """Signatures are sorted and deduplicated."""
        assert interval_signature([7, 0, 4, 4]) == (0, 4, 7)


class TestScaleType:
    """Tests for ScaleType."""

    def test_steps_derived(self) -> None:
        """Steps are computed from intervals."""
        major = ScaleType("major", "Major", "major-modes", MAJOR)
        assert major.steps == (2, 2, 1, 2, 2, 2, 1)
        assert sum(major.steps) == 12
        assert major.size == 7

    def test_from_steps(self) -> None:
        """Create from a step pattern."""
        whole_tone = ScaleType.from_steps("whole-tone", "Whole Tone", "symmetrical", (2,) * 6)
        assert whole_tone.intervals == (0, 2, 4, 6, 8, 10)

    def test_from_steps_must_fill_octave(self) -> None:
        """Steps that do not sum to 12 are rejected."""
        with pytest.raises(MalformedCatalogEntryError):
            ScaleType.from_steps("bad", "Bad", "other", (2, 2, 2))

    @pytest.mark.parametrize(
        "intervals",
        [(), (2, 4, 7), (0, 4, 2), (0, 4, 4), (0, 7, 12)],
    )
    def test_invalid_intervals(self, intervals: tuple[int, ...]) -> None:
        """Intervals must start at 0, ascend strictly and stay below 12."""
        with pytest.raises(MalformedCatalogEntryError):
            ScaleType("bad", "Bad", "other", intervals)

    def test_pitch_classes_and_notes(self) -> None:
        """Play the scale from a root."""
        major = ScaleType("major", "Major", "major-modes", MAJOR)
        assert major.pitch_classes(7) == frozenset({7, 9, 11, 0, 2, 4, 6})
        assert major.notes(7) == ["G", "A", "B", "C", "D", "E", "F#"]

    def test_rotated_intervals(self) -> None:
        """Rotation 5 of major is natural minor."""
        major = ScaleType("major", "Major", "major-modes", MAJOR)
        assert major.rotated_intervals(5) == (0, 2, 3, 5, 7, 8, 10)

    def test_with_relationships(self) -> None:
        """Annotations are copied onto a new value."""
        dorian = ScaleType("dorian", "Dorian", "major-modes", (0, 2, 3, 5, 7, 9, 10))
        annotated = dorian.with_relationships(ModeOf("major", 2), {7: "major", 2: "phrygian"})
        assert dorian.mode_of is None
        assert annotated.mode_of == ModeOf("major", 2)
        assert annotated.inversions == ((2, "phrygian"), (7, "major"))
        assert annotated.inversion(7) == "major"
        assert annotated.inversion(3) is None

    def test_mode_of_step_positive(self) -> None:
        """Mode steps are 1-based."""
        with pytest.raises(MalformedCatalogEntryError):
            ModeOf("major", 0)

    def test_hashable(self) -> None:
        """Scale types can live in sets."""
        a = ScaleType("major", "Major", "major-modes", MAJOR)
        b = ScaleType("major", "Major", "major-modes", list(MAJOR))
        assert a == b
        assert len({a, b}) == 1


class TestKey:
    """Tests for Key."""

    @pytest.fixture
    def harmonic_minor(self) -> ScaleType:
        return ScaleType("harmonic-minor", "Harmonic Minor", "harmonic-minor-modes", HARMONIC_MINOR)

    def test_name(self, harmonic_minor: ScaleType) -> None:
        """Keys are named root plus scale name."""
        assert Key(PitchClass.A, harmonic_minor).name() == "A Harmonic Minor"
        assert Key(PitchClass.As, harmonic_minor).name(prefer_sharps=False) == "Bb Harmonic Minor"

    def test_notes(self, harmonic_minor: ScaleType) -> None:
        """Key notes follow the scale intervals."""
        key = Key(PitchClass.A, harmonic_minor)
        assert key.notes() == ["A", "B", "C", "D", "E", "F", "G#"]


class TestChordParsing:
    """Tests for the chord symbol parser."""

    def test_major_triad(self) -> None:
        """A bare root is a major triad."""
        chord = parse_chord("C")
        assert chord is not None
        assert chord.quality == "major"
        assert chord.pitch_classes == frozenset({0, 4, 7})
        assert chord.display_name == "C"

    def test_seventh_chords(self) -> None:
        """Seventh qualities resolve through the table."""
        assert parse_chord("F#maj7").pitch_classes == frozenset({6, 10, 1, 5})
        assert parse_chord("Bbdim7").pitch_classes == frozenset({10, 1, 4, 7})
        assert parse_chord("G7").pitch_classes == frozenset({7, 11, 2, 5})

    def test_aliases(self) -> None:
        """Alternative quality spellings."""
        assert parse_chord("Cmin").quality == "m"
        assert parse_chord("C-").quality == "m"
        assert parse_chord("CΔ").quality == "maj7"
        assert parse_chord("C°").quality == "dim"
        assert parse_chord("C+").quality == "aug"
        assert parse_chord("Cmajor").quality == "major"

    def test_half_diminished_display(self) -> None:
        """m7b5 displays with the ø symbol."""
        chord = parse_chord("Bm7b5")
        assert chord.display_name == "Bø7"
        assert parse_chord("Bø").quality == "m7b5"

    def test_lowercase_root(self) -> None:
        """Root letters are case-insensitive, spelled upper-case."""
        chord = parse_chord("am")
        assert chord.root == "A"
        assert chord.display_name == "Am"

    def test_slash_chord(self) -> None:
        """The bass note is folded into the pitch classes."""
        chord = parse_chord("Dm7/G")
        assert chord.is_slash_chord
        assert chord.bass == "G"
        assert chord.pitch_classes == frozenset({2, 5, 9, 0, 7})
        assert chord.display_name == "Dm7/G"

    @pytest.mark.parametrize("symbol", ["", "H", "Cxyz", "C/X", "7"])
    def test_invalid(self, symbol: str) -> None:
        """Unknown roots and qualities do not parse."""
        assert parse_chord(symbol) is None

    def test_strict_parse_raises(self) -> None:
        """Chord.parse raises on failure."""
        assert Chord.parse("Am").chord_quality.description == "minor"
        with pytest.raises(UnparsableChordError):
            Chord.parse("Xyz")

    def test_parse_chords_partial(self) -> None:
        """A bad token does not abort the list."""
        parsed = parse_chords("C, Am, Xyz, G7")
        assert [chord.display_name for chord in parsed.chords] == ["C", "Am", "G7"]
        assert parsed.errors == ('Invalid chord: "Xyz"',)
        assert parsed.pitch_classes == frozenset({0, 4, 7, 9, 11, 2, 5})


class TestTriads:
    """Tests for degree triads."""

    def test_quality_table(self) -> None:
        """Interval pairs map to qualities, unknown pairs fall back to major."""
        assert determine_triad_quality(4, 3) == TriadQuality.MAJOR
        assert determine_triad_quality(3, 3) == TriadQuality.DIMINISHED
        assert determine_triad_quality(5, 2) == TriadQuality.SUS4
        assert determine_triad_quality(1, 1) == TriadQuality.MAJOR

    def test_roman_numerals(self) -> None:
        """Numeral case and suffix follow the quality."""
        assert roman_numeral(0, TriadQuality.MAJOR) == "I"
        assert roman_numeral(1, TriadQuality.MINOR) == "ii"
        assert roman_numeral(6, TriadQuality.DIMINISHED) == "vii°"
        assert roman_numeral(2, TriadQuality.AUGMENTED) == "III+"
        assert roman_numeral(8, TriadQuality.MAJOR) == "IX"

    def test_symbol(self) -> None:
        """Short chord symbols per quality."""
        assert triad_symbol("D", TriadQuality.MINOR) == "Dm"
        assert triad_symbol("B", TriadQuality.DIMINISHED) == "B°"

    def test_major_scale_triads(self) -> None:
        """The diatonic triads of C major."""
        notes = scale_notes(0, MAJOR)
        triads = calculate_triads(notes, MAJOR)
        assert [t.roman_numeral for t in triads] == ["I", "ii", "iii", "IV", "V", "vi", "vii°"]
        assert [t.symbol for t in triads] == ["C", "Dm", "Em", "F", "G", "Am", "B°"]
        assert triads[0].notes == ("C", "E", "G")
        assert triads[6].notes == ("B", "D", "F")

    def test_major_scale_extensions(self) -> None:
        """Extensions the major scale supports on each degree."""
        triads = calculate_triads(scale_notes(0, MAJOR), MAJOR)
        assert triads[0].extensions == ("6", "maj7")
        assert triads[1].extensions == ("6", "7")
        assert triads[4].extensions == ("6", "7")
        assert triads[6].extensions == ("alt5", "7")

    def test_display_extensions(self) -> None:
        """alt5 expands, without b5 on a diminished triad."""
        triads = calculate_triads(scale_notes(0, MAJOR), MAJOR)
        assert display_extensions(triads[6]) == ["#5", "7"]
        assert display_extensions(triads[0]) == ["6", "maj7"]

    def test_extensions_skipped(self) -> None:
        """Extensions can be turned off."""
        triads = calculate_triads(scale_notes(0, MAJOR), MAJOR, include_extensions=False)
        assert all(t.extensions == () for t in triads)

    def test_calculate_extensions_augmented_fifth(self) -> None:
        """A perfect fifth offers #5 when the scale has it."""
        assert calculate_extensions(0, 7, HARMONIC_MINOR) == ["#5", "maj7"]

    def test_harmonic_minor_triads(self) -> None:
        """Harmonic minor has an augmented III."""
        notes = scale_notes(9, HARMONIC_MINOR)
        triads = calculate_triads(notes, HARMONIC_MINOR, include_extensions=False)
        assert [t.roman_numeral for t in triads] == ["i", "ii°", "III+", "iv", "V", "VI", "vii°"]
        assert triads[4].notes == ("E", "G#", "B")

    def test_eight_note_scale(self) -> None:
        """Degrees past VII keep counting and wrap correctly."""
        notes = scale_notes(0, OCTATONIC_WHOLE_HALF)
        triads = calculate_triads(notes, OCTATONIC_WHOLE_HALF, include_extensions=False)
        assert len(triads) == 8
        assert triads[7].quality == TriadQuality.DIMINISHED
        assert triads[7].roman_numeral == "viii°"

    def test_whole_tone_triads(self) -> None:
        """Every whole-tone triad is augmented."""
        intervals = (0, 2, 4, 6, 8, 10)
        triads = calculate_triads(scale_notes(0, intervals), intervals, include_extensions=False)
        assert {t.quality for t in triads} == {TriadQuality.AUGMENTED}
        assert triads[0].roman_numeral == "I+"
