"""
Tests for the combinatorial generator and catalog maintenance.

Tests cover:
- Step pattern enumeration
- Syncing generated patterns into a catalog
- Naming placeholder scales
- Adding the modes of a parent scale
- The catalog maintenance CLI
"""

import json
import shutil
from pathlib import Path

import pytest

from chuk_mcp_scales.catalog import (
    HARMONIC_MINOR_MODES,
    KNOWN_SCALE_NAMES,
    Catalog,
    add_modes,
    apply_scale_names,
    dump_catalog,
    generate_step_patterns,
    load_document,
    pattern_to_intervals,
    resolve_modal_relationships,
    save_catalog,
    scale_slug,
    sync_catalog,
    uncovered_scales,
)
from chuk_mcp_scales.catalog.cli import main
from chuk_mcp_scales.catalog.generator import (
    PLACEHOLDER_FAMILY,
    combinations_document,
    placeholder_id,
)
from chuk_mcp_scales.catalog.loader import document_to_catalog
from chuk_mcp_scales.core import ModeOf, ScaleType
from chuk_mcp_scales.exceptions import CatalogLookupError


@pytest.fixture(scope="module")
def patterns() -> list[tuple[int, ...]]:
    return generate_step_patterns()


class TestGenerateStepPatterns:
    """Tests for step pattern enumeration."""

    def test_count(self, patterns: list[tuple[int, ...]]) -> None:
        """There are 21 ways to fill an octave."""
        assert len(patterns) == 21
        assert len(set(patterns)) == 21

    def test_order(self, patterns: list[tuple[int, ...]]) -> None:
        """Whole steps are explored first."""
        assert patterns[0] == (2, 2, 2, 2, 2, 2)
        assert patterns[1] == (2, 2, 2, 2, 1, 2, 1)

    def test_rules(self, patterns: list[tuple[int, ...]]) -> None:
        """Every pattern sums to 12 with no adjacent half steps."""
        for pattern in patterns:
            assert sum(pattern) == 12
            assert set(pattern) <= {1, 2}
            assert all(not (a == 1 and b == 1) for a, b in zip(pattern, pattern[1:]))

    def test_contains_diatonic_modes(self, patterns: list[tuple[int, ...]]) -> None:
        """Major and locrian are generated."""
        assert (2, 2, 1, 2, 2, 2, 1) in patterns
        assert (1, 2, 2, 1, 2, 2, 2) in patterns

    def test_small_target(self) -> None:
        """Other targets work too."""
        assert generate_step_patterns(4) == [(2, 2), (1, 2, 1)]
        assert generate_step_patterns(1) == [(1,)]

    def test_pattern_to_intervals(self) -> None:
        """The closing step is dropped."""
        assert pattern_to_intervals((2, 2, 1, 2, 2, 2, 1)) == (0, 2, 4, 5, 7, 9, 11)

    def test_combinations_document(self, patterns: list[tuple[int, ...]]) -> None:
        """The generate output carries metadata."""
        document = combinations_document(patterns, 12)
        assert document["metadata"]["target_sum"] == 12
        assert document["metadata"]["total_combinations"] == 21
        assert document["metadata"]["rules"] == [
            "No two or more 1's in a row",
            "Total sum equals exactly 12",
        ]
        assert document["combinations"][0] == [2, 2, 2, 2, 2, 2]
        assert "generated_at" in document["metadata"]


class TestSyncCatalog:
    """Tests for folding generated patterns into a catalog."""

    def test_placeholders_added(
        self, small_catalog: Catalog, patterns: list[tuple[int, ...]]
    ) -> None:
        """Missing interval sets become numbered placeholders."""
        result = sync_catalog(small_catalog, patterns)

        # The seven diatonic modes are already present
        assert len(result.added) == 14
        assert len(result.catalog) == len(small_catalog) + 14

        first = result.added[0]
        assert first.id == "scale-0-2-4-6-8-10"
        assert first.name == "Unknown Scale 1"
        assert first.family == PLACEHOLDER_FAMILY
        assert result.added[1].name == "Unknown Scale 2"
        assert result.added[1].intervals == (0, 2, 4, 6, 8, 9, 11)

    def test_originals_untouched(
        self, small_catalog: Catalog, patterns: list[tuple[int, ...]]
    ) -> None:
        """Existing scales keep their position and values."""
        result = sync_catalog(small_catalog, patterns)
        assert result.catalog.scale_types[: len(small_catalog)] == small_catalog.scale_types

    def test_idempotent(self, small_catalog: Catalog, patterns: list[tuple[int, ...]]) -> None:
        """Syncing a synced catalog adds nothing."""
        once = sync_catalog(small_catalog, patterns).catalog
        twice = sync_catalog(once, patterns)
        assert twice.added == ()
        assert twice.catalog == once

    def test_every_pattern_present(
        self, catalog: Catalog, patterns: list[tuple[int, ...]]
    ) -> None:
        """After a sync every generated interval set is in the catalog."""
        synced = sync_catalog(catalog, patterns).catalog
        for pattern in patterns:
            assert synced.find_by_intervals(pattern_to_intervals(pattern)) is not None

    def test_duplicate_patterns_added_once(self, small_catalog: Catalog) -> None:
        """Repeated input patterns do not produce duplicate ids."""
        result = sync_catalog(small_catalog, [(2,) * 6, (2,) * 6])
        assert [s.id for s in result.added] == ["scale-0-2-4-6-8-10"]

    def test_placeholder_id(self) -> None:
        assert placeholder_id((0, 2, 4)) == "scale-0-2-4"

    def test_uncovered_scales(self, catalog: Catalog, patterns: list[tuple[int, ...]]) -> None:
        """Scales with wider steps fall outside the generated set."""
        uncovered = {s.id for s in uncovered_scales(catalog, patterns)}
        assert "harmonic-minor" in uncovered
        assert "blues" in uncovered
        assert "major-pentatonic" in uncovered
        assert "major" not in uncovered
        assert "locrian" not in uncovered
        assert "melodic-minor" not in uncovered


class TestScaleNaming:
    """Tests for slugs and placeholder renaming."""

    @pytest.mark.parametrize(
        ("name", "slug"),
        [
            ("Major", "major"),
            ("Harmonic Minor", "harmonic-minor"),
            ("Octatonic (Whole-Half)", "octatonic-whole-half"),
            ("Dorian #4", "dorian-sharp4"),
            ("Lydian #2", "lydian-sharp2"),
            ("Super Locrian bb7", "super-locrian-double-flat7"),
            ("Locrian ♮2", "locrian-natural2"),
            ("Mixolydian b6", "mixolydian-flat6"),
            ("Locrian Natural 6", "locrian-natural-6"),
        ],
    )
    def test_scale_slug(self, name: str, slug: str) -> None:
        assert scale_slug(name) == slug

    def test_apply_names(self, small_catalog: Catalog, patterns: list[tuple[int, ...]]) -> None:
        """Known placeholders get their real name, id and family."""
        synced = sync_catalog(small_catalog, patterns).catalog
        result = apply_scale_names(synced)

        assert len(result.renamed) == len(KNOWN_SCALE_NAMES)
        lydian_augmented = result.catalog.require("lydian-augmented")
        assert lydian_augmented.name == "Lydian Augmented"
        assert lydian_augmented.family == "melodic-minor-modes"
        assert lydian_augmented.alternative_names == ("Lydian #5",)
        assert ("scale-0-2-4-6-8-9-11", lydian_augmented) in result.renamed

        # Position is kept
        index = [s.id for s in synced].index("scale-0-2-4-6-8-9-11")
        assert result.catalog.scale_types[index].id == "lydian-augmented"

    def test_unknown_placeholders_stay(
        self, small_catalog: Catalog, patterns: list[tuple[int, ...]]
    ) -> None:
        """Placeholders without a known name are left alone."""
        synced = sync_catalog(small_catalog, patterns).catalog
        result = apply_scale_names(synced)
        assert "scale-0-2-4-6-8-10" in result.catalog

    def test_only_placeholder_family_renamed(self) -> None:
        """Curated scales are never renamed."""
        catalog = Catalog(
            [ScaleType("my-lydian-5", "My Lydian #5", "custom", (0, 2, 4, 6, 8, 9, 11))]
        )
        result = apply_scale_names(catalog)
        assert result.renamed == ()
        assert result.catalog == catalog

    def test_taken_id_skipped(self) -> None:
        """A rename onto an existing id is skipped."""
        catalog = Catalog(
            [
                ScaleType(
                    "lydian-augmented", "Lydian Augmented", "other", (0, 2, 4, 6, 8, 9, 11)
                ),
                ScaleType(
                    "scale-0-2-4-6-8-9-11",
                    "Unknown Scale 1",
                    PLACEHOLDER_FAMILY,
                    (0, 2, 4, 6, 8, 9, 11),
                ),
            ]
        )
        result = apply_scale_names(catalog)
        assert result.renamed == ()
        assert "scale-0-2-4-6-8-9-11" in result.catalog


class TestAddModes:
    """Tests for adding a parent scale's modes."""

    def test_adds_missing_modes(self, small_catalog: Catalog) -> None:
        """All six harmonic minor modes are added with parent links."""
        result = add_modes(small_catalog, "harmonic-minor", HARMONIC_MINOR_MODES)

        assert [s.id for s in result.added] == [
            "locrian-natural-6",
            "ionian-augmented",
            "dorian-sharp4",
            "phrygian-dominant",
            "lydian-sharp2",
            "super-locrian-double-flat7",
        ]
        assert result.existing == ()

        locrian_6 = result.added[0]
        assert locrian_6.intervals == (0, 1, 3, 5, 6, 9, 10)
        assert locrian_6.mode_of == ModeOf("harmonic-minor", 2)
        assert result.added[3].intervals == (0, 1, 4, 5, 7, 8, 10)

    def test_resolve_after_adding(self, small_catalog: Catalog) -> None:
        """Resolving fills in the parent's inversions."""
        result = add_modes(small_catalog, "harmonic-minor", HARMONIC_MINOR_MODES)
        resolved = resolve_modal_relationships(result.catalog)
        harmonic = resolved.require("harmonic-minor")
        assert harmonic.inversion(2) == "locrian-natural-6"
        assert harmonic.inversion(7) == "super-locrian-double-flat7"
        assert resolved.require("phrygian-dominant").mode_of == ModeOf("harmonic-minor", 5)

    def test_existing_modes_reported(self, catalog: Catalog) -> None:
        """The library already has every harmonic minor mode."""
        result = add_modes(catalog, "harmonic-minor", HARMONIC_MINOR_MODES)
        assert result.added == ()
        assert len(result.existing) == 6
        assert result.existing[3][1].id == "phrygian-dominant"
        assert result.catalog == catalog

    def test_unknown_parent(self, small_catalog: Catalog) -> None:
        with pytest.raises(CatalogLookupError):
            add_modes(small_catalog, "blues", HARMONIC_MINOR_MODES)


class TestCatalogCLI:
    """Tests for the catalog maintenance commands."""

    @pytest.fixture
    def library_copy(self, library_path: Path, temp_dir: Path) -> Path:
        path = temp_dir / "scales.json"
        shutil.copy(library_path, path)
        return path

    def _load(self, path: Path) -> Catalog:
        return document_to_catalog(load_document(path))

    def test_generate(self, temp_dir: Path) -> None:
        """generate writes the combinations document."""
        output = temp_dir / "combinations.json"
        assert main(["generate", "--output", str(output)]) == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["metadata"]["total_combinations"] == 21
        assert len(data["combinations"]) == 21

    def test_check_library(self, library_copy: Path) -> None:
        """The shipped library passes the check."""
        assert main(["check", "--catalog", str(library_copy)]) == 0

    def test_resolve_then_check(self, library_copy: Path, temp_dir: Path) -> None:
        """resolve writes annotations that check accepts."""
        output = temp_dir / "resolved.json"
        assert main(["resolve", "--catalog", str(library_copy), "--output", str(output)]) == 0

        resolved = self._load(output)
        assert resolved.require("dorian").mode_of == ModeOf("major", 2)
        # The input file is untouched when --output is given
        assert self._load(library_copy).require("dorian").mode_of is None

        assert main(["check", "--catalog", str(output)]) == 0

    def test_check_detects_stale_annotations(self, catalog: Catalog, temp_dir: Path) -> None:
        """Annotations that disagree with the resolver fail the check."""
        data = dump_catalog(catalog)
        data["scaleTypes"][0]["modeOf"] = {"id": "locrian", "step": 2}
        path = temp_dir / "stale.json"
        path.write_text(json.dumps(data), encoding="utf-8")

        assert main(["check", "--catalog", str(path)]) == 1

    def test_sync_in_place(self, library_copy: Path, patterns: list[tuple[int, ...]]) -> None:
        """sync rewrites the catalog with every generated pattern present."""
        assert main(["sync", "--catalog", str(library_copy)]) == 0
        synced = self._load(library_copy)
        assert len(synced) >= 37
        for pattern in patterns:
            assert synced.find_by_intervals(pattern_to_intervals(pattern)) is not None

    def test_sync_and_name(self, small_catalog: Catalog, temp_dir: Path) -> None:
        """name gives synced placeholders their real names."""
        path = save_catalog(small_catalog, temp_dir / "small.json")
        assert main(["sync", "--catalog", str(path)]) == 0
        assert "scale-0-2-4-6-8-9-11" in self._load(path)

        assert main(["name", "--catalog", str(path)]) == 0
        named = self._load(path)
        assert "lydian-augmented" in named
        assert "scale-0-2-4-6-8-9-11" not in named

    def test_add_modes(self, small_catalog: Catalog, temp_dir: Path) -> None:
        """add-modes appends the modes and resolves the result."""
        path = save_catalog(small_catalog, temp_dir / "small.json")
        assert main(["add-modes", "--catalog", str(path)]) == 0

        extended = self._load(path)
        assert len(extended) == len(small_catalog) + 6
        assert extended.require("harmonic-minor").inversion(5) == "phrygian-dominant"

    def test_add_modes_unknown_table(self, library_copy: Path) -> None:
        """Only parents with a mode table are accepted."""
        assert main(["add-modes", "--catalog", str(library_copy), "--parent", "blues"]) == 1

    def test_missing_catalog(self, temp_dir: Path) -> None:
        """A missing file is reported, not raised."""
        assert main(["check", "--catalog", str(temp_dir / "missing.json")]) == 1

    def test_invalid_catalog(self, temp_dir: Path) -> None:
        """A malformed file is reported, not raised."""
        path = temp_dir / "bad.json"
        path.write_text('{"scaleTypes": [{"id": "x"}]}', encoding="utf-8")
        assert main(["check", "--catalog", str(path)]) == 1
