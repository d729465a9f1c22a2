"""
Combinatorial generator and catalog maintenance.

The generator enumerates every step pattern built from half steps (1) and
whole steps (2) that fills an octave without two half steps in a row.
The maintenance helpers fold those patterns into a catalog and give the
resulting placeholders proper names:

    patterns = generate_step_patterns()
    result = sync_catalog(catalog, patterns)      # add missing interval sets
    named = apply_scale_names(result.catalog)     # rename known placeholders
    extended = add_modes(named.catalog, "harmonic-minor", HARMONIC_MINOR_MODES)
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Any

from chuk_mcp_scales.catalog.catalog import Catalog
from chuk_mcp_scales.constants import OCTAVE_SEMITONES
from chuk_mcp_scales.core.scale import ModeOf, ScaleType, rotate_steps, steps_to_intervals

logger = logging.getLogger(__name__)

HALF_STEP = 1
WHOLE_STEP = 2

PLACEHOLDER_FAMILY = "unknown"
PLACEHOLDER_NAME = "Unknown Scale {number}"

GENERATION_RULES: tuple[str, ...] = (
    "No two or more 1's in a row",
    "Total sum equals exactly {target}",
)


def generate_step_patterns(target: int = OCTAVE_SEMITONES) -> list[tuple[int, ...]]:
    """
    Enumerate step patterns of 1s and 2s summing to ``target``.

    No two 1-steps may be adjacent. Patterns come out in depth-first
    order, whole step tried before half step, so the all-whole-step
    pattern is first. Uses an explicit stack rather than recursion.

    Args:
        target: Total number of semitones (12 for an octave)

    Returns:
        Every valid pattern, 21 for an octave
    """
    results: list[tuple[int, ...]] = []
    # (pattern so far, running sum, last step was a half step)
    stack: list[tuple[tuple[int, ...], int, bool]] = [((), 0, False)]

    while stack:
        current, total, last_was_half = stack.pop()
        if total == target:
            results.append(current)
            continue
        if total > target:
            continue
        # Pushed in reverse so the whole-step branch is explored first
        if not last_was_half:
            stack.append(((*current, HALF_STEP), total + HALF_STEP, True))
        stack.append(((*current, WHOLE_STEP), total + WHOLE_STEP, False))

    return results


def pattern_to_intervals(steps: Sequence[int]) -> tuple[int, ...]:
    """Intervals of a step pattern (the closing step back to the octave is dropped)."""
    return steps_to_intervals(steps)


def placeholder_id(intervals: Sequence[int]) -> str:
    """Stable id for an unnamed scale: ``scale-0-2-4-...``."""
    return "scale-" + "-".join(str(interval) for interval in intervals)


def combinations_document(patterns: Sequence[Sequence[int]], target: int) -> dict[str, Any]:
    """The JSON document written by the ``generate`` command."""
    return {
        "metadata": {
            "target_sum": target,
            "rules": [rule.format(target=target) for rule in GENERATION_RULES],
            "total_combinations": len(patterns),
            "generated_at": datetime.now(UTC).isoformat(),
        },
        "combinations": [list(pattern) for pattern in patterns],
    }


@dataclass(frozen=True)
class SyncResult:
    """Outcome of merging generated patterns into a catalog."""

    catalog: Catalog
    added: tuple[ScaleType, ...]


def sync_catalog(catalog: Catalog, patterns: Iterable[Sequence[int]]) -> SyncResult:
    """
    Append a placeholder scale for every generated pattern not in the catalog.

    Matching is by exact intervals. Placeholders are numbered in the order
    they are added: "Unknown Scale 1", "Unknown Scale 2", ...
    """
    added: list[ScaleType] = []
    seen: set[tuple[int, ...]] = set()

    for steps in patterns:
        intervals = pattern_to_intervals(steps)
        if intervals in seen or catalog.find_by_intervals(intervals) is not None:
            continue
        seen.add(intervals)
        scale_type = ScaleType(
            id=placeholder_id(intervals),
            name=PLACEHOLDER_NAME.format(number=len(added) + 1),
            family=PLACEHOLDER_FAMILY,
            intervals=intervals,
        )
        added.append(scale_type)
        logger.info(f"  + Added: {scale_type.name} steps={list(steps)} intervals={list(intervals)}")

    if not added:
        logger.info("All generated scales are already in the catalog")

    return SyncResult(catalog=catalog.with_scale_types(added), added=tuple(added))


def uncovered_scales(catalog: Catalog, patterns: Iterable[Sequence[int]]) -> list[ScaleType]:
    """
    Catalog scales whose step pattern is no rotation of any generated pattern.

    Scales with wider steps (harmonic minor, pentatonics, blues) always
    show up here; the report is informational.
    """
    rotations: set[tuple[int, ...]] = set()
    for steps in patterns:
        for rotation in range(len(steps)):
            rotations.add(rotate_steps(steps, rotation))
    return [scale_type for scale_type in catalog if scale_type.steps not in rotations]


def scale_slug(name: str) -> str:
    """
    Catalog id for a scale name.

    "Octatonic (Whole-Half)" -> "octatonic-whole-half",
    "Dorian #4" -> "dorian-sharp4", "Super Locrian bb7" -> "super-locrian-double-flat7".
    """
    slug = name.lower()
    slug = re.sub(r"[()]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = slug.replace("#", "sharp").replace("♮", "natural").replace("♭", "flat")
    slug = slug.replace("bb", "double-flat")
    return re.sub(r"b(\d)", r"flat\1", slug)


@dataclass(frozen=True)
class ScaleName:
    """Name, alternative names and family to give a known interval pattern."""

    name: str
    family: str
    alternative_names: tuple[str, ...] = ()


KNOWN_SCALE_NAMES: dict[tuple[int, ...], ScaleName] = {
    (0, 2, 4, 6, 8, 9, 11): ScaleName(
        "Lydian Augmented", "melodic-minor-modes", ("Lydian #5",)
    ),
    (0, 2, 4, 6, 7, 9, 10): ScaleName(
        "Lydian Dominant",
        "melodic-minor-modes",
        ("Acoustic Scale", "Overtone Scale", "Bartók Scale", "Lydian b7", "Mixolydian #4"),
    ),
    (0, 2, 4, 5, 7, 8, 10): ScaleName(
        "Aeolian Dominant",
        "melodic-minor-modes",
        ("Mixolydian b6", "Hindu Scale", "Melodic Major", "Mixolydian b13"),
    ),
    (0, 2, 3, 5, 6, 8, 10): ScaleName(
        "Locrian Natural 2", "melodic-minor-modes", ("Locrian ♮2", "Half-Diminished")
    ),
    (0, 2, 3, 5, 6, 8, 9, 11): ScaleName(
        "Octatonic (Whole-Half)", "symmetrical", ("Diminished Scale", "Whole-Half Diminished")
    ),
    (0, 1, 3, 5, 7, 9, 11): ScaleName("Neapolitan Major", "other"),
    (0, 1, 3, 5, 7, 9, 10): ScaleName(
        "Phrygian Natural 6", "other", ("Phrygian ♮6", "Dorian b2")
    ),
    (0, 1, 3, 5, 6, 8, 9, 11): ScaleName(
        "Half-Diminished Bebop", "bebop", ("Bebop Half-Diminished",)
    ),
    (0, 1, 3, 4, 6, 8, 10): ScaleName(
        "Superlocrian",
        "melodic-minor-modes",
        ("Altered Scale", "Diminished Whole Tone", "Super Locrian", "Locrian b4"),
    ),
    (0, 1, 3, 4, 6, 8, 9, 11): ScaleName(
        "Van der Horst Octatonic",
        "symmetrical",
        ("Messiaen Mode 6 Rotation 3", "Kaptyllic"),
    ),
    (0, 1, 3, 4, 6, 7, 9, 11): ScaleName("Tcherepnin Octatonic Mode I", "symmetrical"),
}


@dataclass(frozen=True)
class NamingResult:
    """Outcome of renaming placeholder scales."""

    catalog: Catalog
    renamed: tuple[tuple[str, ScaleType], ...]  # (old id, renamed scale)


def apply_scale_names(
    catalog: Catalog,
    names: Mapping[tuple[int, ...], ScaleName] = KNOWN_SCALE_NAMES,
) -> NamingResult:
    """
    Give placeholder scales their real names by interval pattern.

    Only scales in the placeholder family are touched. The new id is the
    slug of the new name; a rename whose id is already taken is skipped.
    Ids change, so modal annotations must be resolved again afterwards.
    """
    taken = {scale_type.id for scale_type in catalog}
    renamed: list[tuple[str, ScaleType]] = []
    scale_types: list[ScaleType] = []

    for scale_type in catalog:
        info = names.get(scale_type.intervals)
        if info is None or scale_type.family != PLACEHOLDER_FAMILY:
            scale_types.append(scale_type)
            continue

        new_id = scale_slug(info.name)
        if new_id != scale_type.id and new_id in taken:
            logger.warning(f"Skipping rename of {scale_type.id}: id '{new_id}' already exists")
            scale_types.append(scale_type)
            continue

        updated = replace(
            scale_type,
            id=new_id,
            name=info.name,
            family=info.family,
            alternative_names=info.alternative_names or scale_type.alternative_names,
        )
        taken.discard(scale_type.id)
        taken.add(new_id)
        renamed.append((scale_type.id, updated))
        scale_types.append(updated)
        logger.info(f"Renamed {scale_type.name} -> {info.name} ({new_id})")

    return NamingResult(catalog=Catalog(scale_types), renamed=tuple(renamed))


@dataclass(frozen=True)
class ModeSpec:
    """A named rotation of a parent scale (rotation 1 starts on degree 2)."""

    rotation: int
    name: str
    family: str
    alternative_names: tuple[str, ...] = ()


HARMONIC_MINOR_MODES: tuple[ModeSpec, ...] = (
    ModeSpec(1, "Locrian Natural 6", "harmonic-minor-modes", ("Locrian #6", "Locrian 13")),
    ModeSpec(2, "Ionian Augmented", "harmonic-minor-modes", ("Ionian #5",)),
    ModeSpec(
        3,
        "Dorian #4",
        "harmonic-minor-modes",
        ("Ukrainian Dorian", "Romanian Minor", "Altered Dorian"),
    ),
    ModeSpec(
        4,
        "Phrygian Dominant",
        "harmonic-minor-modes",
        ("Spanish Phrygian", "Freygish", "Hijaz", "Altered Phrygian"),
    ),
    ModeSpec(5, "Lydian #2", "harmonic-minor-modes", ("Lydian #9",)),
    ModeSpec(6, "Super Locrian bb7", "harmonic-minor-modes", ("Ultralocrian", "Altered Diminished")),
)


@dataclass(frozen=True)
class AddModesResult:
    """Outcome of adding a parent scale's modes."""

    catalog: Catalog
    added: tuple[ScaleType, ...]
    existing: tuple[tuple[ModeSpec, ScaleType], ...]  # modes already present


def add_modes(catalog: Catalog, parent_id: str, modes: Sequence[ModeSpec]) -> AddModesResult:
    """
    Add the named rotations of a parent scale that the catalog lacks.

    New scales carry a ``mode_of`` link to the parent; run the resolver
    afterwards to fill in the inversions on both sides.

    Raises:
        CatalogLookupError: if the parent is not in the catalog
    """
    parent = catalog.require(parent_id)
    added: list[ScaleType] = []
    existing: list[tuple[ModeSpec, ScaleType]] = []

    for spec in modes:
        intervals = parent.rotated_intervals(spec.rotation)
        found = catalog.find_by_intervals(intervals)
        if found is not None:
            logger.info(f"Mode {spec.rotation + 1} of {parent.id} already exists as {found.name}")
            existing.append((spec, found))
            continue

        scale_type = ScaleType(
            id=scale_slug(spec.name),
            name=spec.name,
            family=spec.family,
            intervals=intervals,
            alternative_names=spec.alternative_names,
            mode_of=ModeOf(parent.id, spec.rotation + 1),
        )
        added.append(scale_type)
        logger.info(f"Adding {spec.name} (mode {spec.rotation + 1} of {parent.id})")

    return AddModesResult(
        catalog=catalog.with_scale_types(added),
        added=tuple(added),
        existing=tuple(existing),
    )
