"""
Relative scales - catalog scales one or two semitone alterations away.

A first-degree relative moves one non-root degree up or down by a half
step; a second-degree relative moves two. Matching is positional: the
altered interval list must equal a catalog scale's intervals exactly,
because degree identity matters (raising the 7th of natural minor gives
harmonic minor, not some rotation of it).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from chuk_mcp_scales.catalog.catalog import Catalog
from chuk_mcp_scales.constants import Direction
from chuk_mcp_scales.core.scale import ScaleType

# Bounds for an altered interval
MIN_ALTERED_INTERVAL = 1
MAX_ALTERED_INTERVAL = 11


@dataclass(frozen=True)
class Modification:
    """One degree moved by a semitone."""

    degree: int  # 1-based
    original_interval: int
    new_interval: int
    direction: Direction


@dataclass(frozen=True)
class RelativeScale:
    """A catalog scale plus the alterations that reach it."""

    scale: ScaleType
    modifications: tuple[Modification, ...]

    def describe(self, notes_from: Sequence[str], notes_to: Sequence[str]) -> list[str]:
        """Alterations as "F -> F#" strings using the spelled notes of both scales."""
        return [
            f"{notes_from[m.degree - 1]} → {notes_to[m.degree - 1]}" for m in self.modifications
        ]


def _alter(intervals: tuple[int, ...], index: int, delta: int) -> tuple[int, ...] | None:
    """The intervals with one degree moved, or None if order would break."""
    value = intervals[index] + delta
    if not MIN_ALTERED_INTERVAL <= value <= MAX_ALTERED_INTERVAL:
        return None
    if value <= intervals[index - 1]:
        return None
    if index < len(intervals) - 1 and value >= intervals[index + 1]:
        return None
    return intervals[:index] + (value,) + intervals[index + 1 :]


def find_relative_scales(scale: ScaleType, catalog: Catalog) -> list[RelativeScale]:
    """
    Find the first-degree relatives of a scale.

    Each non-root degree is tried a half step up, then down. The first
    catalog scale with exactly the altered intervals (other than the
    scale itself) is a relative.

    Args:
        scale: Scale to start from
        catalog: Catalog to search

    Returns:
        Relatives in degree order, each with a single modification
    """
    relatives: list[RelativeScale] = []
    intervals = scale.intervals

    for index in range(1, len(intervals)):
        for delta, direction in ((1, Direction.UP), (-1, Direction.DOWN)):
            altered = _alter(intervals, index, delta)
            if altered is None:
                continue

            match = next(
                (
                    candidate
                    for candidate in catalog.find_all_by_intervals(altered)
                    if candidate.id != scale.id
                ),
                None,
            )
            if match is None:
                continue

            relatives.append(
                RelativeScale(
                    scale=match,
                    modifications=(
                        Modification(
                            degree=index + 1,
                            original_interval=intervals[index],
                            new_interval=altered[index],
                            direction=direction,
                        ),
                    ),
                )
            )

    return relatives


def find_all_differences(
    original_intervals: Sequence[int],
    new_intervals: Sequence[int],
) -> list[Modification]:
    """
    Every non-root degree where two interval lists differ.

    Only the common length is compared.
    """
    differences: list[Modification] = []
    for index in range(1, min(len(original_intervals), len(new_intervals))):
        original = original_intervals[index]
        new = new_intervals[index]
        if original != new:
            differences.append(
                Modification(
                    degree=index + 1,
                    original_interval=original,
                    new_interval=new,
                    direction=Direction.UP if new > original else Direction.DOWN,
                )
            )
    return differences


def find_second_degree_relatives(scale: ScaleType, catalog: Catalog) -> list[RelativeScale]:
    """
    Find scales two alterations away.

    These are the relatives of each first-degree relative, excluding the
    scale itself and its first-degree relatives, deduplicated by id.
    A candidate is only kept when it differs from the scale in exactly two
    degrees, counted directly, so a two-hop path that lands one degree
    away is dropped.

    Returns:
        Relatives in discovery order, each carrying both modifications
    """
    first_degree = find_relative_scales(scale, catalog)

    excluded_ids = {scale.id} | {relative.scale.id for relative in first_degree}
    excluded_intervals = {scale.intervals} | {relative.scale.intervals for relative in first_degree}

    found: dict[str, RelativeScale] = {}
    for first in first_degree:
        for second in find_relative_scales(first.scale, catalog):
            candidate = second.scale
            if candidate.id in excluded_ids or candidate.intervals in excluded_intervals:
                continue
            if candidate.id in found:
                continue

            modifications = find_all_differences(scale.intervals, candidate.intervals)
            if len(modifications) == 2:
                found[candidate.id] = RelativeScale(
                    scale=candidate, modifications=tuple(modifications)
                )

    return list(found.values())
