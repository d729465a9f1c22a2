"""
Modal relationship resolver - annotates which catalog scales are modes of which.

Two scales are modes of each other when one's step pattern is a cyclic
rotation of the other's. For every scale A and every rotation k the
resolver takes the first other catalog scale whose intervals equal the
rotation and records the link on both sides:

    A.inversions[k + 1] = B.id
    B.mode_of = (A.id, k + 1)    # only if B has no parent yet

Catalog order decides parents: the first scale to claim a mode wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chuk_mcp_scales.catalog.catalog import Catalog
from chuk_mcp_scales.core.scale import ModeOf, ScaleType, rotate_steps, steps_to_intervals

logger = logging.getLogger(__name__)


def resolve_modal_relationships(catalog: Catalog) -> Catalog:
    """
    Recompute every scale's ``mode_of`` and ``inversions``.

    Existing annotations are discarded first, so resolving an already
    resolved catalog gives an equal catalog.

    Args:
        catalog: Catalog to annotate

    Returns:
        A new catalog with the modal graph filled in, same order
    """
    mode_of: dict[str, ModeOf] = {}
    inversions: dict[str, dict[int, str]] = {scale_type.id: {} for scale_type in catalog}

    for scale_type in catalog:
        for rotation in range(1, len(scale_type.steps)):
            rotated = steps_to_intervals(rotate_steps(scale_type.steps, rotation))
            step = rotation + 1
            # One mode per step; later scales with the same intervals are skipped
            mode = next(
                (m for m in catalog.find_all_by_intervals(rotated) if m.id != scale_type.id),
                None,
            )
            if mode is None:
                continue
            inversions[scale_type.id][step] = mode.id
            if mode.id not in mode_of:
                mode_of[mode.id] = ModeOf(scale_type.id, step)

    resolved = Catalog(
        scale_type.with_relationships(mode_of.get(scale_type.id), inversions[scale_type.id])
        for scale_type in catalog
    )

    summary = summarize_relationships(resolved)
    logger.debug(
        f"Resolved modes: {len(summary.parents)} parents, {len(summary.modes)} modes, "
        f"{len(summary.independent)} independent"
    )
    return resolved


@dataclass(frozen=True)
class RelationshipSummary:
    """Shape of a resolved modal graph."""

    parents: tuple[ScaleType, ...]  # scales with at least one inversion
    modes: tuple[ScaleType, ...]  # scales with a parent link
    independent: tuple[ScaleType, ...]  # neither

    def describe(self) -> list[str]:
        """Human-readable lines for logs and the catalog CLI."""
        lines = [
            f"{len(self.parents)} scales have modes",
            f"{len(self.modes)} scales are modes of another scale",
            f"{len(self.independent)} scales have no modal relatives",
        ]
        for parent in self.parents:
            modes = ", ".join(f"{step}: {mode_id}" for step, mode_id in parent.inversions)
            lines.append(f"  {parent.id} -> {modes}")
        return lines


def summarize_relationships(catalog: Catalog) -> RelationshipSummary:
    """Group catalog scales by their role in the modal graph."""
    parents = tuple(scale_type for scale_type in catalog if scale_type.inversions)
    modes = tuple(scale_type for scale_type in catalog if scale_type.mode_of is not None)
    independent = tuple(
        scale_type
        for scale_type in catalog
        if not scale_type.inversions and scale_type.mode_of is None
    )
    return RelationshipSummary(parents=parents, modes=modes, independent=independent)
