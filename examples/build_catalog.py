#!/usr/bin/env python3
"""
Example: Build a scale catalog from scratch.

Starts from the seven diatonic modes, folds in every generated
half/whole step pattern, names the ones we know, adds the harmonic
minor modes and resolves the modal graph. The same steps are available
from the command line as ``chuk-mcp-scales-catalog``.

Usage:
    python examples/build_catalog.py
    # Creates: examples/output/built_catalog.yaml
"""

from pathlib import Path

from chuk_mcp_scales.catalog import (
    HARMONIC_MINOR_MODES,
    Catalog,
    add_modes,
    apply_scale_names,
    generate_step_patterns,
    resolve_modal_relationships,
    save_catalog,
    summarize_relationships,
    sync_catalog,
)
from chuk_mcp_scales.core import ScaleType


def seed_catalog() -> Catalog:
    major = ScaleType.from_steps("major", "Major", "major-modes", (2, 2, 1, 2, 2, 2, 1))
    harmonic = ScaleType.from_steps(
        "harmonic-minor", "Harmonic Minor", "harmonic-minor-modes", (2, 1, 2, 2, 1, 3, 1)
    )
    return Catalog([major, harmonic])


def main() -> None:
    """Build, name and resolve a catalog."""
    output_dir = Path(__file__).parent / "output"
    output_dir.mkdir(exist_ok=True)

    catalog = seed_catalog()
    print(f"Seed: {len(catalog)} scales")

    patterns = generate_step_patterns()
    synced = sync_catalog(catalog, patterns)
    print(f"Generated {len(patterns)} patterns, added {len(synced.added)} placeholders")

    named = apply_scale_names(synced.catalog)
    print(f"Named {len(named.renamed)} placeholders:")
    for old_id, scale_type in named.renamed:
        print(f"  {old_id} -> {scale_type.id}")

    extended = add_modes(named.catalog, "harmonic-minor", HARMONIC_MINOR_MODES)
    print(f"Added {len(extended.added)} harmonic minor modes")

    resolved = resolve_modal_relationships(extended.catalog)
    print()
    for line in summarize_relationships(resolved).describe():
        print(line)

    path = save_catalog(resolved, output_dir / "built_catalog.yaml")
    print(f"\nSaved {len(resolved)} scales to {path}")


if __name__ == "__main__":
    main()
