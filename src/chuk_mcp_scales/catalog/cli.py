#!/usr/bin/env python3
"""
Catalog maintenance CLI.

Offline tools for building and checking a scale catalog file:

    chuk-mcp-scales-catalog generate --output combinations.json
    chuk-mcp-scales-catalog sync --catalog scales.json
    chuk-mcp-scales-catalog name --catalog scales.json
    chuk-mcp-scales-catalog add-modes --catalog scales.json --parent harmonic-minor
    chuk-mcp-scales-catalog resolve --catalog scales.json
    chuk-mcp-scales-catalog check --catalog scales.json

Commands that change the catalog rewrite it in place unless ``--output``
is given.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from chuk_mcp_scales.catalog.catalog import Catalog
from chuk_mcp_scales.catalog.generator import (
    HARMONIC_MINOR_MODES,
    add_modes,
    apply_scale_names,
    combinations_document,
    generate_step_patterns,
    sync_catalog,
    uncovered_scales,
)
from chuk_mcp_scales.catalog.loader import document_to_catalog, load_document, save_catalog
from chuk_mcp_scales.catalog.resolver import resolve_modal_relationships, summarize_relationships
from chuk_mcp_scales.constants import OCTAVE_SEMITONES
from chuk_mcp_scales.exceptions import ScaleError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEFAULT_CATALOG = Path(__file__).parent / "library" / "scales.json"

# Mode tables add-modes knows about, by parent id
KNOWN_MODE_TABLES = {
    "harmonic-minor": HARMONIC_MINOR_MODES,
}


def _load(path: Path) -> Catalog:
    catalog = document_to_catalog(load_document(path))
    logger.info(f"Loaded {len(catalog)} existing scales from {path}")
    return catalog


def _is_annotated(catalog: Catalog) -> bool:
    return any(scale_type.mode_of or scale_type.inversions for scale_type in catalog)


def _output(args: argparse.Namespace) -> Path:
    return args.output or args.catalog


def cmd_generate(args: argparse.Namespace) -> int:
    patterns = generate_step_patterns(args.target)
    document = combinations_document(patterns, args.target)

    logger.info(f"Generated {len(patterns)} valid combinations")
    for index, pattern in enumerate(patterns[:5], start=1):
        logger.info(f"{index}. {list(pattern)} = {sum(pattern)}")

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
        logger.info(f"Results written to: {args.output}")
    else:
        print(json.dumps(document, indent=2))
    return 0


def cmd_sync(args: argparse.Namespace) -> int:
    catalog = _load(args.catalog)
    patterns = generate_step_patterns(args.target)
    result = sync_catalog(catalog, patterns)

    logger.info(f"Found {len(result.added)} scales not in catalog")
    if result.added:
        save_catalog(result.catalog, _output(args))
    logger.info(f"Total scales in catalog: {len(result.catalog)}")
    return 0


def cmd_name(args: argparse.Namespace) -> int:
    catalog = _load(args.catalog)
    result = apply_scale_names(catalog)

    logger.info(f"Updated {len(result.renamed)} scales")
    if result.renamed:
        renamed = result.catalog
        if _is_annotated(catalog):
            renamed = resolve_modal_relationships(renamed)
        save_catalog(renamed, _output(args))
    return 0


def cmd_add_modes(args: argparse.Namespace) -> int:
    modes = KNOWN_MODE_TABLES.get(args.parent)
    if modes is None:
        logger.error(f"No mode table for '{args.parent}'. Known: {', '.join(KNOWN_MODE_TABLES)}")
        return 1

    catalog = _load(args.catalog)
    result = add_modes(catalog, args.parent, modes)

    logger.info(f"Added {len(result.added)} new scales")
    if result.added:
        save_catalog(resolve_modal_relationships(result.catalog), _output(args))
    return 0


def cmd_resolve(args: argparse.Namespace) -> int:
    catalog = _load(args.catalog)
    resolved = resolve_modal_relationships(catalog)

    for line in summarize_relationships(resolved).describe():
        logger.info(line)

    save_catalog(resolved, _output(args))
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    catalog = _load(args.catalog)
    patterns = generate_step_patterns(args.target)

    missing = sync_catalog(catalog, patterns).added
    uncovered = uncovered_scales(catalog, patterns)
    resolved = resolve_modal_relationships(catalog)
    stale = _is_annotated(catalog) and resolved != catalog

    logger.info(f"{len(catalog)} scale types, {len(catalog.families())} families")
    logger.info(f"{len(missing)} generated interval sets missing from the catalog")
    logger.info(f"{len(uncovered)} catalog scales outside the generated patterns")
    for scale_type in uncovered:
        logger.debug(f"  {scale_type.id}: steps {list(scale_type.steps)}")

    if stale:
        logger.warning("Modal annotations are out of date - run 'resolve'")
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CHUK Scales catalog tools")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_command(name: str, handler, help: str, catalog: bool = True) -> argparse.ArgumentParser:
        subparser = subparsers.add_parser(name, help=help)
        if catalog:
            subparser.add_argument(
                "--catalog",
                type=Path,
                default=DEFAULT_CATALOG,
                help="Catalog file to read (default: built-in library)",
            )
        subparser.add_argument(
            "--output",
            type=Path,
            default=None,
            help="Write here instead of rewriting the catalog in place",
        )
        subparser.add_argument(
            "--target",
            type=int,
            default=OCTAVE_SEMITONES,
            help="Step pattern total (default: 12)",
        )
        subparser.set_defaults(handler=handler)
        return subparser

    add_command("generate", cmd_generate, "Enumerate 1/2 step patterns", catalog=False)
    add_command("sync", cmd_sync, "Add placeholder scales for missing patterns")
    add_command("name", cmd_name, "Rename placeholder scales with known names")
    add_modes_parser = add_command("add-modes", cmd_add_modes, "Add the modes of a parent scale")
    add_modes_parser.add_argument(
        "--parent",
        default="harmonic-minor",
        help="Parent scale id (default: harmonic-minor)",
    )
    add_command("resolve", cmd_resolve, "Recompute modal relationships")
    add_command("check", cmd_check, "Report catalog coverage and stale annotations")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the catalog tools."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        return args.handler(args)
    except (ScaleError, OSError) as e:
        logger.error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
