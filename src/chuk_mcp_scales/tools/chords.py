"""
Chord tools - MCP tools for chord parsing and chord-scale fit.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_scales.analysis.fit import (
    ScaleSelection,
    filter_chords,
    fits_in_scale,
)
from chuk_mcp_scales.catalog.loader import CatalogLoader
from chuk_mcp_scales.constants import ErrorMessages, FitMode
from chuk_mcp_scales.core.chord import Chord, parse_chords, supported_chord_types
from chuk_mcp_scales.core.pitch import note_name_of
from chuk_mcp_scales.exceptions import CatalogLookupError, InvalidNoteError
from chuk_mcp_scales.tools.common import lookup_error_message, parse_key_reference

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def chord_to_dict(chord: Chord) -> dict[str, Any]:
    return {
        "symbol": chord.display_name,
        "root": chord.root,
        "quality": chord.quality,
        "description": chord.chord_quality.description,
        "notes": [note_name_of(pc) for pc in sorted(chord.pitch_classes)],
        "pitch_classes": sorted(chord.pitch_classes),
        "bass": chord.bass,
    }


def register_chord_tools(mcp: ChukMCPServer, loader: CatalogLoader) -> dict[str, Any]:
    """
    Register chord tools with the MCP server.

    Args:
        mcp: The MCP server instance
        loader: The catalog loader

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def scales_parse_chords(chords: str) -> str:
        """
        Parse chord symbols.

        Bad symbols are reported in "errors"; the rest are still parsed.

        Args:
            chords: Chord symbols separated by spaces or commas
                (e.g. "C Am F G7", "Dm7/G, Bbmaj7")

        Returns:
            JSON string with parsed chords, errors and supported syntax

        Example:
            scales_parse_chords(chords="Cmaj7 Am7 Dm7 G7")
        """
        try:
            parsed = parse_chords(chords)

            return json.dumps(
                {
                    "status": "success",
                    "chords": [chord_to_dict(chord) for chord in parsed.chords],
                    "pitch_classes": sorted(parsed.pitch_classes),
                    "errors": list(parsed.errors),
                    "supported": supported_chord_types() if parsed.errors else [],
                }
            )
        except Exception as e:
            logger.exception("Failed to parse chords")
            return json.dumps({"status": "error", "message": str(e)})

    tools["scales_parse_chords"] = scales_parse_chords

    @mcp.tool  # type: ignore[arg-type]
    async def scales_check_chord_fit(
        chords: str,
        scales: list[str],
        mode: str = "any",
    ) -> str:
        """
        Check which chords fit inside one or more scales.

        A chord fits a scale when every chord note is a scale note.

        Args:
            chords: Chord symbols separated by spaces or commas
            scales: Keys as "<root> <scale>" (e.g. ["C major", "A harmonic-minor"])
            mode: "any" - chord fits at least one key;
                "all" - chord fits every key

        Returns:
            JSON string with per-chord, per-key fit and the filtered chords

        Example:
            scales_check_chord_fit(chords="Cmaj7 E7 Am", scales=["A harmonic-minor"])
        """
        try:
            catalog = loader.load()
            fit_mode = FitMode(mode)

            parsed = parse_chords(chords)
            if not parsed.chords:
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.NO_CHORDS,
                        "errors": list(parsed.errors),
                    }
                )

            try:
                keys = [parse_key_reference(catalog, reference) for reference in scales]
            except (CatalogLookupError, InvalidNoteError) as e:
                return json.dumps({"status": "error", "message": lookup_error_message(e)})

            selections = [ScaleSelection(scale=key.scale.id, root=key.root.value) for key in keys]
            fitting = {
                chord.display_name
                for chord in filter_chords(parsed.chords, selections, catalog, fit_mode)
            }

            return json.dumps(
                {
                    "status": "success",
                    "mode": fit_mode.value,
                    "keys": [key.name() for key in keys],
                    "results": [
                        {
                            "chord": chord.display_name,
                            "fits": chord.display_name in fitting,
                            "keys": {
                                key.name(): fits_in_scale(
                                    chord, key.root.value, key.scale.intervals
                                )
                                for key in keys
                            },
                        }
                        for chord in parsed.chords
                    ],
                    "fitting": [c.display_name for c in parsed.chords if c.display_name in fitting],
                    "errors": list(parsed.errors),
                }
            )
        except Exception as e:
            logger.exception("Failed to check chord fit")
            return json.dumps({"status": "error", "message": str(e)})

    tools["scales_check_chord_fit"] = scales_check_chord_fit

    return tools
