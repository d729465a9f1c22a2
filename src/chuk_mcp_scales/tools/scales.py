"""
Scale tools - MCP tools for browsing the scale catalog.

Tools for listing scales, describing a scale in a key, listing its
degree triads and finding its relative scales.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_scales.analysis.relatives import find_relative_scales, find_second_degree_relatives
from chuk_mcp_scales.catalog.loader import CatalogLoader
from chuk_mcp_scales.core.scale import Key
from chuk_mcp_scales.core.triad import calculate_triads, display_extensions
from chuk_mcp_scales.exceptions import CatalogLookupError, InvalidNoteError
from chuk_mcp_scales.tools.common import (
    lookup_error_message,
    resolve_key,
    scale_details,
    scale_summary,
)

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

    from chuk_mcp_scales.analysis.relatives import RelativeScale

logger = logging.getLogger(__name__)


def _relative_to_dict(key: Key, relative: RelativeScale, prefer_sharps: bool) -> dict[str, Any]:
    notes = key.notes(prefer_sharps)
    relative_notes = relative.scale.notes(key.root.value, prefer_sharps)
    return {
        **scale_summary(relative.scale),
        "notes": relative_notes,
        "modifications": [
            {
                "degree": m.degree,
                "direction": m.direction.value,
                "original_interval": m.original_interval,
                "new_interval": m.new_interval,
            }
            for m in relative.modifications
        ],
        "changes": relative.describe(notes, relative_notes),
    }


def register_scale_tools(mcp: ChukMCPServer, loader: CatalogLoader) -> dict[str, Any]:
    """
    Register scale catalog tools with the MCP server.

    Args:
        mcp: The MCP server instance
        loader: The catalog loader

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def scales_list_scales(family: str | None = None) -> str:
        """
        List the scales in the catalog.

        Args:
            family: Optional family filter (e.g. "major-modes", "pentatonic")

        Returns:
            JSON string with scale summaries and the known families

        Example:
            scales_list_scales(family="harmonic-minor-modes")
        """
        try:
            catalog = loader.load()
            scale_types = catalog.in_family(family) if family else list(catalog)

            return json.dumps(
                {
                    "status": "success",
                    "scales": [scale_summary(scale_type) for scale_type in scale_types],
                    "families": catalog.families(),
                    "count": len(scale_types),
                }
            )
        except Exception as e:
            logger.exception("Failed to list scales")
            return json.dumps({"status": "error", "message": str(e)})

    tools["scales_list_scales"] = scales_list_scales

    @mcp.tool  # type: ignore[arg-type]
    async def scales_describe_scale(
        scale: str,
        root: str = "C",
        prefer_sharps: bool = True,
    ) -> str:
        """
        Describe a scale played from a root.

        Returns notes, steps, degree labels, characteristics and the
        scale's place in the modal graph.

        Args:
            scale: Scale id or name (e.g. "dorian", "Harmonic Minor")
            root: Root note (e.g. "D", "Eb", "F#")
            prefer_sharps: Spell notes with sharps (True) or flats (False)

        Returns:
            JSON string with scale details

        Example:
            scales_describe_scale(scale="dorian", root="D")
        """
        try:
            catalog = loader.load()
            try:
                key = resolve_key(catalog, scale, root)
            except (CatalogLookupError, InvalidNoteError) as e:
                return json.dumps({"status": "error", "message": lookup_error_message(e)})

            return json.dumps(
                {"status": "success", "scale": scale_details(catalog, key, prefer_sharps)}
            )
        except Exception as e:
            logger.exception("Failed to describe scale")
            return json.dumps({"status": "error", "message": str(e)})

    tools["scales_describe_scale"] = scales_describe_scale

    @mcp.tool  # type: ignore[arg-type]
    async def scales_get_triads(
        scale: str,
        root: str = "C",
        include_extensions: bool = True,
        prefer_sharps: bool = True,
    ) -> str:
        """
        Get the triad built on every degree of a scale.

        Args:
            scale: Scale id or name
            root: Root note
            include_extensions: Also list the extensions (6, 7, maj7, #5, b5)
                the scale supports on each triad
            prefer_sharps: Spell notes with sharps (True) or flats (False)

        Returns:
            JSON string with one triad per degree

        Example:
            scales_get_triads(scale="major", root="C")
        """
        try:
            catalog = loader.load()
            try:
                key = resolve_key(catalog, scale, root)
            except (CatalogLookupError, InvalidNoteError) as e:
                return json.dumps({"status": "error", "message": lookup_error_message(e)})

            triads = calculate_triads(
                key.notes(prefer_sharps), key.scale.intervals, include_extensions
            )

            return json.dumps(
                {
                    "status": "success",
                    "key": key.name(prefer_sharps),
                    "triads": [
                        {
                            "degree": triad.degree + 1,
                            "roman_numeral": triad.roman_numeral,
                            "root": triad.root,
                            "quality": triad.quality.value,
                            "symbol": triad.symbol,
                            "name": triad.name,
                            "notes": list(triad.notes),
                            "extensions": display_extensions(triad),
                        }
                        for triad in triads
                    ],
                }
            )
        except Exception as e:
            logger.exception("Failed to get triads")
            return json.dumps({"status": "error", "message": str(e)})

    tools["scales_get_triads"] = scales_get_triads

    @mcp.tool  # type: ignore[arg-type]
    async def scales_find_relatives(
        scale: str,
        root: str = "C",
        include_second_degree: bool = False,
        prefer_sharps: bool = True,
    ) -> str:
        """
        Find scales one (or two) half-step alterations away.

        Raising the 7th of natural minor gives harmonic minor; raising
        its 6th as well gives melodic minor.

        Args:
            scale: Scale id or name
            root: Root note used to spell the changes
            include_second_degree: Also return scales two alterations away
            prefer_sharps: Spell notes with sharps (True) or flats (False)

        Returns:
            JSON string with relatives and the note changes that reach them

        Example:
            scales_find_relatives(scale="natural-minor", root="A")
        """
        try:
            catalog = loader.load()
            try:
                key = resolve_key(catalog, scale, root)
            except (CatalogLookupError, InvalidNoteError) as e:
                return json.dumps({"status": "error", "message": lookup_error_message(e)})

            relatives = find_relative_scales(key.scale, catalog)
            result: dict[str, Any] = {
                "status": "success",
                "key": key.name(prefer_sharps),
                "relatives": [
                    _relative_to_dict(key, relative, prefer_sharps) for relative in relatives
                ],
            }
            if include_second_degree:
                result["second_degree"] = [
                    _relative_to_dict(key, relative, prefer_sharps)
                    for relative in find_second_degree_relatives(key.scale, catalog)
                ]

            return json.dumps(result)
        except Exception as e:
            logger.exception("Failed to find relatives")
            return json.dumps({"status": "error", "message": str(e)})

    tools["scales_find_relatives"] = scales_find_relatives

    return tools
