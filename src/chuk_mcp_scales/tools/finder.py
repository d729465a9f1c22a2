"""
Finder tools - MCP tools for searching scales by content.

Tools for finding scales that contain a set of notes, the notes of a
chord progression, or a set of triad qualities, and for finding the
chords several keys have in common.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_scales.analysis.common import common_chord_stats, find_common_chords
from chuk_mcp_scales.analysis.finder import (
    ChordTypeMatch,
    ScaleMatch,
    find_scales_by_chord_types,
    find_scales_containing,
    parse_chord_types,
    supported_chord_type_names,
)
from chuk_mcp_scales.catalog.loader import CatalogLoader
from chuk_mcp_scales.constants import ErrorMessages
from chuk_mcp_scales.core.chord import parse_chords
from chuk_mcp_scales.core.pitch import parse_notes
from chuk_mcp_scales.exceptions import CatalogLookupError, InvalidNoteError
from chuk_mcp_scales.tools.common import lookup_error_message, parse_key_reference

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20


def _scale_match_to_dict(match: ScaleMatch) -> dict[str, Any]:
    return {
        "name": match.name,
        "scale_id": match.scale_type.id,
        "root": match.root_name,
        "notes": list(match.scale_notes),
        "matched_notes": list(match.matched_notes),
        "extra_notes": match.extra_notes,
    }


def _chord_type_match_to_dict(match: ChordTypeMatch) -> dict[str, Any]:
    return {
        "name": match.name,
        "scale_id": match.scale_type.id,
        "root": match.root_name,
        "notes": list(match.scale_notes),
        "triads": {quality.value: count for quality, count in match.triad_counts.items()},
    }


def register_finder_tools(mcp: ChukMCPServer, loader: CatalogLoader) -> dict[str, Any]:
    """
    Register scale search tools with the MCP server.

    Args:
        mcp: The MCP server instance
        loader: The catalog loader

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def scales_find_by_notes(
        notes: str,
        limit: int = DEFAULT_LIMIT,
        prefer_sharps: bool = True,
    ) -> str:
        """
        Find scales containing all the given notes.

        Every catalog scale is tried on every root. Results with the
        fewest extra notes come first.

        Args:
            notes: Note names separated by spaces or commas (e.g. "C E G B")
            limit: Maximum number of results
            prefer_sharps: Spell notes with sharps (True) or flats (False)

        Returns:
            JSON string with ranked matches

        Example:
            scales_find_by_notes(notes="C Eb G Bb")
        """
        try:
            catalog = loader.load()
            parsed = parse_notes(notes)
            if not parsed.pitch_classes:
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.NO_NOTES,
                        "errors": list(parsed.errors),
                    }
                )

            matches = find_scales_containing(parsed.pitch_classes, catalog, prefer_sharps)

            return json.dumps(
                {
                    "status": "success",
                    "query": list(parsed.notes),
                    "matches": [_scale_match_to_dict(m) for m in matches[:limit]],
                    "total": len(matches),
                    "errors": list(parsed.errors),
                }
            )
        except Exception as e:
            logger.exception("Failed to find scales by notes")
            return json.dumps({"status": "error", "message": str(e)})

    tools["scales_find_by_notes"] = scales_find_by_notes

    @mcp.tool  # type: ignore[arg-type]
    async def scales_find_by_chords(
        chords: str,
        limit: int = DEFAULT_LIMIT,
        prefer_sharps: bool = True,
    ) -> str:
        """
        Find scales containing every note of a chord progression.

        Args:
            chords: Chord symbols separated by spaces or commas (e.g. "Am F C G")
            limit: Maximum number of results
            prefer_sharps: Spell notes with sharps (True) or flats (False)

        Returns:
            JSON string with ranked matches

        Example:
            scales_find_by_chords(chords="Am7 D7 Gmaj7")
        """
        try:
            catalog = loader.load()
            parsed = parse_chords(chords)
            if not parsed.chords:
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.NO_CHORDS,
                        "errors": list(parsed.errors),
                    }
                )

            matches = find_scales_containing(parsed.pitch_classes, catalog, prefer_sharps)

            return json.dumps(
                {
                    "status": "success",
                    "query": [chord.display_name for chord in parsed.chords],
                    "matches": [_scale_match_to_dict(m) for m in matches[:limit]],
                    "total": len(matches),
                    "errors": list(parsed.errors),
                }
            )
        except Exception as e:
            logger.exception("Failed to find scales by chords")
            return json.dumps({"status": "error", "message": str(e)})

    tools["scales_find_by_chords"] = scales_find_by_chords

    @mcp.tool  # type: ignore[arg-type]
    async def scales_find_by_chord_types(
        chord_types: str,
        limit: int = DEFAULT_LIMIT,
        prefer_sharps: bool = True,
    ) -> str:
        """
        Find scales whose degree triads include the given qualities.

        Results with the most distinct triad qualities come first.

        Args:
            chord_types: Triad qualities separated by spaces or commas
                (major/maj/M, minor/min/m, diminished/dim, augmented/aug, sus2, sus4)
            limit: Maximum number of results
            prefer_sharps: Spell notes with sharps (True) or flats (False)

        Returns:
            JSON string with ranked matches and per-quality triad counts

        Example:
            scales_find_by_chord_types(chord_types="aug dim")
        """
        try:
            catalog = loader.load()
            parsed = parse_chord_types(chord_types)
            if not parsed.types:
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.NO_CHORD_TYPES,
                        "errors": list(parsed.errors),
                        "supported": supported_chord_type_names(),
                    }
                )

            matches = find_scales_by_chord_types(parsed.types, catalog, prefer_sharps)

            return json.dumps(
                {
                    "status": "success",
                    "query": sorted(quality.value for quality in parsed.types),
                    "matches": [_chord_type_match_to_dict(m) for m in matches[:limit]],
                    "total": len(matches),
                    "errors": list(parsed.errors),
                }
            )
        except Exception as e:
            logger.exception("Failed to find scales by chord types")
            return json.dumps({"status": "error", "message": str(e)})

    tools["scales_find_by_chord_types"] = scales_find_by_chord_types

    @mcp.tool  # type: ignore[arg-type]
    async def scales_common_chords(scales: list[str], prefer_sharps: bool = True) -> str:
        """
        Find the triads shared by several keys.

        With one key, every triad of that key is returned.

        Args:
            scales: Keys as "<root> <scale>" (e.g. ["C major", "A natural-minor", "G major"])
            prefer_sharps: Spell notes with sharps (True) or flats (False)

        Returns:
            JSON string with shared chords ranked by how many keys contain them

        Example:
            scales_common_chords(scales=["C major", "G major"])
        """
        try:
            catalog = loader.load()
            try:
                keys = [parse_key_reference(catalog, reference) for reference in scales]
            except (CatalogLookupError, InvalidNoteError) as e:
                return json.dumps({"status": "error", "message": lookup_error_message(e)})

            chords = find_common_chords(keys, prefer_sharps)
            stats = common_chord_stats(chords, len(keys))

            return json.dumps(
                {
                    "status": "success",
                    "keys": [key.name(prefer_sharps) for key in keys],
                    "chords": [
                        {
                            "symbol": chord.symbol,
                            "root": chord.root,
                            "quality": chord.quality.value,
                            "count": chord.count,
                            "keys": list(chord.scale_names),
                        }
                        for chord in chords
                    ],
                    "stats": {
                        "total": stats.total,
                        "universal": stats.universal,
                        "shared": stats.shared,
                        "unique": stats.unique,
                    },
                }
            )
        except Exception as e:
            logger.exception("Failed to find common chords")
            return json.dumps({"status": "error", "message": str(e)})

    tools["scales_common_chords"] = scales_common_chords

    return tools
