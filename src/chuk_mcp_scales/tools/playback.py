"""
Playback tools - MCP tools for MIDI export.

Tools for rendering a scale walk-through to a MIDI file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from chuk_mcp_scales.catalog.loader import CatalogLoader
from chuk_mcp_scales.constants import ScalePattern, SuccessMessages
from chuk_mcp_scales.exceptions import CatalogLookupError, InvalidNoteError
from chuk_mcp_scales.playback.midi import events_to_midi, request_to_events
from chuk_mcp_scales.playback.patterns import PlaybackRequest
from chuk_mcp_scales.tools.common import lookup_error_message, resolve_key

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_playback_tools(
    mcp: ChukMCPServer,
    loader: CatalogLoader,
    output_dir: Path,
) -> dict[str, Any]:
    """
    Register playback/export tools with the MCP server.

    Args:
        mcp: The MCP server instance
        loader: The catalog loader
        output_dir: Directory for output files

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def scales_export_midi(
        scale: str,
        root: str = "C",
        pattern: str = "ascending",
        tempo: int = 120,
        time_signature: str = "4/4",
        octave: int = 4,
        output_name: str | None = None,
    ) -> str:
        """
        Export a scale walk-through as a MIDI file.

        One note per beat; the first beat of each bar is accented.

        Args:
            scale: Scale id or name
            root: Root note
            pattern: "ascending", "descending", "alternating" or "ladder"
            tempo: Beats per minute (20-300)
            time_signature: "4/4" or "3/4"
            octave: Octave of the root note (C4 = middle C)
            output_name: Optional output filename (without .mid extension)

        Returns:
            JSON string with the file path and note count

        Example:
            scales_export_midi(scale="dorian", root="D", pattern="ladder")
        """
        try:
            catalog = loader.load()
            try:
                key = resolve_key(catalog, scale, root)
            except (CatalogLookupError, InvalidNoteError) as e:
                return json.dumps({"status": "error", "message": lookup_error_message(e)})

            try:
                request = PlaybackRequest(
                    notes=key.notes(),
                    tempo=tempo,
                    time_signature=time_signature,
                    pattern=ScalePattern(pattern),
                    octave=octave,
                )
            except ValueError as e:  # includes pydantic ValidationError
                return json.dumps({"status": "error", "message": str(e)})

            events = request_to_events(request)
            midi_file = events_to_midi(events, tempo_bpm=request.tempo)

            default_name = f"{key.root.spell()}-{key.scale.id}-{request.pattern.value}"
            filename = f"{output_name or default_name.replace('#', 's')}.mid"
            output_path = output_dir / filename
            output_dir.mkdir(parents=True, exist_ok=True)
            midi_file.save(str(output_path))

            return json.dumps(
                {
                    "status": "success",
                    "path": str(output_path),
                    "key": key.name(),
                    "pattern": request.pattern.value,
                    "notes": len(events),
                    "message": SuccessMessages.MIDI_EXPORTED.format(
                        name=key.name(), path=output_path
                    ),
                }
            )
        except Exception as e:
            logger.exception("Failed to export MIDI")
            return json.dumps({"status": "error", "message": str(e)})

    tools["scales_export_midi"] = scales_export_midi

    return tools
