#!/usr/bin/env python3
"""
Async Scales MCP Server using chuk-mcp-server

This server provides MCP tools for exploring musical scales and chords.
The scale catalog ships with the package; drop extra JSON or YAML catalog
files into ./catalog (or $CHUK_SCALES_CATALOG_DIR) to add or override scales.

The server provides tools for:
- Browsing the catalog (scales, modes, degree triads)
- Finding relative scales one or two alterations away
- Parsing chords and checking which scales they fit
- Finding scales by notes, chords or triad qualities
- Exporting scale walk-throughs to MIDI files
"""

import logging
import os
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_scales.catalog import CatalogLoader
from chuk_mcp_scales.tools import (
    register_chord_tools,
    register_finder_tools,
    register_playback_tools,
    register_scale_tools,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-scales")

# Paths - use standard project structure
BASE_PATH = Path.cwd()
CATALOG_DIR = Path(os.environ.get("CHUK_SCALES_CATALOG_DIR", BASE_PATH / "catalog"))
OUTPUT_DIR = BASE_PATH / "output"
LIBRARY_PATH = Path(__file__).parent / "catalog" / "library" / "scales.json"

# Create the catalog loader (the catalog itself loads on first use)
catalog_loader = CatalogLoader(
    library_path=LIBRARY_PATH,
    project_path=CATALOG_DIR,
)

# Register all tools
scale_tools = register_scale_tools(mcp, catalog_loader)
chord_tools = register_chord_tools(mcp, catalog_loader)
finder_tools = register_finder_tools(mcp, catalog_loader)
playback_tools = register_playback_tools(mcp, catalog_loader, OUTPUT_DIR)

# Export tool functions for direct access
scales_list_scales = scale_tools["scales_list_scales"]
scales_describe_scale = scale_tools["scales_describe_scale"]
scales_get_triads = scale_tools["scales_get_triads"]
scales_find_relatives = scale_tools["scales_find_relatives"]

scales_parse_chords = chord_tools["scales_parse_chords"]
scales_check_chord_fit = chord_tools["scales_check_chord_fit"]

scales_find_by_notes = finder_tools["scales_find_by_notes"]
scales_find_by_chords = finder_tools["scales_find_by_chords"]
scales_find_by_chord_types = finder_tools["scales_find_by_chord_types"]
scales_common_chords = finder_tools["scales_common_chords"]

scales_export_midi = playback_tools["scales_export_midi"]

logger.info("CHUK Scales MCP Server initialized")
logger.info(f"  Library path: {LIBRARY_PATH}")
logger.info(f"  Catalog dir: {CATALOG_DIR}")
logger.info(f"  Output dir: {OUTPUT_DIR}")
