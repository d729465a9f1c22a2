"""
MCP tool implementations.

Tools are organized by domain:
- scales - Catalog browsing, triads and relative scales
- chords - Chord parsing and chord-scale fit
- finder - Searching scales by notes, chords and triad qualities
- playback - MIDI export
"""

from chuk_mcp_scales.tools.chords import register_chord_tools
from chuk_mcp_scales.tools.finder import register_finder_tools
from chuk_mcp_scales.tools.playback import register_playback_tools
from chuk_mcp_scales.tools.scales import register_scale_tools

__all__ = [
    "register_chord_tools",
    "register_finder_tools",
    "register_playback_tools",
    "register_scale_tools",
]
