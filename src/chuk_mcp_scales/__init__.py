"""
CHUK Scales - musical scales and chords as composable pitch-class data.

- core: pitch classes, scale types, chord symbols, degree triads
- catalog: the scale catalog, its loader and modal relationships
- analysis: chord-scale fit, relative scales, scale finders
- playback: scale patterns and MIDI rendering
- tools: MCP tools served by async_server
"""
