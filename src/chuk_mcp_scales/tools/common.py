"""
Helpers shared by the MCP tool modules.

Tools reference scales by catalog id or name and keys as "<root> <scale>"
strings such as "A harmonic-minor" or "Eb Major".
"""

from __future__ import annotations

from typing import Any

from chuk_mcp_scales.analysis.characteristics import (
    analyze_scale_characteristics,
    intervals_to_roman_numerals,
)
from chuk_mcp_scales.catalog.catalog import Catalog
from chuk_mcp_scales.constants import ErrorMessages
from chuk_mcp_scales.core.pitch import PitchClass, pitch_class_of
from chuk_mcp_scales.core.scale import Key, ScaleType
from chuk_mcp_scales.exceptions import CatalogLookupError, InvalidNoteError


def resolve_scale(catalog: Catalog, scale: str) -> ScaleType:
    """
    Find a scale by id or name.

    Raises:
        CatalogLookupError: if nothing matches
    """
    scale_type = catalog.resolve(scale.strip())
    if scale_type is None:
        raise CatalogLookupError(scale)
    return scale_type


def resolve_root(root: str) -> PitchClass:
    """
    Parse a root note.

    Raises:
        InvalidNoteError: if the note does not parse
    """
    pitch_class = pitch_class_of(root)
    if pitch_class is None:
        raise InvalidNoteError(root)
    return PitchClass(pitch_class)


def resolve_key(catalog: Catalog, scale: str, root: str) -> Key:
    return Key(resolve_root(root), resolve_scale(catalog, scale))


def parse_key_reference(catalog: Catalog, reference: str) -> Key:
    """
    Parse "<root> <scale>" into a Key.

    Raises:
        InvalidNoteError: if the root does not parse
        CatalogLookupError: if the scale is unknown
    """
    root, _, scale = reference.strip().partition(" ")
    return resolve_key(catalog, scale, root)


def lookup_error_message(error: Exception) -> str:
    """User-facing message for a failed scale or root lookup."""
    if isinstance(error, CatalogLookupError):
        return ErrorMessages.SCALE_NOT_FOUND.format(scale=error.key)
    if isinstance(error, InvalidNoteError):
        return ErrorMessages.INVALID_ROOT.format(root=error.note)
    return str(error)


def scale_summary(scale_type: ScaleType) -> dict[str, Any]:
    """Short JSON form of a scale type."""
    return {
        "id": scale_type.id,
        "name": scale_type.name,
        "family": scale_type.family,
        "intervals": list(scale_type.intervals),
        "size": scale_type.size,
    }


def scale_details(catalog: Catalog, key: Key, prefer_sharps: bool = True) -> dict[str, Any]:
    """Full JSON form of a scale played in a key."""
    scale_type = key.scale
    parent = catalog.parent_of(scale_type.id)
    return {
        **scale_summary(scale_type),
        "key": key.name(prefer_sharps),
        "root": key.root.spell(prefer_flats=not prefer_sharps),
        "notes": key.notes(prefer_sharps),
        "steps": list(scale_type.steps),
        "degrees": intervals_to_roman_numerals(scale_type.intervals),
        "characteristics": analyze_scale_characteristics(scale_type.intervals),
        "alternative_names": list(scale_type.alternative_names),
        "mode_of": (
            {"id": parent.id, "name": parent.name, "step": scale_type.mode_of.step}
            if parent is not None and scale_type.mode_of is not None
            else None
        ),
        "modes": [
            {"step": step, "id": mode.id, "name": mode.name}
            for step, mode in catalog.modes_of(scale_type.id)
        ],
    }
