"""
Scale catalog - the data every search runs over.

The catalog is a validated, ordered list of scale types. It can come from:
1. Built-in library (shipped with package)
2. Project catalogs (user's project/catalog directory)

Modal relationships (which scales are rotations of which) are resolved
when the catalog is loaded. The generator module holds the offline
tooling that builds and maintains catalog files.
"""

from chuk_mcp_scales.catalog.catalog import Catalog
from chuk_mcp_scales.catalog.generator import (
    HARMONIC_MINOR_MODES,
    KNOWN_SCALE_NAMES,
    AddModesResult,
    ModeSpec,
    NamingResult,
    ScaleName,
    SyncResult,
    add_modes,
    apply_scale_names,
    generate_step_patterns,
    pattern_to_intervals,
    scale_slug,
    sync_catalog,
    uncovered_scales,
)
from chuk_mcp_scales.catalog.loader import (
    CatalogLoader,
    dump_catalog,
    load_document,
    save_catalog,
)
from chuk_mcp_scales.catalog.models import CatalogDocument, ModeOfRecord, ScaleTypeRecord
from chuk_mcp_scales.catalog.resolver import (
    RelationshipSummary,
    resolve_modal_relationships,
    summarize_relationships,
)

__all__ = [
    # Catalog
    "Catalog",
    "CatalogLoader",
    "CatalogDocument",
    "ModeOfRecord",
    "ScaleTypeRecord",
    "load_document",
    "dump_catalog",
    "save_catalog",
    # Modal graph
    "RelationshipSummary",
    "resolve_modal_relationships",
    "summarize_relationships",
    # Generator
    "AddModesResult",
    "HARMONIC_MINOR_MODES",
    "KNOWN_SCALE_NAMES",
    "ModeSpec",
    "NamingResult",
    "ScaleName",
    "SyncResult",
    "add_modes",
    "apply_scale_names",
    "generate_step_patterns",
    "pattern_to_intervals",
    "scale_slug",
    "sync_catalog",
    "uncovered_scales",
]
