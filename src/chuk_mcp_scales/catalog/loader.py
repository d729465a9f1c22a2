"""
Catalog loader - discovers, validates and loads scale catalogs.

Catalogs can come from:
1. Built-in library (shipped with package)
2. Project catalogs (user's project/catalog directory)

Files are JSON or YAML documents of the form ``{"scaleTypes": [...]}``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from chuk_mcp_scales.catalog.catalog import Catalog
from chuk_mcp_scales.catalog.models import CatalogDocument, ScaleTypeRecord
from chuk_mcp_scales.catalog.resolver import resolve_modal_relationships
from chuk_mcp_scales.constants import CATALOG_SUFFIXES, SuccessMessages
from chuk_mcp_scales.core.scale import ScaleType
from chuk_mcp_scales.exceptions import MalformedCatalogEntryError

logger = logging.getLogger(__name__)

LIBRARY_CATALOG_NAME = "scales.json"
_YAML_SUFFIXES = (".yaml", ".yml")


def _read_data(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        if path.suffix.lower() in _YAML_SUFFIXES:
            return yaml.safe_load(f)
        return json.load(f)


def load_document(path: Path) -> CatalogDocument:
    """
    Read and validate one catalog file.

    Args:
        path: JSON or YAML catalog file

    Returns:
        The validated document

    Raises:
        MalformedCatalogEntryError: if the file does not parse or validate
    """
    try:
        data = _read_data(path)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise MalformedCatalogEntryError(f"Could not parse catalog {path}: {e}") from e

    return parse_document(data, source=str(path))


def parse_document(data: Any, source: str = "<data>") -> CatalogDocument:
    """
    Validate already-decoded catalog data.

    Raises:
        MalformedCatalogEntryError: carrying the pydantic error messages
    """
    try:
        return CatalogDocument.model_validate(data)
    except ValidationError as e:
        messages = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise MalformedCatalogEntryError(f"Invalid catalog {source}: {messages}") from e


def document_to_catalog(document: CatalogDocument) -> Catalog:
    """Build a Catalog from a validated document, keeping file order."""
    return Catalog(record.to_scale_type() for record in document.scale_types)


def dump_catalog(catalog: Catalog) -> dict[str, Any]:
    """Serialize a catalog to the file structure (camelCase keys)."""
    document = CatalogDocument(
        scale_types=[ScaleTypeRecord.from_scale_type(scale_type) for scale_type in catalog]
    )
    return document.to_dict()


def save_catalog(catalog: Catalog, path: Path) -> Path:
    """
    Write a catalog to disk.

    JSON is written with 2-space indentation and a trailing newline; a
    ``.yaml`` / ``.yml`` suffix writes YAML instead.
    """
    data = dump_catalog(catalog)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() in _YAML_SUFFIXES:
        text = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    else:
        text = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    path.write_text(text, encoding="utf-8")
    logger.info(f"Wrote {len(catalog)} scale types to {path}")
    return path


class CatalogLoader:
    """
    Discovers and loads scale catalogs.

    The built-in library is loaded first; every catalog file in the project
    directory is then merged on top in file-name order. Project entries
    replace library entries with the same id in place, new ids are appended.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the catalog loader.

        Args:
            library_path: Path to the built-in catalog file
            project_path: Path to a project catalog directory (or single file)
        """
        self.library_path = library_path or (Path(__file__).parent / "library" / LIBRARY_CATALOG_NAME)
        self.project_path = project_path
        self._cache: dict[bool, Catalog] = {}

    def catalog_files(self) -> list[Path]:
        """All catalog files that contribute to the loaded catalog, in merge order."""
        files: list[Path] = []
        if self.library_path.exists():
            files.append(self.library_path)

        if self.project_path and self.project_path.exists():
            if self.project_path.is_file():
                files.append(self.project_path)
            else:
                files.extend(
                    sorted(
                        path
                        for path in self.project_path.iterdir()
                        if path.suffix.lower() in CATALOG_SUFFIXES
                    )
                )
        return files

    def load(self, resolve_modes: bool = True) -> Catalog:
        """
        Load the merged catalog.

        Args:
            resolve_modes: Annotate the modal graph after merging

        Returns:
            The catalog (cached per ``resolve_modes``)

        Raises:
            MalformedCatalogEntryError: if any file is invalid or nothing loads
        """
        if resolve_modes in self._cache:
            return self._cache[resolve_modes]

        merged: dict[str, ScaleType] = {}
        for path in self.catalog_files():
            document = load_document(path)
            for record in document.scale_types:
                merged[record.id] = record.to_scale_type()
            logger.debug(f"Loaded {len(document.scale_types)} scale types from {path}")

        if not merged:
            raise MalformedCatalogEntryError("No catalog files found")

        catalog = Catalog(merged.values())
        if resolve_modes:
            catalog = resolve_modal_relationships(catalog)

        logger.info(SuccessMessages.CATALOG_LOADED.format(count=len(catalog)))
        self._cache[resolve_modes] = catalog
        return catalog

    def clear_cache(self) -> None:
        """Clear the catalog cache."""
        self._cache.clear()
