"""
Catalog - the read-only collection of scale types plus lookup indices.

A Catalog is built once (by the loader or an offline tool) and shared by
every search function. Nothing mutates it: operations that change the
catalog return a new Catalog.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from chuk_mcp_scales.core.scale import ScaleType, interval_signature
from chuk_mcp_scales.exceptions import CatalogLookupError, MalformedCatalogEntryError


class Catalog:
    """
    An ordered, immutable set of ScaleType records with unique ids.

    Indices:
    - by id
    - by name (exact, then alternative names)
    - by exact interval tuple (order matters - degree identity)
    - by canonical signature (sorted, deduplicated intervals)

    Catalog order is significant: it decides which scale the resolver
    records as a mode's parent, and it breaks ties in search rankings.
    """

    def __init__(self, scale_types: Iterable[ScaleType]):
        self._scale_types: tuple[ScaleType, ...] = tuple(scale_types)
        self._by_id: dict[str, ScaleType] = {}
        self._by_name: dict[str, ScaleType] = {}
        self._by_alternative_name: dict[str, ScaleType] = {}
        self._by_intervals: dict[tuple[int, ...], list[ScaleType]] = {}
        self._by_signature: dict[tuple[int, ...], ScaleType] = {}

        for scale_type in self._scale_types:
            if scale_type.id in self._by_id:
                raise MalformedCatalogEntryError(f"Duplicate scale type id: {scale_type.id}")
            self._by_id[scale_type.id] = scale_type
            self._by_name.setdefault(scale_type.name, scale_type)
            for alternative in scale_type.alternative_names:
                self._by_alternative_name.setdefault(alternative, scale_type)
            self._by_intervals.setdefault(scale_type.intervals, []).append(scale_type)
            self._by_signature.setdefault(scale_type.signature, scale_type)

    def __iter__(self) -> Iterator[ScaleType]:
        return iter(self._scale_types)

    def __len__(self) -> int:
        return len(self._scale_types)

    def __contains__(self, scale_id: object) -> bool:
        return scale_id in self._by_id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Catalog):
            return NotImplemented
        return self._scale_types == other._scale_types

    def __hash__(self) -> int:
        return hash(self._scale_types)

    def __repr__(self) -> str:
        return f"Catalog({len(self)} scale types)"

    @property
    def scale_types(self) -> tuple[ScaleType, ...]:
        """All scale types in catalog order."""
        return self._scale_types

    def get(self, scale_id: str) -> ScaleType | None:
        """Get a scale type by id."""
        return self._by_id.get(scale_id)

    def require(self, scale_id: str) -> ScaleType:
        """
        Get a scale type by id, raising if it is missing.

        Raises:
            CatalogLookupError: if no scale has this id
        """
        scale_type = self._by_id.get(scale_id)
        if scale_type is None:
            raise CatalogLookupError(scale_id)
        return scale_type

    def by_name(self, name: str) -> ScaleType | None:
        """Find a scale type by its name, falling back to alternative names."""
        return self._by_name.get(name) or self._by_alternative_name.get(name)

    def resolve(self, reference: str) -> ScaleType | None:
        """Find a scale type by id or name."""
        return self._by_id.get(reference) or self.by_name(reference)

    def find_by_intervals(self, intervals: Sequence[int]) -> ScaleType | None:
        """First scale type whose intervals match exactly, position by position."""
        matches = self._by_intervals.get(tuple(intervals))
        return matches[0] if matches else None

    def find_all_by_intervals(self, intervals: Sequence[int]) -> list[ScaleType]:
        """Every scale type whose intervals match exactly, in catalog order."""
        return list(self._by_intervals.get(tuple(intervals), ()))

    def find_by_signature(self, intervals: Iterable[int]) -> ScaleType | None:
        """First registered scale type with the same canonical interval signature."""
        return self._by_signature.get(interval_signature(intervals))

    def families(self) -> list[str]:
        """Distinct families in first-seen order."""
        return list(dict.fromkeys(scale_type.family for scale_type in self._scale_types))

    def in_family(self, family: str) -> list[ScaleType]:
        return [scale_type for scale_type in self._scale_types if scale_type.family == family]

    def modes_of(self, scale_id: str) -> list[tuple[int, ScaleType]]:
        """
        The annotated modes of a scale as (step, scale type) pairs.

        Inversions that point at ids missing from this catalog are skipped.
        """
        scale_type = self.require(scale_id)
        modes: list[tuple[int, ScaleType]] = []
        for step, mode_id in scale_type.inversions:
            mode = self._by_id.get(mode_id)
            if mode is not None:
                modes.append((step, mode))
        return modes

    def parent_of(self, scale_id: str) -> ScaleType | None:
        """The scale this one is recorded as a mode of, if any."""
        scale_type = self.require(scale_id)
        if scale_type.mode_of is None:
            return None
        return self._by_id.get(scale_type.mode_of.id)

    def with_scale_types(self, scale_types: Iterable[ScaleType]) -> Catalog:
        """A new catalog with extra scale types appended."""
        return Catalog((*self._scale_types, *scale_types))

    def replace(self, scale_type: ScaleType) -> Catalog:
        """A new catalog with the scale type of the same id swapped in place."""
        self.require(scale_type.id)
        return Catalog(
            scale_type if existing.id == scale_type.id else existing
            for existing in self._scale_types
        )
