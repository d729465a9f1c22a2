"""
Catalog document models - the on-disk shape of the scale catalog.

These pydantic models validate a catalog file before it becomes a
Catalog of ScaleType values. Field names follow the file format
(camelCase aliases); Python code uses the snake_case attributes.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from chuk_mcp_scales.core.scale import ModeOf, ScaleType, intervals_to_steps


class ModeOfRecord(BaseModel):
    """Parent link of a scale that is a mode of another catalog scale."""

    id: str = Field(..., description="Parent scale id")
    step: int = Field(..., ge=1, description="1-based degree the rotation starts on")

    model_config = {"frozen": True}


class ScaleTypeRecord(BaseModel):
    """
    One scale type as stored in the catalog file.

    Steps are optional in the file; when present they must agree with
    the intervals.
    """

    id: str = Field(..., min_length=1, description="Unique scale type id")
    name: str = Field(..., min_length=1, description="Display name")
    family: str = Field(..., min_length=1, description="Scale family")
    intervals: list[int] = Field(..., min_length=1, description="Semitones above the root")
    steps: list[int] | None = Field(None, description="Semitones between degrees")
    alternative_names: list[str] | None = Field(
        None, alias="alternativeNames", description="Other names for this scale"
    )
    mode_of: ModeOfRecord | None = Field(None, alias="modeOf", description="Parent scale link")
    inversions: dict[str, str] | None = Field(
        None, description="Rotation step (as string) -> scale id"
    )

    model_config = {"populate_by_name": True}

    @field_validator("intervals")
    @classmethod
    def check_intervals(cls, intervals: list[int]) -> list[int]:
        if any(not 0 <= interval <= 11 for interval in intervals):
            raise ValueError("Intervals must be between 0 and 11")
        if 0 not in intervals:
            raise ValueError("Intervals must include 0 (root)")
        if any(b <= a for a, b in zip(intervals, intervals[1:])):
            raise ValueError("Intervals must be strictly ascending")
        return intervals

    @field_validator("steps")
    @classmethod
    def check_step_range(cls, steps: list[int] | None) -> list[int] | None:
        if steps is not None and any(not 1 <= step <= 11 for step in steps):
            raise ValueError("Steps must be between 1 and 11")
        return steps

    @field_validator("inversions")
    @classmethod
    def check_inversion_keys(cls, inversions: dict[str, str] | None) -> dict[str, str] | None:
        if inversions is not None:
            for step in inversions:
                if not step.isdigit() or int(step) < 1:
                    raise ValueError(f"Inversion step must be a positive integer, got {step!r}")
        return inversions

    @model_validator(mode="after")
    def check_steps_match_intervals(self) -> ScaleTypeRecord:
        if self.steps is not None and tuple(self.steps) != intervals_to_steps(self.intervals):
            raise ValueError(
                f"Steps {self.steps} do not match intervals {self.intervals} for '{self.id}'"
            )
        return self

    def to_scale_type(self) -> ScaleType:
        """Convert to the core ScaleType value."""
        mode_of = ModeOf(self.mode_of.id, self.mode_of.step) if self.mode_of else None
        inversions = tuple((int(step), id) for step, id in (self.inversions or {}).items())
        return ScaleType(
            id=self.id,
            name=self.name,
            family=self.family,
            intervals=tuple(self.intervals),
            alternative_names=tuple(self.alternative_names or ()),
            mode_of=mode_of,
            inversions=inversions,
        )

    @classmethod
    def from_scale_type(cls, scale_type: ScaleType) -> ScaleTypeRecord:
        """Create a record from a core ScaleType (steps always written)."""
        mode_of = None
        if scale_type.mode_of is not None:
            mode_of = ModeOfRecord(id=scale_type.mode_of.id, step=scale_type.mode_of.step)
        return cls(
            id=scale_type.id,
            name=scale_type.name,
            family=scale_type.family,
            intervals=list(scale_type.intervals),
            steps=list(scale_type.steps),
            alternative_names=list(scale_type.alternative_names),
            mode_of=mode_of,
            inversions={str(step): id for step, id in scale_type.inversions},
        )


class CatalogDocument(BaseModel):
    """The whole catalog file."""

    scale_types: list[ScaleTypeRecord] = Field(
        ...,
        alias="scaleTypes",
        min_length=1,
        description="All scale types, in catalog order",
    )

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def check_unique_ids(self) -> CatalogDocument:
        seen: set[str] = set()
        for record in self.scale_types:
            if record.id in seen:
                raise ValueError(f"Duplicate scale type id: {record.id}")
            seen.add(record.id)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the file field names."""
        return self.model_dump(by_alias=True, mode="json")
