"""
Scale primitives - step arithmetic, ScaleType, Key.

Scales are interval sets above a root. The same cyclic structure has two
representations: ``intervals`` (semitones above the root, starting at 0)
and ``steps`` (semitones between neighbouring degrees, wrapping back to
the octave). ScaleType stores intervals and derives steps once, so the two
can never drift apart.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace

from chuk_mcp_scales.constants import OCTAVE_SEMITONES
from chuk_mcp_scales.exceptions import MalformedCatalogEntryError

from .pitch import PitchClass, scale_notes


def intervals_to_steps(intervals: Sequence[int]) -> tuple[int, ...]:
    """
    Convert intervals to the step pattern between degrees.

    The last step returns to the octave: [0, 2, 4, 5, 7, 9, 11] -> (2, 2, 1, 2, 2, 2, 1)
    """
    steps = [intervals[i + 1] - intervals[i] for i in range(len(intervals) - 1)]
    steps.append(OCTAVE_SEMITONES - intervals[-1])
    return tuple(steps)


def steps_to_intervals(steps: Sequence[int]) -> tuple[int, ...]:
    """
    Convert a step pattern back to intervals above the root.

    The final step (back to the octave) is not needed to place any degree.
    """
    intervals = [0]
    current = 0
    for step in steps[:-1]:
        current += step
        intervals.append(current)
    return tuple(intervals)


def rotate_steps(steps: Sequence[int], rotation: int) -> tuple[int, ...]:
    """Rotate a step pattern left by ``rotation`` positions (0 is the identity)."""
    if not steps:
        return ()
    rotation %= len(steps)
    return tuple(steps[rotation:]) + tuple(steps[:rotation])


def interval_signature(intervals: Iterable[int]) -> tuple[int, ...]:
    """Canonical (sorted, deduplicated) form of an interval set."""
    return tuple(sorted(set(intervals)))


def validate_intervals(intervals: Sequence[int]) -> None:
    """
    Check the interval invariants shared by every scale.

    Raises:
        MalformedCatalogEntryError: if intervals are empty, do not start at 0,
            leave the [0, 11] range or are not strictly ascending
    """
    if not intervals:
        raise MalformedCatalogEntryError("Scale must have at least one interval")
    if intervals[0] != 0:
        raise MalformedCatalogEntryError(f"Intervals must start at 0, got {list(intervals)}")
    for interval in intervals:
        if not 0 <= interval < OCTAVE_SEMITONES:
            raise MalformedCatalogEntryError(f"Interval out of range 0-11: {interval}")
    for previous, current in zip(intervals, intervals[1:]):
        if current <= previous:
            raise MalformedCatalogEntryError(
                f"Intervals must be strictly ascending, got {list(intervals)}"
            )


@dataclass(frozen=True)
class ModeOf:
    """Parent link: this scale is the rotation of ``id`` starting on degree ``step``."""

    id: str
    step: int  # 1-based, step 1 is the parent itself

    def __post_init__(self) -> None:
        if self.step < 1:
            raise MalformedCatalogEntryError(f"Mode step must be >= 1, got {self.step}")


@dataclass(frozen=True)
class ScaleType:
    """
    A catalog scale defined by its intervals above the root.

    A major scale is: 0 2 4 5 7 9 11 (steps W W H W W W H).

    ``mode_of`` and ``inversions`` hold the modal graph as annotated by the
    relationship resolver. Inversions are stored as sorted (step, id) pairs
    so the value stays hashable.

    Immutable and hashable.
    """

    id: str
    name: str
    family: str
    intervals: tuple[int, ...]
    alternative_names: tuple[str, ...] = ()
    mode_of: ModeOf | None = None
    inversions: tuple[tuple[int, str], ...] = ()
    steps: tuple[int, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        intervals = tuple(self.intervals)
        validate_intervals(intervals)
        object.__setattr__(self, "intervals", intervals)
        object.__setattr__(self, "alternative_names", tuple(self.alternative_names))
        object.__setattr__(self, "inversions", tuple(sorted(self.inversions)))
        object.__setattr__(self, "steps", intervals_to_steps(intervals))

    @classmethod
    def from_steps(
        cls,
        id: str,
        name: str,
        family: str,
        steps: Sequence[int],
        alternative_names: Sequence[str] = (),
    ) -> ScaleType:
        """Create a scale from a step pattern that sums to an octave."""
        total = sum(steps)
        if total != OCTAVE_SEMITONES:
            raise MalformedCatalogEntryError(f"Scale steps must sum to 12 semitones, got {total}")
        return cls(id, name, family, steps_to_intervals(steps), tuple(alternative_names))

    @property
    def size(self) -> int:
        """Number of notes in the scale."""
        return len(self.intervals)

    @property
    def signature(self) -> tuple[int, ...]:
        """Canonical interval signature (sorted, deduplicated)."""
        return interval_signature(self.intervals)

    @property
    def inversion_map(self) -> dict[int, str]:
        """Inversions as a step -> scale id mapping."""
        return dict(self.inversions)

    def inversion(self, step: int) -> str | None:
        """Scale id of the mode starting on ``step`` (1-based), if annotated."""
        return self.inversion_map.get(step)

    def rotated_intervals(self, rotation: int) -> tuple[int, ...]:
        """Intervals of this scale's rotation by ``rotation`` steps."""
        return steps_to_intervals(rotate_steps(self.steps, rotation))

    def pitch_classes(self, root: int) -> frozenset[int]:
        """All pitch classes of this scale played from ``root``."""
        return frozenset((root + interval) % OCTAVE_SEMITONES for interval in self.intervals)

    def notes(self, root: int, prefer_sharps: bool = True) -> list[str]:
        """Spelled notes of this scale played from ``root``."""
        return scale_notes(root, self.intervals, prefer_sharps)

    def with_relationships(
        self,
        mode_of: ModeOf | None,
        inversions: Mapping[int, str],
    ) -> ScaleType:
        """Return a copy carrying a new modal annotation."""
        return replace(self, mode_of=mode_of, inversions=tuple(inversions.items()))

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Key:
    """
    A key is a root pitch class plus a scale type.

    Tools and searches use it to spell and name a concrete scale.

    Examples:
        Key(PitchClass.C, major) = C Major
        Key(PitchClass.A, harmonic_minor) = A Harmonic Minor
    """

    root: PitchClass
    scale: ScaleType

    def notes(self, prefer_sharps: bool = True) -> list[str]:
        """Spelled notes of this key."""
        return self.scale.notes(self.root.value, prefer_sharps)

    def name(self, prefer_sharps: bool = True) -> str:
        return f"{self.root.spell(prefer_flats=not prefer_sharps)} {self.scale.name}"

    def __str__(self) -> str:
        return self.name()

    def __repr__(self) -> str:
        return f"Key({self.root!r}, {self.scale.id!r})"
