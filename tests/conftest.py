"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_mcp_scales.catalog import Catalog, CatalogLoader
from chuk_mcp_scales.core import ScaleType

LIBRARY_PATH = (
    Path(__file__).parent.parent / "src" / "chuk_mcp_scales" / "catalog" / "library" / "scales.json"
)


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_midi_path(temp_dir: Path) -> Path:
    """Path for a temporary MIDI file."""
    return temp_dir / "test.mid"


@pytest.fixture
def library_path() -> Path:
    """Path to the built-in catalog."""
    return LIBRARY_PATH


@pytest.fixture(scope="session")
def catalog() -> Catalog:
    """The built-in catalog with modal relationships resolved."""
    return CatalogLoader(library_path=LIBRARY_PATH).load()


@pytest.fixture(scope="session")
def raw_catalog() -> Catalog:
    """The built-in catalog exactly as shipped (no modal annotations)."""
    return CatalogLoader(library_path=LIBRARY_PATH).load(resolve_modes=False)


@pytest.fixture
def small_catalog() -> Catalog:
    """A hand-built catalog: the major modes plus harmonic minor."""
    return Catalog(
        [
            ScaleType("major", "Major", "major-modes", (0, 2, 4, 5, 7, 9, 11)),
            ScaleType("dorian", "Dorian", "major-modes", (0, 2, 3, 5, 7, 9, 10)),
            ScaleType("phrygian", "Phrygian", "major-modes", (0, 1, 3, 5, 7, 8, 10)),
            ScaleType("lydian", "Lydian", "major-modes", (0, 2, 4, 6, 7, 9, 11)),
            ScaleType("mixolydian", "Mixolydian", "major-modes", (0, 2, 4, 5, 7, 9, 10)),
            ScaleType(
                "natural-minor",
                "Natural Minor",
                "major-modes",
                (0, 2, 3, 5, 7, 8, 10),
                alternative_names=("Aeolian",),
            ),
            ScaleType("locrian", "Locrian", "major-modes", (0, 1, 3, 5, 6, 8, 10)),
            ScaleType(
                "harmonic-minor",
                "Harmonic Minor",
                "harmonic-minor-modes",
                (0, 2, 3, 5, 7, 8, 11),
            ),
        ]
    )
