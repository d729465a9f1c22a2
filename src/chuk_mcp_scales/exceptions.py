"""
Error taxonomy for the scale system.

List parsers never raise these - they collect per-token messages instead.
Strict constructors and lookups raise them for programmer errors.
"""


class ScaleError(Exception):
    """Base class for all scale system errors."""


class InvalidNoteError(ScaleError, ValueError):
    """A note token does not match the note grammar."""

    def __init__(self, note: str):
        super().__init__(f"Unknown note: {note!r}")
        self.note = note


class UnparsableChordError(ScaleError, ValueError):
    """A chord symbol has an unknown root, bass note or quality."""

    def __init__(self, symbol: str):
        super().__init__(f"Unparsable chord symbol: {symbol!r}")
        self.symbol = symbol


class CatalogLookupError(ScaleError, KeyError):
    """A referenced scale id or name is not in the catalog."""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Scale not found in catalog: {self.key!r}"


class MalformedCatalogEntryError(ScaleError, ValueError):
    """A catalog record or document violates the catalog invariants."""
