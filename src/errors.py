from __future__ import annotations

"""Record store error types.

Raised by RecordStore operations and propagated to the immediate caller; none of
them leave the store partially mutated.
"""

__all__ = [
    "EmptyExportError",
    "RecordIndexError",
]


class RecordIndexError(IndexError):
    """Raised when a deletion references a position outside the current sequence."""

    def __init__(self, index: int, length: int) -> None:
        if length:
            msg = f"record index {index} out of range (valid: 0..{length - 1})"
        else:
            msg = f"record index {index} out of range (store is empty)"
        super().__init__(msg)
        self.index = index
        self.length = length


class EmptyExportError(Exception):
    """Raised when serialization or export is requested with no records."""
