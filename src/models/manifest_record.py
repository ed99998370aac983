from __future__ import annotations

from dataclasses import astuple, dataclass, fields

"""ManifestRecord model for the shipping manifest exporter.

A ManifestRecord is one normalized shipping line. Records are immutable; the
line number is positional and is re-derived by the RecordStore whenever the
batch membership or order changes.
"""

__all__ = [
    "LINE_NUMBER_WIDTH",
    "ManifestRecord",
    "format_line_number",
]

LINE_NUMBER_WIDTH = 5


def format_line_number(position: int) -> str:
    """Return the zero-padded line number for a 0-based position."""
    return str(position + 1).zfill(LINE_NUMBER_WIDTH)


@dataclass(frozen=True)
class ManifestRecord:
    """Normalized shipping line (export column order == field order)."""
    reference: str  # "Reference" 列 (欠落時 "")
    line_number: str  # 00001.. (派生値)
    isbn: str  # "ISBN" 列 (欠落時 "")
    date: str
    courier: str
    quantity: str
    status: str
    tracking_ref: str  # バッチ共通

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    def to_fields(self) -> tuple[str, ...]:
        """Values in export column order."""
        return astuple(self)
