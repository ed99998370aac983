from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace

from ..errors import EmptyExportError, RecordIndexError
from ..models.config_models import DEFAULT_FILENAME_TEMPLATE
from ..models.manifest_record import ManifestRecord, format_line_number

"""In-memory record store for the current manifest batch.

The store owns the ordered record sequence. Every mutation ends with a single
renumbering pass so that line numbers are always 00001..N in store order.
Callers hold the only reference; access is single-threaded.
"""

__all__ = [
    "FIELD_DELIMITER",
    "LINE_SEPARATOR",
    "RecordStore",
]

logger = logging.getLogger(__name__)

FIELD_DELIMITER = ","
LINE_SEPARATOR = "\n"

REFERENCE_PLACEHOLDER = "{reference}"
PATH_SEPARATORS = ("/", "\\")
FILENAME_SEPARATOR_REPLACEMENT = "_"


def _renumber(records: Iterable[ManifestRecord]) -> list[ManifestRecord]:
    out: list[ManifestRecord] = []
    for i, rec in enumerate(records):
        number = format_line_number(i)
        out.append(rec if rec.line_number == number else replace(rec, line_number=number))
    return out


class RecordStore:
    """Ordered, renumbered sequence of ManifestRecords."""

    def __init__(
        self,
        records: Iterable[ManifestRecord] | None = None,
        *,
        filename_template: str = DEFAULT_FILENAME_TEMPLATE,
    ) -> None:
        self.filename_template = filename_template
        self._records: list[ManifestRecord] = _renumber(records or [])

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> tuple[ManifestRecord, ...]:
        return tuple(self._records)

    @property
    def has_data(self) -> bool:
        return bool(self._records)

    def replace_all(self, records: Iterable[ManifestRecord]) -> None:
        """Replace the whole sequence with ``records`` (prior content is dropped)."""
        self._records = _renumber(records)
        logger.debug(f"store: replaced, size={len(self._records)}")

    def delete_at(self, index: int) -> ManifestRecord:
        """Remove and return the record at ``index``.

        Raises:
            RecordIndexError: index outside [0, len); the store is unchanged
        """
        if not 0 <= index < len(self._records):
            raise RecordIndexError(index, len(self._records))
        removed = self._records.pop(index)
        self._records = _renumber(self._records)
        return removed

    def delete_many(self, indices: Iterable[int]) -> int:
        """Remove every record whose pre-deletion position is in ``indices``.

        Positions are validated up front, so either all are removed or none.
        Returns the number of records removed (0 for an empty selection).
        """
        targets = set(indices)
        if not targets:
            return 0
        size = len(self._records)
        for index in sorted(targets):
            if not 0 <= index < size:
                raise RecordIndexError(index, size)
        self._records = _renumber(rec for i, rec in enumerate(self._records) if i not in targets)
        logger.debug(f"store: deleted={len(targets)} size={len(self._records)}")
        return len(targets)

    def clear(self) -> None:
        self._records = []

    def serialize(self) -> str:
        """Comma-delimited text, one line per record, no header or quoting.

        Raises:
            EmptyExportError: the store holds no records
        """
        if not self._records:
            raise EmptyExportError("no records to serialize")
        return LINE_SEPARATOR.join(FIELD_DELIMITER.join(rec.to_fields()) for rec in self._records)

    def suggested_filename(self) -> str | None:
        """Export filename built from the first record's reference, or None when empty.

        Path separators in the reference are replaced so the name always stays a
        single file name inside the export directory.
        """
        if not self._records:
            return None
        reference = self._records[0].reference
        for sep in PATH_SEPARATORS:
            reference = reference.replace(sep, FILENAME_SEPARATOR_REPLACEMENT)
        return self.filename_template.replace(REFERENCE_PLACEHOLDER, reference)
