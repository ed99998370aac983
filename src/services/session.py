from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from ..errors import EmptyExportError
from ..excel.reader import SourceReadError, read_first_sheet
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import ManifestConfig
from ..models.processing_result import IngestResult, IngestStatus
from .normalizer import Normalizer, TrackingReferenceGenerator
from .record_store import RecordStore

"""Manifest session: ingest -> prune -> export.

This module coordinates the flow the user drives:
1. Read the first sheet of a source file and normalize it into a new batch
2. Delete single rows or a selection of rows (line numbers are re-derived)
3. Export the batch to ``T1.M<reference>.PBS``

Acquisition failures are reported as a single failed IngestResult and the store
keeps whatever it held before.
"""

__all__ = [
    "ManifestSession",
    "SOURCE_READ_ERROR",
]

logger = logging.getLogger(__name__)

SOURCE_READ_ERROR = "SOURCE_READ_ERROR"


class ManifestSession:
    """Owns one RecordStore and the Normalizer that fills it."""

    def __init__(
        self,
        config: ManifestConfig | None = None,
        *,
        normalizer: Normalizer | None = None,
        store: RecordStore | None = None,
        error_log: ErrorLogBuffer | None = None,
    ) -> None:
        self.config = config or ManifestConfig()
        self.normalizer = normalizer or Normalizer(
            defaults=self.config.defaults,
            tracking=TrackingReferenceGenerator(prefix=self.config.tracking_prefix),
        )
        self.store = store or RecordStore(filename_template=self.config.filename_template)
        self.error_log = error_log

    @property
    def has_data(self) -> bool:
        return self.store.has_data

    def ingest(self, path: Path) -> IngestResult:
        """Read ``path`` and replace the store content with its normalized rows."""
        try:
            rows = read_first_sheet(path)
        except SourceReadError as e:
            message = f"Error processing file: {e}"
            logger.error(message)
            if self.error_log is not None:
                self.error_log.append(ErrorRecord.create(path.name, SOURCE_READ_ERROR, str(e)))
            return IngestResult(file_name=path.name, status=IngestStatus.FAILED, message=message)

        records = self.normalizer.normalize(rows)
        if not records:
            # 空シートは既存データを保持
            logger.warning(f"no data rows in '{path.name}', keeping current records")
            return IngestResult(
                file_name=path.name,
                status=IngestStatus.EMPTY,
                record_count=len(self.store),
                message="No data rows found",
            )

        self.store.replace_all(records)
        logger.info("File processed successfully")
        return IngestResult(
            file_name=path.name,
            status=IngestStatus.SUCCESS,
            record_count=len(records),
            tracking_ref=records[0].tracking_ref,
            message="File processed successfully",
        )

    def delete_row(self, index: int) -> None:
        """Delete the record at 0-based ``index`` (RecordIndexError when out of range)."""
        self.store.delete_at(index)
        logger.info("Row deleted")

    def delete_selected(self, indices: Iterable[int]) -> int:
        deleted = self.store.delete_many(indices)
        if deleted == 0:
            logger.warning("No rows selected")
        else:
            logger.info(f"Deleted {deleted} row(s)")
        return deleted

    def clear(self) -> None:
        self.store.clear()
        logger.info("All data cleared")

    def export(self, directory: Path | None = None) -> Path:
        """Write the serialized batch into ``directory`` and return the file path.

        Raises:
            EmptyExportError: nothing to export (no file is written)
        """
        try:
            content = self.store.serialize()
        except EmptyExportError:
            logger.warning("No data to download")
            raise
        # serialize() 成功後なので store は非空
        filename = self.store.suggested_filename() or ""
        out_dir = directory if directory is not None else Path(self.config.output_directory)
        out_dir.mkdir(parents=True, exist_ok=True)
        target = out_dir / filename
        with target.open("w", encoding="utf-8", newline="") as f:
            f.write(content)
        logger.info("CSV downloaded successfully")
        logger.debug(f"export: path={target} records={len(self.store)}")
        return target
