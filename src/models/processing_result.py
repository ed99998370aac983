from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Ingest result models for the shipping manifest exporter.

IngestResult is what the session hands back to the caller after one attempt to
load a source sheet. Acquisition failures are reported here as a single
batch-level outcome; they never leave partial data in the store.
"""

__all__ = [
    "IngestResult",
    "IngestStatus",
]


class IngestStatus(Enum):
    """Outcome of a single ingest attempt.

    - SUCCESS: rows were normalized and committed to the store
    - EMPTY: the sheet was readable but held no data rows (store untouched)
    - FAILED: the source could not be read or parsed (store untouched)
    """
    SUCCESS = "success"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class IngestResult:
    file_name: str
    status: IngestStatus
    record_count: int = 0
    tracking_ref: str | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is not IngestStatus.FAILED
