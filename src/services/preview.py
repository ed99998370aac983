from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict

import pandas as pd

from ..models.manifest_record import ManifestRecord

"""Tabular text preview of the current records."""

__all__ = [
    "EMPTY_PREVIEW",
    "PREVIEW_COLUMNS",
    "records_to_frame",
    "render_preview",
]

EMPTY_PREVIEW = "No data loaded"

PREVIEW_COLUMNS = {
    "reference": "Reference",
    "line_number": "Line",
    "isbn": "ISBN",
    "date": "Date",
    "courier": "Courier",
    "quantity": "Qty",
    "status": "Status",
    "tracking_ref": "Tracking Ref",
}


def records_to_frame(records: Sequence[ManifestRecord]) -> pd.DataFrame:
    frame = pd.DataFrame([asdict(r) for r in records], columns=list(PREVIEW_COLUMNS))
    return frame.rename(columns=PREVIEW_COLUMNS)


def render_preview(records: Sequence[ManifestRecord]) -> str:
    if not records:
        return EMPTY_PREVIEW
    return records_to_frame(records).to_string(index=False)
