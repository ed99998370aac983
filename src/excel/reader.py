from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Any

import pandas as pd

"""Spreadsheet reader: first sheet -> list of raw rows (column name -> value).

- Only the first worksheet is read; the first row is the header.
- Fully blank rows are skipped.
- Blank cells become "" so every row carries every header column.
- Typed dates are rendered as dd/mm/YYYY, integral floats as int.
- .csv sources are read the same way (single implicit sheet).

Any failure while opening or parsing the source surfaces as SourceReadError so
the caller can report one batch-level failure.
"""

__all__ = [
    "DATE_FORMAT",
    "SourceReadError",
    "frame_to_rows",
    "read_first_sheet",
    "read_source_frame",
]

DATE_FORMAT = "%d/%m/%Y"
CSV_SUFFIXES = {".csv"}


class SourceReadError(Exception):
    """Raised when the source table cannot be read or parsed."""


def read_source_frame(path: Path) -> pd.DataFrame:
    """Read the first sheet of ``path`` as an object-dtype DataFrame."""
    if not path.exists():
        raise SourceReadError(f"file not found: {path}")
    if not path.is_file():
        raise SourceReadError(f"not a file: {path}")
    try:
        # dtype=object: openpyxl の int/datetime をそのまま保持 (float 化させない)
        if path.suffix.lower() in CSV_SUFFIXES:
            return pd.read_csv(path, dtype=object, keep_default_na=False)
        return pd.read_excel(path, sheet_name=0, dtype=object, keep_default_na=False)
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    except Exception as e:
        raise SourceReadError(f"unable to read '{path.name}': {e}") from e


def _normalize_cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, float):
        if pd.isna(value):
            return ""
        if value.is_integer():
            return int(value)
        return value
    if value is pd.NaT:
        return ""
    if isinstance(value, (datetime, date)):
        return value.strftime(DATE_FORMAT)
    return value


def frame_to_rows(df: pd.DataFrame) -> list[dict[str, Any]]:
    columns = [str(c).strip() for c in df.columns]
    rows: list[dict[str, Any]] = []
    for raw in df.itertuples(index=False, name=None):
        values = [_normalize_cell(v) for v in raw]
        if all(v == "" for v in values):
            continue
        rows.append(dict(zip(columns, values, strict=False)))
    return rows


def read_first_sheet(path: Path) -> list[dict[str, Any]]:
    """Read ``path`` and return its data rows in sheet order."""
    return frame_to_rows(read_source_frame(path))
