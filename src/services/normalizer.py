from __future__ import annotations

import logging
import math
import random
from collections.abc import Mapping, Sequence
from numbers import Integral, Real
from typing import Any, Protocol

from ..models.config_models import DEFAULT_TRACKING_PREFIX, RecordDefaults
from ..models.manifest_record import ManifestRecord, format_line_number

"""Row normalization service: raw sheet rows -> ManifestRecord batch.

Per-row derivation (in order):
1. reference   : "Reference" column, passthrough or ""
2. line_number : 1-based source position, zero-padded to 5 digits
3. isbn        : "ISBN" column, passthrough or ""
4. date / courier / status : batch constants (RecordDefaults)
5. quantity    : first present column of QUANTITY_ALIASES, numeric coercion
6. tracking_ref: one generated value shared by the whole batch

Malformed cells never raise; they fall back to "" (text fields) or the default
quantity.
"""

__all__ = [
    "QUANTITY_ALIASES",
    "TRACKING_NUMBER_MAX",
    "TRACKING_NUMBER_MIN",
    "TRACKING_PREFIX_LENGTH",
    "Normalizer",
    "TrackingReferenceGenerator",
    "cell_text",
    "coerce_quantity",
    "find_quantity_column",
    "normalize",
]

logger = logging.getLogger(__name__)

REFERENCE_COLUMN = "Reference"
ISBN_COLUMN = "ISBN"

# 優先順位順。最初に存在した列を採用 (値が空でも列の存在を優先)
QUANTITY_ALIASES: tuple[str, ...] = (
    "Quantity",
    "quantity",
    "QUANTITY",
    "Qty",
    "qty",
    "QTY",
)

TRACKING_PREFIX_LENGTH = 12
TRACKING_NUMBER_MIN = 1_000_000_000_000
TRACKING_NUMBER_MAX = 9_999_999_999_999


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


class TrackingReferenceGenerator:
    """Batch tracking reference: fixed prefix + random 13-digit number.

    Uniqueness is probabilistic. Pass a seeded ``random.Random`` (or any object
    with ``randint``) to make the output reproducible.
    """

    def __init__(self, prefix: str = DEFAULT_TRACKING_PREFIX, rng: RandomSource | None = None) -> None:
        if len(prefix) != TRACKING_PREFIX_LENGTH:
            raise ValueError(
                f"tracking prefix must be {TRACKING_PREFIX_LENGTH} characters, got {len(prefix)}: {prefix!r}"
            )
        self.prefix = prefix
        self._rng: RandomSource = rng if rng is not None else random.Random()

    def generate(self) -> str:
        number = self._rng.randint(TRACKING_NUMBER_MIN, TRACKING_NUMBER_MAX)
        return f"{self.prefix}{number}"


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and value == ""


def _format_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


def cell_text(value: Any) -> str:
    """Render a cell as text; blank cells become ""."""
    if _is_blank(value):
        return ""
    if isinstance(value, float):
        return _format_number(value)
    return str(value)


def find_quantity_column(row: Mapping[str, Any]) -> str | None:
    """Return the first alias from QUANTITY_ALIASES present in ``row``."""
    for name in QUANTITY_ALIASES:
        if name in row:
            return name
    return None


def coerce_quantity(value: Any, default: str = "1") -> str:
    """Coerce a raw quantity cell to a canonical decimal string.

    Numbers (including 0) are kept. An empty or whitespace-only cell counts as
    0; None/NaN, non-numeric and non-finite input yields ``default``.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str) and not value.strip():
        return "0"
    if isinstance(value, Integral):
        return str(int(value))
    if isinstance(value, Real):
        number = float(value)
    else:
        text = str(value).strip()
        # float() は "1_000" を受け付けるため除外
        if "_" in text:
            return default
        try:
            number = float(text)
        except ValueError:
            return default
    if not math.isfinite(number):
        return default
    return _format_number(number)


class Normalizer:
    """Turns one sequence of raw rows into one batch of ManifestRecords."""

    def __init__(
        self,
        defaults: RecordDefaults | None = None,
        tracking: TrackingReferenceGenerator | None = None,
    ) -> None:
        self.defaults = defaults or RecordDefaults()
        self.tracking = tracking or TrackingReferenceGenerator()

    def normalize_row(self, row: Mapping[str, Any], position: int, tracking_ref: str) -> ManifestRecord:
        quantity_column = find_quantity_column(row)
        if quantity_column is None:
            quantity = self.defaults.quantity
        else:
            quantity = coerce_quantity(row[quantity_column], default=self.defaults.quantity)
        return ManifestRecord(
            reference=cell_text(row.get(REFERENCE_COLUMN)),
            line_number=format_line_number(position),
            isbn=cell_text(row.get(ISBN_COLUMN)),
            date=self.defaults.date,
            courier=self.defaults.courier,
            quantity=quantity,
            status=self.defaults.status,
            tracking_ref=tracking_ref,
        )

    def normalize(self, rows: Sequence[Mapping[str, Any]]) -> list[ManifestRecord]:
        if not rows:
            logger.debug("normalize: no rows, nothing to do")
            return []
        tracking_ref = self.tracking.generate()
        records = [self.normalize_row(row, i, tracking_ref) for i, row in enumerate(rows)]
        logger.debug(f"normalize: rows={len(records)} tracking_ref={tracking_ref}")
        return records


def normalize(
    rows: Sequence[Mapping[str, Any]],
    *,
    defaults: RecordDefaults | None = None,
    tracking: TrackingReferenceGenerator | None = None,
) -> list[ManifestRecord]:
    """Normalize ``rows`` into a single batch sharing one tracking reference."""
    return Normalizer(defaults=defaults, tracking=tracking).normalize(rows)
