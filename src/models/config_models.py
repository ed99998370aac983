from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the shipping manifest exporter.

ManifestConfig() with no arguments carries the values every manifest has used
so far; a YAML config file (see src/config/loader.py) may override them.
"""

__all__ = [
    "DEFAULT_FILENAME_TEMPLATE",
    "DEFAULT_TRACKING_PREFIX",
    "ManifestConfig",
    "RecordDefaults",
]

DEFAULT_TRACKING_PREFIX = "%0SL30HE1550"
DEFAULT_FILENAME_TEMPLATE = "T1.M{reference}.PBS"


@dataclass(frozen=True)
class RecordDefaults:
    """Constant field values applied to every record of a batch."""
    date: str = "26112024"
    courier: str = "DPD"
    status: str = "1"
    quantity: str = "1"  # 数量が欠落/非数値の場合


@dataclass(frozen=True)
class ManifestConfig:
    """Root configuration object for ingest and export."""
    tracking_prefix: str = DEFAULT_TRACKING_PREFIX  # 12 文字固定
    defaults: RecordDefaults = field(default_factory=RecordDefaults)
    filename_template: str = DEFAULT_FILENAME_TEMPLATE
    output_directory: str = "."
