"""Domain models for the shipping manifest exporter."""

from .config_models import ManifestConfig, RecordDefaults
from .error_record import ErrorRecord
from .manifest_record import ManifestRecord, format_line_number
from .processing_result import IngestResult, IngestStatus

__all__ = [
    # Configuration models
    "ManifestConfig",
    "RecordDefaults",
    # Record models
    "ManifestRecord",
    "format_line_number",
    # Processing models
    "ErrorRecord",
    "IngestResult",
    "IngestStatus",
]
