from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for error logging.

Acquisition failures (unreadable file, unparseable workbook) are recorded as one
ErrorRecord per failed ingest and written as JSON Lines by ErrorLogBuffer.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Source filename being ingested
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Human-readable failure description
    """
    timestamp: str  # ISO8601 UTC
    file: str
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        # dataclass -> dict で固定キーのみ出力
        return json.dumps(asdict(self), ensure_ascii=False)
