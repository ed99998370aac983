from __future__ import annotations

from pathlib import Path

from ..models.processing_result import IngestResult

"""Summary line rendering for the manifest exporter.

Format:
SUMMARY file={name} status={status} records={n} tracking_ref={ref|-} output={file|-}
"""


def render_summary_line(result: IngestResult, record_count: int, output: Path | None = None) -> str:
    """Render the SUMMARY line for one run.

    ``record_count`` is the store size after any deletions, which may differ
    from ``result.record_count``.

    Examples:
        >>> from src.models.processing_result import IngestResult, IngestStatus
        >>> r = IngestResult("orders.xlsx", IngestStatus.SUCCESS, 2, "%0SL30HE15501234567890123")
        >>> render_summary_line(r, 2, Path("out/T1.MR1.PBS"))
        'SUMMARY file=orders.xlsx status=success records=2 tracking_ref=%0SL30HE15501234567890123 output=T1.MR1.PBS'
    """
    return (
        f"SUMMARY file={result.file_name} "
        f"status={result.status.value} "
        f"records={record_count} "
        f"tracking_ref={result.tracking_ref or '-'} "
        f"output={output.name if output is not None else '-'}"
    )
