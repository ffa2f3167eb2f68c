from __future__ import annotations

from ..models.processing_result import FileStat, ProcessingResult

"""Run summary rendering.

The SUMMARY line (label added by the log formatter):
SUMMARY files={total}/{total} success={success} failed={failed} records={records}
created={created} updated={updated} rejected={rejected} skipped_files={skipped}
elapsed_sec={elapsed}

With --debug, one `file=...` line per scanned file precedes it.
"""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation for very small numbers
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_line(total_files: int, result: ProcessingResult) -> str:
    """Render the body of the SUMMARY line for one run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     success_files=2, failed_files=0, skipped_files=1, total_records=10,
        ...     created_records=8, updated_records=2, rejected_records=0,
        ...     start_time=t, end_time=t, elapsed_seconds=1.5,
        ... )
        >>> render_summary_line(3, result)
        'files=3/3 success=2 failed=0 records=10 created=8 updated=2 rejected=0 skipped_files=1 elapsed_sec=1.5'
    """
    return (
        f"files={total_files}/{total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"records={result.total_records} "
        f"created={result.created_records} "
        f"updated={result.updated_records} "
        f"rejected={result.rejected_records} "
        f"skipped_files={result.skipped_files} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )


def render_file_stat(stat: FileStat) -> str:
    line = (
        f"file={stat.file_name} kind={stat.kind} status={stat.status} records={stat.total} "
        f"created={stat.successful} updated={stat.updated} rejected={stat.failed} "
        f"elapsed_sec={_format_seconds(stat.elapsed_seconds)}"
    )
    if stat.error:
        line += f" error={stat.error}"
    return line
