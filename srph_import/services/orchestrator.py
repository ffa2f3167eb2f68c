from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from ..api.client import SubmissionError
from ..csvio.errors import CsvImportError
from ..csvio.normalizer import Clock, normalize_records
from ..csvio.reader import EXCEL_SUFFIXES, build_raw_records, read_import_file
from ..db.batch_insert import BatchInsertError
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import ImportConfig
from ..models.csv_file import CsvFile, FileStatus
from ..models.entity_kind import EntityKind
from ..models.processing_result import FileStat, ImportSummary, ProcessingResult
from .progress import ImportProgress
from .sinks import Sink

"""Import run orchestration.

Scans the source directory, imports each file as the entity kind its name
maps to, and aggregates the outcomes. Files are independent: a malformed
file fails alone (none of its records are submitted) and the run moves on
to the next one.
"""

logger = logging.getLogger(__name__)

FILE_LEVEL = -1
SCANNED_SUFFIXES = {".csv"} | EXCEL_SUFFIXES


class ProcessingError(Exception):
    """Fatal error that stops the whole run (bad source directory)."""
    pass


def scan_import_files(directory: Path) -> list[Path]:
    """List candidate files (non-recursive, sorted by name).

    Excel workbooks are listed too; they fail with the
    "save as CSV" message.

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        files = [p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in SCANNED_SUFFIXES]
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e
    return sorted(files, key=lambda p: p.name)


def _failed(path: Path, kind: EntityKind, start: datetime, message: str, record_count: int = 0) -> CsvFile:
    return CsvFile(
        path=path,
        name=path.name,
        kind=kind,
        start_time=start,
        end_time=datetime.now(UTC),
        status=FileStatus.FAILED,
        record_count=record_count,
        error=message,
    )


def process_file(
    path: Path,
    kind: EntityKind,
    sink: Sink | None,
    error_log: ErrorLogBuffer,
    now: Clock | None = None,
) -> CsvFile:
    """Read, parse, normalize and submit one file.

    Pipeline errors fail the file before anything is submitted. A sink
    that reports rejected records (partial success) still leaves the file
    successful; each rejection is written to the error log.
    """
    start = datetime.now(UTC)

    try:
        content = read_import_file(path)
        records = normalize_records(kind, build_raw_records(content, kind), now=now)
    except CsvImportError as e:
        logger.error("file=%s kind=%s %s", path.name, kind.value, e)
        error_log.append(ErrorRecord.create(path.name, kind.value, e.line_number, e.error_type, str(e)))
        return _failed(path, kind, start, str(e))
    except (OSError, UnicodeDecodeError) as e:
        logger.error("file=%s read failed: %s", path.name, e)
        error_log.append(ErrorRecord.create(path.name, kind.value, FILE_LEVEL, "FILE_READ_ERROR", str(e)))
        return _failed(path, kind, start, str(e))

    logger.debug("file=%s kind=%s records=%d", path.name, kind.value, len(records))

    if sink is None:
        summary = ImportSummary.all_created(len(records))
    else:
        try:
            summary = sink.submit(kind, records)
        except SubmissionError as e:
            logger.error("file=%s submission failed: %s", path.name, e)
            error_log.append(ErrorRecord.create(path.name, kind.value, FILE_LEVEL, "SUBMISSION_ERROR", str(e)))
            return _failed(path, kind, start, str(e), record_count=len(records))
        except BatchInsertError as e:
            logger.error("file=%s database insert failed: %s", path.name, e)
            error_log.append(
                ErrorRecord.create(path.name, kind.value, FILE_LEVEL, "DATABASE_INSERT_ERROR", str(e))
            )
            return _failed(path, kind, start, str(e), record_count=len(records))

    for message in summary.errors:
        error_log.append(ErrorRecord.create(path.name, kind.value, FILE_LEVEL, "RECORD_REJECTED", message))
    if summary.failed:
        logger.warning(
            "file=%s %d created, %d updated, %d failed",
            path.name, summary.successful, summary.updated, summary.failed,
        )
    else:
        logger.info("file=%s %d created, %d updated", path.name, summary.successful, summary.updated)

    return CsvFile(
        path=path,
        name=path.name,
        kind=kind,
        start_time=start,
        end_time=datetime.now(UTC),
        status=FileStatus.SUCCESS,
        record_count=len(records),
        summary=summary,
    )


def process_all(
    config: ImportConfig,
    sink: Sink | None = None,
    now: Clock | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> ProcessingResult:
    """Import every mapped file in config.source_directory.

    Args:
        config: Import configuration with directory and file mappings
        sink: Where records are submitted (None = dry run, all counted as created)
        now: Clock for asset tag synthesis (defaults to the real UTC clock)
        error_log: Buffer for structured errors (a fresh one per run by default)

    Raises:
        ProcessingError: For fatal errors that prevent processing
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()

    file_paths = scan_import_files(Path(config.source_directory))

    file_stats: list[FileStat] = []
    success_count = failed_count = skipped_count = 0
    total_records = created = updated = rejected = 0

    with ImportProgress(len(file_paths)) as progress:
        for path in file_paths:
            with progress.track(path):
                kind = config.kind_for(path.name)
                if kind is None:
                    logger.info("file=%s has no kind mapping, skipped", path.name)
                    skipped_count += 1
                    file_stats.append(FileStat(path.name, "-", "skipped", 0, 0, 0, 0, 0.0))
                    continue

                result = process_file(path, kind, sink, error_log, now=now)
                elapsed = ((result.end_time or start_time) - (result.start_time or start_time)).total_seconds()
                summary = result.summary

                if result.status == FileStatus.SUCCESS and summary is not None:
                    success_count += 1
                    total_records += result.record_count
                    created += summary.successful
                    updated += summary.updated
                    rejected += summary.failed
                    file_stats.append(
                        FileStat(
                            path.name, kind.value, result.status.value, result.record_count,
                            summary.successful, summary.updated, summary.failed, elapsed,
                        )
                    )
                else:
                    failed_count += 1
                    file_stats.append(
                        FileStat(
                            path.name, kind.value, result.status.value, result.record_count,
                            0, 0, 0, elapsed, error=result.error,
                        )
                    )

                progress.show_counts(success=success_count, failed=failed_count, records=total_records)

    try:
        log_path = error_log.flush()
    except OSError as e:
        # Don't fail the run if only the error log could not be written
        logger.warning("could not write error log: %s", e)
    else:
        if log_path is not None:
            logger.info("error log written: %s", log_path)

    end_time = datetime.now(UTC)
    return ProcessingResult(
        success_files=success_count,
        failed_files=failed_count,
        skipped_files=skipped_count,
        total_records=total_records,
        created_records=created,
        updated_records=updated,
        rejected_records=rejected,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )
