from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from ..models.entity_kind import EntityKind
from ..models.processing_result import ImportSummary
from ..models.records import NormalizedRecord, NormalizedVirtualMachine

"""Direct database sink: batched INSERT of normalized records.

Used by the `database` sink when the persistence API is not reachable (for
instance during an initial data load). Inserts go straight into the SRPH-MIS
tables with psycopg2.extras.execute_values; the upsert rules of the API
(update by asset tag / serial number, quantity merge) are not applied here.

Virtual machines land in the legacy `vm_inventory` columns (vm_name,
host_name, guest_os, power_state, ...); the newer VM fields only exist on
the API side.
"""

try:  # pragma: no cover - optional until psycopg2 present at runtime
    import psycopg2
    from psycopg2.extras import execute_values
except Exception:  # pragma: no cover
    psycopg2 = None  # type: ignore
    execute_values = None  # type: ignore

logger = logging.getLogger(__name__)


class BatchInsertError(Exception):
    pass


@dataclass(frozen=True)
class BatchMetrics:
    """Timing of a single execute_values call."""
    batch_size: int
    elapsed_seconds: float
    start_time: float
    end_time: float


@dataclass(frozen=True)
class InsertResult:
    inserted_rows: int


def batch_insert(
    cursor: Any,
    table: str,
    columns: Sequence[str],
    rows: Sequence[Sequence[Any]],
    page_size: int = 1000,
    metrics_callback: Callable[[BatchMetrics], None] | None = None,
) -> InsertResult:
    """Perform a batched INSERT using psycopg2.extras.execute_values.

    Parameters
    ----------
    cursor: psycopg2 cursor
    table: target table (from EntityKind.table_name, never user input)
    columns: column names, in the order of each row
    rows: row value sequences
    page_size: execute_values page size
    metrics_callback: receives BatchMetrics after the call (not invoked for empty rows)
    """
    if execute_values is None:
        raise BatchInsertError("psycopg2 not available")

    rows_list = [list(r) for r in rows]
    if not rows_list:
        return InsertResult(inserted_rows=0)

    cols_sql = ",".join(f'"{c}"' for c in columns)
    sql = f"INSERT INTO {table} ({cols_sql}) VALUES %s"

    start_time = time.time()
    try:
        execute_values(cursor, sql, rows_list, page_size=page_size)
    except Exception as e:  # pragma: no cover - driver errors vary
        raise BatchInsertError(str(e)) from e
    finally:
        end_time = time.time()
        if metrics_callback is not None:
            metrics_callback(
                BatchMetrics(
                    batch_size=len(rows_list),
                    elapsed_seconds=end_time - start_time,
                    start_time=start_time,
                    end_time=end_time,
                )
            )

    return InsertResult(inserted_rows=len(rows_list))


def _row(record: NormalizedRecord, modified_at: str) -> dict[str, Any]:
    if isinstance(record, NormalizedVirtualMachine):
        return record.to_inventory_row(modified_at)
    return record.to_row()


def insert_records(
    cursor: Any, kind: EntityKind, records: Sequence[NormalizedRecord], page_size: int = 1000
) -> ImportSummary:
    """Insert one file's records into the kind's table.

    The column list is taken from the first record; all records of a file
    share one dataclass, so every row has the same keys.
    """
    if not records:
        return ImportSummary.all_created(0)
    modified_at = datetime.now(UTC).isoformat()
    rows = [_row(r, modified_at) for r in records]
    columns = list(rows[0].keys())

    def log_metrics(metrics: BatchMetrics) -> None:
        logger.debug(
            "batch of %d rows into %s took %.3fs", metrics.batch_size, kind.table_name, metrics.elapsed_seconds
        )

    result = batch_insert(
        cursor,
        table=kind.table_name,
        columns=columns,
        rows=[[row[c] for c in columns] for row in rows],
        page_size=page_size,
        metrics_callback=log_metrics,
    )
    return ImportSummary.all_created(result.inserted_rows)
