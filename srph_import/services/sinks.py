from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Protocol

from ..api.client import ImportApiClient
from ..db.batch_insert import insert_records
from ..models.entity_kind import EntityKind
from ..models.processing_result import ImportSummary
from ..models.records import NormalizedRecord

"""Submission sinks: where normalized records go after a file is parsed.

- ApiSink: the persistence API import endpoints (default)
- DatabaseSink: direct INSERT, one transaction per file
- process_all(sink=None) is the dry-run mode (nothing is sent)
"""

__all__ = [
    "Sink",
    "ApiSink",
    "DatabaseSink",
]

logger = logging.getLogger(__name__)


class Sink(Protocol):
    name: str

    def submit(self, kind: EntityKind, records: Sequence[NormalizedRecord]) -> ImportSummary: ...


class ApiSink:
    name = "api"

    def __init__(self, client: ImportApiClient) -> None:
        self.client = client

    def submit(self, kind: EntityKind, records: Sequence[NormalizedRecord]) -> ImportSummary:
        return self.client.submit(kind, records)


class DatabaseSink:
    """Insert records through a psycopg2 cursor with a per-file transaction.

    A failing file is rolled back on its own; files already committed stay.
    """
    name = "database"

    def __init__(self, cursor: Any, page_size: int = 1000) -> None:
        self.cursor = cursor
        self.page_size = page_size

    def submit(self, kind: EntityKind, records: Sequence[NormalizedRecord]) -> ImportSummary:
        self.cursor.execute("BEGIN")
        try:
            summary = insert_records(self.cursor, kind, records, page_size=self.page_size)
        except Exception:
            try:
                self.cursor.execute("ROLLBACK")
            except Exception:  # pragma: no cover - connection already gone
                logger.debug("rollback failed", exc_info=True)
            raise
        self.cursor.execute("COMMIT")
        return summary
