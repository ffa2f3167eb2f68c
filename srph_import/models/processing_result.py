from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

"""Result models for the SRPH-MIS import tool.

ImportSummary is the per-file outcome reported by the submission side
(`{total, successful, updated?, failed, errors}`); FileStat and
ProcessingResult aggregate those outcomes across one CLI run.
"""


@dataclass(frozen=True)
class ImportSummary:
    """Outcome of submitting one batch of normalized records.

    successful counts newly created records, updated counts upserts of
    existing ones, failed counts records the persistence layer rejected.
    """
    total: int
    successful: int
    failed: int
    updated: int = 0
    errors: list[str] = field(default_factory=list)

    @classmethod
    def from_response(cls, data: Mapping[str, Any]) -> ImportSummary:
        """Build from the JSON body returned by an `/api/<kind>/import` endpoint."""
        return cls(
            total=int(data.get("total", 0)),
            successful=int(data.get("successful", 0)),
            failed=int(data.get("failed", 0)),
            updated=int(data.get("updated") or 0),
            errors=[str(e) for e in data.get("errors") or []],
        )

    @classmethod
    def all_created(cls, count: int) -> ImportSummary:
        return cls(total=count, successful=count, failed=0)


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics."""
    file_name: str
    kind: str  # entity kind value, "-" when the file could not be mapped
    status: str  # success/failed
    total: int  # normalized records handed to the sink
    successful: int
    updated: int
    failed: int  # records rejected by the sink
    elapsed_seconds: float
    error: str | None = None


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of one import run, rendered as the SUMMARY line."""
    success_files: int
    failed_files: int
    skipped_files: int  # files with no kind mapping
    total_records: int
    created_records: int
    updated_records: int
    rejected_records: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None
