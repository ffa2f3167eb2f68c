from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from .entity_kind import EntityKind
from .processing_result import ImportSummary

"""CsvFile domain model and FileStatus enum.

The CsvFile tracks a single source file through the import lifecycle, from
discovery through parsing, normalization and submission.
"""


class FileStatus(Enum):
    """Status of a CsvFile.

    State transitions: pending -> processing -> (success | failed)
    """
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class CsvFile:
    """Processing context for a single import file."""
    path: Path
    name: str
    kind: EntityKind | None
    start_time: datetime | None = None
    end_time: datetime | None = None
    status: FileStatus = FileStatus.PENDING
    record_count: int = 0  # normalized records handed to the sink
    summary: ImportSummary | None = None
    error: str | None = None
