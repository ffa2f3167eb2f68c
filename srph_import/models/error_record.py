from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the JSON Lines error log.

Each failed file (or failed record reported back by the persistence API)
becomes one ErrorRecord. line=-1 is the sentinel for file-level errors where
no specific CSV line is involved (unsupported extension, HTTP failure, ...).
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: CSV file name being processed
        kind: Entity kind the file was imported as ("-" when unresolved)
        line: 1-based source line, -1 when the error is not line-specific
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Human-readable message, as shown to the user
    """
    timestamp: str
    file: str
    kind: str
    line: int  # -1 許容 (ファイル単位エラー)
    error_type: str
    message: str

    @staticmethod
    def create(file: str, kind: str, line: int, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            kind=kind,
            line=line,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
