from __future__ import annotations

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from tqdm import tqdm

"""File-level progress bar for an import run.

The bar exists only when stdout is a TTY; under cron, CI or a pipe the run
prints nothing but its labeled log lines.
"""

__all__ = [
    "ImportProgress",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ImportProgress:
    """One tick per scanned file, whether it was imported, failed or skipped."""

    def __init__(self, total_files: int, *, description: str = "Importing files") -> None:
        self.description = description
        self.files_done = 0
        self.bar: Any = None
        if is_tty_enabled():
            self.bar = tqdm(total=total_files, desc=description, unit="file", leave=True, ncols=80, ascii=True)

    @contextmanager
    def track(self, path: Path) -> Iterator[None]:
        """Show `path` as the current file; the bar advances when the block exits."""
        if self.bar is not None:
            self.bar.set_description(f"{self.description} ({path.name})")
        try:
            yield
        finally:
            self.files_done += 1
            if self.bar is not None:
                self.bar.update(1)
                self.bar.set_description(self.description)

    def show_counts(self, *, success: int, failed: int, records: int) -> None:
        if self.bar is not None:
            self.bar.set_postfix(success=success, failed=failed, records=records)

    def close(self) -> None:
        if self.bar is not None:
            self.bar.close()
            self.bar = None

    def __enter__(self) -> ImportProgress:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
