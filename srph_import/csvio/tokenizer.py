from __future__ import annotations

from dataclasses import dataclass

from .errors import ColumnCountMismatchError, MalformedInputError

"""Row splitter for import CSV text.

Naive splitting: lines are split on "\\n" and cells on ",". A quoted cell
has one layer of enclosing double quotes removed, but a comma inside quotes
still splits the cell (no RFC 4180 state machine). The asset template never
contains such cells; a VM export with commas in a value does not re-import.
"""

__all__ = [
    "TokenizedCsv",
    "split_cells",
    "tokenize",
]

DELIMITER = ","
QUOTE = '"'


@dataclass(frozen=True)
class TokenizedCsv:
    header: list[str]
    rows: list[tuple[int, list[str]]]  # (1-based source line, cells)


def _unquote(cell: str) -> str:
    if len(cell) >= 2 and cell.startswith(QUOTE) and cell.endswith(QUOTE):
        return cell[1:-1]
    return cell


def split_cells(line: str) -> list[str]:
    """Split one line into trimmed, unquoted cells."""
    return [_unquote(cell.strip()) for cell in line.split(DELIMITER)]


def tokenize(content: str) -> TokenizedCsv:
    """Split raw CSV text into the header cells and the data rows.

    Whitespace-only lines are skipped. Every retained data line must have
    exactly as many cells as the header.

    Raises:
        MalformedInputError: fewer than two non-empty lines.
        ColumnCountMismatchError: at the first data line with a wrong cell count.
    """
    lines = content.split("\n")
    if sum(1 for line in lines if line.strip()) < 2:
        raise MalformedInputError()

    header = split_cells(lines[0])
    rows: list[tuple[int, list[str]]] = []
    for index, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        cells = split_cells(line)
        if len(cells) != len(header):
            raise ColumnCountMismatchError(index, len(cells), len(header))
        rows.append((index, cells))
    return TokenizedCsv(header=header, rows=rows)
