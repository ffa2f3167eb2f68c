from __future__ import annotations

import logging
from pathlib import Path

from ..models.entity_kind import EntityKind
from ..models.raw_record import RawRecord
from .aliases import REQUIRED_FIELDS, resolve_headers
from .errors import MissingRequiredFieldError, NoRecordsFoundError, UnsupportedFileError
from .tokenizer import tokenize

"""File intake and raw record building.

read_import_file() is the only place that touches the file system; every
other step works on the text it returns, so the same pipeline serves the CLI,
tests and any caller that already holds the CSV content in memory.
"""

__all__ = [
    "EXCEL_NOT_SUPPORTED",
    "UNSUPPORTED_FORMAT",
    "build_raw_records",
    "read_import_file",
]

logger = logging.getLogger(__name__)

EXCEL_NOT_SUPPORTED = (
    "Excel files are not directly supported. "
    "Please save your Excel file as CSV format and upload the CSV file instead."
)
UNSUPPORTED_FORMAT = "Unsupported file format. Please upload a CSV file."

EXCEL_SUFFIXES = {".xlsx", ".xls"}


def read_import_file(path: Path) -> str:
    """Return the text content of a .csv file.

    A UTF-8 byte order mark (written by Excel's "CSV UTF-8" export) is
    dropped so it does not end up glued to the first header.

    Raises:
        UnsupportedFileError: for Excel workbooks and any non-.csv file.
    """
    suffix = path.suffix.lower()
    if suffix in EXCEL_SUFFIXES:
        raise UnsupportedFileError(EXCEL_NOT_SUPPORTED)
    if suffix != ".csv":
        raise UnsupportedFileError(UNSUPPORTED_FORMAT)
    return path.read_text(encoding="utf-8-sig")


def build_raw_records(content: str, kind: EntityKind) -> list[RawRecord]:
    """Tokenize content and fold every data line into a RawRecord.

    Steps:
    1. Split into header + data lines (tokenizer errors propagate)
    2. Resolve headers against the kind's alias table
    3. Zip canonical fields with cells, dropping empty cells
    4. Check required fields, failing on the first offending record
    """
    table = tokenize(content)
    header_map = resolve_headers(kind, table.header)
    if header_map.unknown_headers:
        logger.debug("kind=%s custom headers kept=%s", kind.value, header_map.unknown_headers)

    records: list[RawRecord] = []
    for line_number, cells in table.rows:
        values: dict[str, str] = {}
        custom: dict[str, str] = {}
        for field_name, custom_name, cell in zip(header_map.fields, header_map.custom, cells, strict=True):
            if not cell:
                continue
            if field_name is not None:
                values[field_name] = cell
            elif custom_name is not None:
                custom[custom_name] = cell
        records.append(RawRecord(line_number=line_number, values=values, custom_fields=custom))

    required = REQUIRED_FIELDS[kind]
    for record in records:
        missing = record.missing(required)
        if missing:
            raise MissingRequiredFieldError(record.line_number, missing)

    if kind is EntityKind.VM and not records:
        raise NoRecordsFoundError()
    return records
