"""CSV import / export pipeline.

tokenize -> resolve headers / build RawRecords -> normalize, per entity kind.
"""

from __future__ import annotations

from ..models.entity_kind import EntityKind
from ..models.records import NormalizedRecord
from .encoder import VM_EXPORT_COLUMNS, encode_vms
from .errors import (
    ColumnCountMismatchError,
    CsvImportError,
    InvalidFieldValueError,
    MalformedInputError,
    MissingRequiredFieldError,
    NoRecordsFoundError,
    UnsupportedFileError,
)
from .normalizer import Clock, normalize_records
from .reader import build_raw_records, read_import_file
from .template import asset_template_csv, write_asset_template

__all__ = [
    "VM_EXPORT_COLUMNS",
    "ColumnCountMismatchError",
    "CsvImportError",
    "InvalidFieldValueError",
    "MalformedInputError",
    "MissingRequiredFieldError",
    "NoRecordsFoundError",
    "UnsupportedFileError",
    "asset_template_csv",
    "build_raw_records",
    "encode_vms",
    "normalize_records",
    "parse_import",
    "read_import_file",
    "write_asset_template",
]


def parse_import(content: str, kind: EntityKind, now: Clock | None = None) -> list[NormalizedRecord]:
    """Run the whole pipeline over CSV text and return normalized records."""
    return normalize_records(kind, build_raw_records(content, kind), now=now)
