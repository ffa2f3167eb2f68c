from __future__ import annotations

"""Errors raised by the CSV import pipeline.

All of them abort the whole import call: no record of a file reaches the
submission step when any line of it is malformed. Messages are meant to be
shown to the end user as-is.
"""

__all__ = [
    "CsvImportError",
    "UnsupportedFileError",
    "MalformedInputError",
    "ColumnCountMismatchError",
    "MissingRequiredFieldError",
    "NoRecordsFoundError",
    "InvalidFieldValueError",
]


class CsvImportError(Exception):
    """Base class for pipeline errors.

    error_type is the UPPER_SNAKE classification written to the error log;
    line_number is the offending 1-based source line, or -1.
    """
    error_type = "CSV_IMPORT_ERROR"

    def __init__(self, message: str, line_number: int = -1) -> None:
        super().__init__(message)
        self.line_number = line_number


class UnsupportedFileError(CsvImportError):
    """Raised for non-CSV uploads (Excel workbooks and anything else)."""
    error_type = "UNSUPPORTED_FILE"


class MalformedInputError(CsvImportError):
    """Raised when the text lacks a header row plus at least one data row."""
    error_type = "MALFORMED_INPUT"

    def __init__(self, message: str = "CSV file must contain at least a header row and one data row") -> None:
        super().__init__(message)


class ColumnCountMismatchError(CsvImportError):
    error_type = "COLUMN_COUNT_MISMATCH"

    def __init__(self, line_number: int, actual: int, expected: int) -> None:
        super().__init__(
            f"Line {line_number} has {actual} values, but header has {expected} columns",
            line_number,
        )
        self.actual = actual
        self.expected = expected


class MissingRequiredFieldError(CsvImportError):
    error_type = "MISSING_REQUIRED_FIELD"

    def __init__(self, line_number: int, fields: list[str]) -> None:
        label = "field" if len(fields) == 1 else "fields"
        super().__init__(
            f"Line {line_number} is missing required {label}: {', '.join(fields)}",
            line_number,
        )
        self.fields = list(fields)


class NoRecordsFoundError(CsvImportError):
    error_type = "NO_RECORDS_FOUND"

    def __init__(self, message: str = "No valid VM records found in CSV file") -> None:
        super().__init__(message)


class InvalidFieldValueError(CsvImportError):
    """Raised when a typed field (quantity) cannot be coerced from its text."""
    error_type = "INVALID_FIELD_VALUE"

    def __init__(self, line_number: int, field: str, value: str) -> None:
        super().__init__(
            f"Line {line_number} has an invalid {field}: {value!r} is not a whole number",
            line_number,
        )
        self.field = field
        self.value = value
