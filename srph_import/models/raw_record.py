from __future__ import annotations

from dataclasses import dataclass, field

"""RawRecord model for the CSV import pipeline.

A RawRecord is one data line of a CSV file after header-alias resolution:
canonical field name -> trimmed, non-empty string value. Empty cells are
never stored, so a missing key means "not provided" and the normalizer is
free to apply its default.
"""

__all__ = [
    "RawRecord",
]


@dataclass(frozen=True)
class RawRecord:
    """Logical representation of a single CSV data line after alias resolution.

    line_number is the 1-based line of the source text (header = line 1), so
    error messages can point at the exact line a user sees in an editor.
    """
    line_number: int  # 1-based source line (header is line 1)
    values: dict[str, str]  # canonical field -> non-empty value
    custom_fields: dict[str, str] = field(default_factory=dict)  # asset kind only: unknown headers

    def get(self, name: str) -> str | None:
        return self.values.get(name)

    def missing(self, required: tuple[str, ...]) -> list[str]:
        """Return the required fields this record has no value for, in declaration order."""
        return [name for name in required if not self.values.get(name)]
