from __future__ import annotations

import fnmatch
from dataclasses import dataclass

from .entity_kind import EntityKind

"""Config dataclasses for the SRPH-MIS CSV import tool.

These are the typed form of config/import.yml; defaults are applied in
srph_import.config.loader. Environment variables take precedence over the
values stored here (resolved in the CLI, not in the loader).
"""


@dataclass(frozen=True)
class DatabaseConfig:
    """Database connection configuration, used by the `database` sink."""
    host: str | None
    port: int | None
    user: str | None
    password: str | None
    database: str | None
    dsn: str | None


@dataclass(frozen=True)
class ApiConfig:
    """Persistence API endpoint used by the `api` sink and the VM export."""
    base_url: str
    timeout_seconds: float = 30.0
    token: str | None = None
    verify_ssl: bool = True


@dataclass(frozen=True)
class FileMappingConfig:
    """Maps a file name (or glob pattern) to the entity kind it is imported as."""
    pattern: str
    kind: EntityKind

    def matches(self, file_name: str) -> bool:
        # 大文字小文字は区別しない (Windows 由来のファイル名対策)
        return fnmatch.fnmatch(file_name.lower(), self.pattern.lower())


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration object for an import run."""
    source_directory: str
    file_mappings: list[FileMappingConfig]
    api: ApiConfig
    database: DatabaseConfig
    sink: str = "api"  # "api" | "database"

    def kind_for(self, file_name: str) -> EntityKind | None:
        """Return the kind of the first mapping matching file_name (config order)."""
        for mapping in self.file_mappings:
            if mapping.matches(file_name):
                return mapping.kind
        return None
