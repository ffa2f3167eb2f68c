"""Domain models for the SRPH-MIS CSV import tool."""

from .config_models import ApiConfig, DatabaseConfig, FileMappingConfig, ImportConfig
from .entity_kind import AccessoryStatus, AssetStatus, EntityKind
from .raw_record import RawRecord
from .records import (
    NormalizedAccessory,
    NormalizedAsset,
    NormalizedComponent,
    NormalizedRecord,
    NormalizedVirtualMachine,
)

__all__ = [
    # Configuration models
    "ApiConfig",
    "DatabaseConfig",
    "FileMappingConfig",
    "ImportConfig",
    # Entity kinds / statuses
    "AccessoryStatus",
    "AssetStatus",
    "EntityKind",
    # Pipeline records
    "RawRecord",
    "NormalizedAccessory",
    "NormalizedAsset",
    "NormalizedComponent",
    "NormalizedRecord",
    "NormalizedVirtualMachine",
]
