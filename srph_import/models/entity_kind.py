from __future__ import annotations

from enum import Enum

"""Entity kinds and canonical status values for the SRPH-MIS import tool.

Every CSV file is imported as exactly one entity kind. The kind decides the
alias table, the required fields, the normalizer and the submission target
(API endpoint plural / database table).
"""

__all__ = [
    "EntityKind",
    "AssetStatus",
    "AccessoryStatus",
]


class EntityKind(Enum):
    """Record types supported by the import pipeline."""
    ASSET = "asset"
    COMPONENT = "component"
    ACCESSORY = "accessory"
    VM = "vm"

    @property
    def plural(self) -> str:
        """Collection name used by the import endpoint and request body key."""
        return _PLURALS[self]

    @property
    def table_name(self) -> str:
        return _TABLES[self]

    @classmethod
    def parse(cls, value: str) -> EntityKind:
        """Accept either the singular value or the endpoint plural (case-insensitive)."""
        text = value.strip().lower()
        for kind in cls:
            if text in (kind.value, kind.plural):
                return kind
        raise ValueError(f"unknown entity kind: {value!r}")


_PLURALS = {
    EntityKind.ASSET: "assets",
    EntityKind.COMPONENT: "components",
    EntityKind.ACCESSORY: "accessories",
    EntityKind.VM: "vms",
}

_TABLES = {
    EntityKind.ASSET: "assets",
    EntityKind.COMPONENT: "components",
    EntityKind.ACCESSORY: "accessories",
    EntityKind.VM: "vm_inventory",
}


class AssetStatus(str, Enum):
    AVAILABLE = "available"
    DEPLOYED = "deployed"
    PENDING = "pending"
    OVERDUE = "overdue"
    ARCHIVED = "archived"
    ON_HAND = "on-hand"


class AccessoryStatus(str, Enum):
    AVAILABLE = "available"
    BORROWED = "borrowed"
    RETURNED = "returned"
    DEFECTIVE = "defective"
