from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""Normalized entity records ready for submission.

Each dataclass mirrors the persisted (insert) shape of its entity in the
SRPH-MIS schema. Attribute names are snake_case; `to_payload()` produces the
camelCase JSON body the persistence API expects, and `to_row()` the
snake_case column mapping used for direct database inserts. Virtual machines
go through the legacy inventory shape instead (`to_inventory_payload()` /
`to_inventory_row()`).
"""

__all__ = [
    "NormalizedAsset",
    "NormalizedComponent",
    "NormalizedAccessory",
    "NormalizedVirtualMachine",
    "NormalizedRecord",
    "to_camel",
]


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


class _PayloadMixin:
    # Attributes that are carried on the record but never sent to the API
    _LOCAL_ONLY: tuple[str, ...] = ()

    def to_row(self) -> dict[str, Any]:
        return {
            name: getattr(self, name)
            for name in self.__dataclass_fields__  # type: ignore[attr-defined]
            if name not in self._LOCAL_ONLY
        }

    def to_payload(self) -> dict[str, Any]:
        return {to_camel(name): value for name, value in self.to_row().items()}


@dataclass(frozen=True)
class NormalizedAsset(_PayloadMixin):
    """Asset in InsertAsset shape.

    additional_fields holds values from headers the alias table does not know
    (lower-cased header -> value). They are kept for previews and logging but
    are not part of the API payload.
    """
    asset_tag: str
    name: str
    description: str
    category: str
    status: str
    serial_number: str
    model: str | None = None
    purchase_date: str | None = None
    manufacturer: str | None = None
    purchase_cost: str | None = None
    location: str | None = None
    knox_id: str | None = None
    ip_address: str | None = None
    mac_address: str | None = None
    os_type: str | None = None
    department: str | None = None
    notes: str | None = None
    additional_fields: dict[str, str] = field(default_factory=dict)

    _LOCAL_ONLY = ("additional_fields",)


@dataclass(frozen=True)
class NormalizedComponent(_PayloadMixin):
    name: str
    category: str
    quantity: int
    notes: str
    serial_number: str | None = None
    model: str | None = None
    manufacturer: str | None = None
    description: str | None = None
    purchase_date: str | None = None
    purchase_cost: str | None = None
    location: str | None = None


@dataclass(frozen=True)
class NormalizedAccessory(_PayloadMixin):
    name: str
    category: str
    status: str
    quantity: int
    notes: str
    serial_number: str | None = None
    model: str | None = None
    manufacturer: str | None = None
    description: str | None = None
    purchase_date: str | None = None
    purchase_cost: str | None = None
    location: str | None = None
    assigned_to: int | None = None


@dataclass(frozen=True)
class NormalizedVirtualMachine(_PayloadMixin):
    """Virtual machine inventory entry. Optional text fields default to "N/A"."""
    vm_id: str
    vm_name: str
    hypervisor: str
    vm_status: str = "Provisioning"
    vm_ip: str = "N/A"
    internet_access: bool = False
    vm_os: str = "N/A"
    vm_os_version: str = "N/A"
    hostname: str = "N/A"
    host_model: str = "N/A"
    host_ip: str = "N/A"
    host_os: str = "N/A"
    rack: str = "N/A"
    deployed_by: str = "N/A"
    user: str = "N/A"
    department: str = "N/A"
    start_date: str = "N/A"
    end_date: str = "N/A"
    jira_ticket: str = "N/A"
    remarks: str = "N/A"
    date_deleted: str | None = None

    def to_inventory_payload(self, modified_at: str) -> dict[str, Any]:
        """Body for POST /api/vm-inventory.

        "N/A" placeholders go back to null, and the legacy inventory keys
        (hostName, guestOs, powerState, ...) are filled from their new names.
        """
        body: dict[str, Any] = {
            key: (None if value == "N/A" else value) for key, value in self.to_payload().items()
        }
        body["vmName"] = self.vm_name
        body["hypervisor"] = self.hypervisor
        body["vmStatus"] = self.vm_status or "Provisioning"
        body.update(
            hostName=body["hostname"],
            guestOs=body["vmOs"],
            powerState=body["vmStatus"],
            ipAddress=body["vmIp"],
            macAddress=None,
            notes=body["remarks"],
            cpuCount=None,
            memoryMB=None,
            diskSpaceGB=None,
            datacenter=body["rack"],
            lastModified=modified_at,
        )
        return body

    def to_inventory_row(self, modified_at: str) -> dict[str, Any]:
        """Column mapping for the vm_inventory table.

        The table keeps the legacy inventory shape; host_name, guest_os and
        power_state are NOT NULL there, so the "N/A" placeholder is kept for them.
        """
        def nullable(value: str) -> str | None:
            return None if value == "N/A" else value

        return {
            "vm_name": self.vm_name,
            "host_name": self.hostname,
            "guest_os": self.vm_os,
            "power_state": self.vm_status or "Provisioning",
            "ip_address": nullable(self.vm_ip),
            "notes": nullable(self.remarks),
            "created_date": modified_at,
            "last_modified": modified_at,
        }


NormalizedRecord = NormalizedAsset | NormalizedComponent | NormalizedAccessory | NormalizedVirtualMachine
