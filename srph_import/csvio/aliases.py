from __future__ import annotations

from dataclasses import dataclass

from ..models.entity_kind import EntityKind

"""Header alias tables and header resolution.

Users export spreadsheets from many tools, so one canonical field is accepted
under several spellings (camelCase collapsed to lower case, snake_case,
Title Case, common abbreviations). Lookups are done on the lower-cased,
trimmed header text.
"""

__all__ = [
    "ALIASES",
    "REQUIRED_FIELDS",
    "HeaderMap",
    "resolve_headers",
]


def _table(groups: dict[str, tuple[str, ...]]) -> dict[str, str]:
    table: dict[str, str] = {}
    for canonical, spellings in groups.items():
        for spelling in spellings:
            # first group wins on a duplicated spelling
            table.setdefault(spelling, canonical)
    return table


ASSET_ALIASES = _table({
    "knoxId": ("knoxid", "knox_id", "knox id"),
    "serialNumber": ("serialnumber", "serial_number", "serial number", "serial"),
    "assetTag": ("assettag", "asset tag", "asset_tag", "tag"),
    "name": ("name", "asset name", "asset_name", "devicename", "device_name", "device name"),
    "category": ("category", "type", "device type", "device_type"),
    "status": ("status", "state"),
    "model": ("model", "model_number", "model number"),
    "manufacturer": ("manufacturer", "brand", "make", "vendor"),
    "purchaseDate": (
        "purchasedate", "purchase_date", "purchase date",
        "acquired_date", "acquired date", "dateacquired", "date_acquired",
    ),
    "purchaseCost": ("purchasecost", "purchase_cost", "purchase cost", "cost", "price", "value"),
    "location": ("location", "site", "office", "building", "room"),
    "ipAddress": ("ipaddress", "ip address", "ip_address", "ip"),
    "macAddress": ("macaddress", "mac address", "mac_address", "mac"),
    "osType": ("ostype", "os type", "os_type", "os", "operating_system", "operating system"),
    "department": ("department", "dept", "division", "unit"),
    "description": ("description", "notes", "comments", "remarks"),
    "warranty": ("warranty", "warranty_date", "warranty date", "warranty_expiry", "warranty expiry"),
    "supplier": ("supplier", "vendor_name", "vendor name"),
})

COMPONENT_ALIASES = _table({
    "name": ("name",),
    "category": ("category",),
    "quantity": ("quantity",),
    "serialNumber": ("serialnumber", "serial number", "serial_number"),
    "manufacturer": ("manufacturer",),
    "model": ("model",),
    "notes": ("notes",),
})

ACCESSORY_ALIASES = {**COMPONENT_ALIASES, "status": "status"}

VM_ALIASES = _table({
    "vmId": ("vmid", "vm_id", "vm id"),
    "vmName": ("vmname", "vm_name", "vm name", "name"),
    "vmStatus": ("vmstatus", "vm_status", "vm status", "status"),
    "vmIp": ("vmip", "vm_ip", "vm ip", "ip", "ipaddress", "ip_address"),
    "internetAccess": ("internetaccess", "internet_access", "internet access", "internet"),
    "vmOs": ("vmos", "vm_os", "vm os", "os", "operating_system"),
    "vmOsVersion": ("vmosversion", "vm_os_version", "vm os version", "os_version", "osversion"),
    "hypervisor": ("hypervisor",),
    "hostname": ("hostname", "host_name", "host name"),
    "hostModel": ("hostmodel", "host_model", "host model", "model"),
    "hostIp": ("hostip", "host_ip", "host ip"),
    "hostOs": ("hostos", "host_os", "host os"),
    "rack": ("rack",),
    "deployedBy": ("deployedby", "deployed_by", "deployed by"),
    "user": ("user",),
    "department": ("department",),
    "startDate": ("startdate", "start_date", "start date"),
    "endDate": ("enddate", "end_date", "end date"),
    "jiraTicket": ("jiraticket", "jira_ticket", "jira ticket", "ticket"),
    "remarks": ("remarks", "notes", "description"),
})

ALIASES: dict[EntityKind, dict[str, str]] = {
    EntityKind.ASSET: ASSET_ALIASES,
    EntityKind.COMPONENT: COMPONENT_ALIASES,
    EntityKind.ACCESSORY: ACCESSORY_ALIASES,
    EntityKind.VM: VM_ALIASES,
}

REQUIRED_FIELDS: dict[EntityKind, tuple[str, ...]] = {
    EntityKind.ASSET: ("serialNumber",),
    EntityKind.COMPONENT: ("name", "category"),
    EntityKind.ACCESSORY: ("name", "category"),
    EntityKind.VM: ("vmId", "vmName", "hypervisor"),
}

# Only asset records keep headers the table does not know
_KEEPS_CUSTOM_FIELDS = frozenset({EntityKind.ASSET})


@dataclass(frozen=True)
class HeaderMap:
    """Positional resolution of one header row.

    fields[i] is the canonical field for column i, or None when the column
    is a custom field (see custom[i]) or is dropped.
    """
    fields: list[str | None]
    custom: list[str | None]

    @property
    def unknown_headers(self) -> list[str]:
        return [name for name in self.custom if name is not None]


def resolve_headers(kind: EntityKind, header_cells: list[str]) -> HeaderMap:
    """Map each header cell to its canonical field for the given kind."""
    table = ALIASES[kind]
    keep_custom = kind in _KEEPS_CUSTOM_FIELDS
    fields: list[str | None] = []
    custom: list[str | None] = []
    for cell in header_cells:
        key = cell.strip().lower()
        canonical = table.get(key)
        fields.append(canonical)
        custom.append(key if canonical is None and keep_custom and key else None)
    return HeaderMap(fields=fields, custom=custom)
