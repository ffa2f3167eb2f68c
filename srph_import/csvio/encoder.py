from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ..models.records import NormalizedVirtualMachine

"""VM inventory export: records -> CSV text.

Column order is fixed and uses the same camelCase names the VM importer
accepts, so an exported file can be imported again (values with commas excepted,
see csvio.tokenizer).
"""

__all__ = [
    "VM_EXPORT_COLUMNS",
    "encode_vms",
]

VM_EXPORT_COLUMNS = (
    "vmId", "vmName", "vmStatus", "vmIp", "internetAccess", "vmOs", "vmOsVersion",
    "hypervisor", "hostname", "hostModel", "hostIp", "hostOs", "rack",
    "deployedBy", "user", "department", "startDate", "endDate", "jiraTicket", "remarks",
)


def _escape(value: str) -> str:
    if "," in value or '"' in value:
        return '"' + value.replace('"', '""') + '"'
    return value


def _cell(column: str, value: Any) -> str:
    if column == "internetAccess":
        return "true" if value else "false"
    if value is None:
        return ""
    return _escape(str(value))


def encode_vms(vms: Sequence[NormalizedVirtualMachine | Mapping[str, Any]]) -> str:
    """Render VMs as CSV text, one line per VM after the header line.

    Accepts normalized records or camelCase mappings as returned by the VM
    inventory API. Returns "" (no header either) for an empty sequence.
    """
    if not vms:
        return ""
    lines = [",".join(VM_EXPORT_COLUMNS)]
    for vm in vms:
        data = vm.to_payload() if isinstance(vm, NormalizedVirtualMachine) else vm
        lines.append(",".join(_cell(col, data.get(col)) for col in VM_EXPORT_COLUMNS))
    return "\n".join(lines)
