from __future__ import annotations

import re
from collections.abc import Callable
from datetime import UTC, datetime

from ..models.entity_kind import AccessoryStatus, AssetStatus, EntityKind
from ..models.raw_record import RawRecord
from ..models.records import (
    NormalizedAccessory,
    NormalizedAsset,
    NormalizedComponent,
    NormalizedRecord,
    NormalizedVirtualMachine,
)
from .errors import InvalidFieldValueError

"""Record normalizer: RawRecord -> entity-shaped record.

Applies defaults, synthesizes missing identifiers, coerces quantities and
booleans, and maps free-text status values to canonical ones. No
cross-record checks (duplicate serials / tags) happen here; uniqueness is
enforced by the persistence layer.
"""

__all__ = [
    "Clock",
    "generate_asset_tag",
    "normalize_asset",
    "normalize_component",
    "normalize_accessory",
    "normalize_vm",
    "normalize_records",
]

Clock = Callable[[], datetime]

ASSET_TAG_PREFIX = "SRPH"
DEFAULT_ASSET_CATEGORY = "Laptop"
ASSET_DESCRIPTION_FALLBACK = "Imported from CSV"
IMPORT_NOTE = "Imported via CSV"
NOT_AVAILABLE = "N/A"
DEFAULT_VM_STATUS = "Provisioning"
TRUTHY_TEXT = {"true", "yes", "1"}
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+", re.ASCII)


def _utc_now() -> datetime:
    return datetime.now(UTC)


def generate_asset_tag(category: str | None, index: int, now: Clock = _utc_now) -> str:
    """Build SRPH-{CAT}-{6 digit timestamp}-{row:03d}.

    The middle part is the last six digits of the epoch time in milliseconds,
    so generated tags depend on the clock; pass a fixed `now` for
    reproducible output. index is the 0-based position of the record in
    its file.
    """
    code = category.upper()[:3] if category else "AST"
    millis = int(now().timestamp() * 1000)
    stamp = str(millis)[-6:].zfill(6)
    return f"{ASSET_TAG_PREFIX}-{code}-{stamp}-{index + 1:03d}"


def _asset_name(raw: RawRecord) -> str:
    name = raw.get("name")
    if name:
        return name
    manufacturer = raw.get("manufacturer") or ""
    model_or_category = raw.get("model") or raw.get("category") or ""
    joined = f"{manufacturer} {model_or_category}".strip()
    return joined or f"Asset-{raw.get('serialNumber')}"


def _asset_description(raw: RawRecord) -> str:
    description = raw.get("description")
    if description:
        return description
    parts = []
    if raw.get("knoxId"):
        parts.append(f"Knox ID: {raw.get('knoxId')}")
    if raw.get("supplier"):
        parts.append(f"Supplier: {raw.get('supplier')}")
    if raw.get("warranty"):
        parts.append(f"Warranty: {raw.get('warranty')}")
    return ". ".join(parts) or ASSET_DESCRIPTION_FALLBACK


def _asset_status(value: str | None) -> str:
    if not value:
        return AssetStatus.AVAILABLE.value
    folded = value.lower()
    for status in AssetStatus:
        if status.value == folded:
            return status.value
    # Unknown statuses pass through; the API decides whether to accept them
    return value


def normalize_asset(raw: RawRecord, index: int, now: Clock = _utc_now) -> NormalizedAsset:
    return NormalizedAsset(
        asset_tag=raw.get("assetTag") or generate_asset_tag(raw.get("category"), index, now),
        name=_asset_name(raw),
        description=_asset_description(raw),
        category=raw.get("category") or DEFAULT_ASSET_CATEGORY,
        status=_asset_status(raw.get("status")),
        serial_number=raw.values["serialNumber"],
        model=raw.get("model"),
        purchase_date=raw.get("purchaseDate"),
        manufacturer=raw.get("manufacturer"),
        purchase_cost=raw.get("purchaseCost"),
        location=raw.get("location"),
        knox_id=raw.get("knoxId"),
        ip_address=raw.get("ipAddress"),
        mac_address=raw.get("macAddress"),
        os_type=raw.get("osType"),
        department=raw.get("department"),
        notes=raw.get("notes"),
        additional_fields=dict(raw.custom_fields),
    )


def _quantity(raw: RawRecord) -> int:
    value = raw.get("quantity")
    if not value:
        return 1
    # plain ASCII digits only; int() would also take "1_000" and non-ASCII digits
    if INTEGER_PATTERN.fullmatch(value) is None:
        raise InvalidFieldValueError(raw.line_number, "quantity", value)
    return int(value)


def normalize_component(raw: RawRecord) -> NormalizedComponent:
    return NormalizedComponent(
        name=raw.values["name"],
        category=raw.values["category"],
        quantity=_quantity(raw),
        notes=raw.get("notes") or IMPORT_NOTE,
        serial_number=raw.get("serialNumber"),
        model=raw.get("model"),
        manufacturer=raw.get("manufacturer"),
    )


def _accessory_status(value: str | None) -> str:
    # Substring match, so "not borrowed" still maps to borrowed
    text = (value or "").lower()
    if "borrowed" in text:
        return AccessoryStatus.BORROWED.value
    if "returned" in text:
        return AccessoryStatus.RETURNED.value
    if "defective" in text:
        return AccessoryStatus.DEFECTIVE.value
    return AccessoryStatus.AVAILABLE.value


def normalize_accessory(raw: RawRecord) -> NormalizedAccessory:
    return NormalizedAccessory(
        name=raw.values["name"],
        category=raw.values["category"],
        status=_accessory_status(raw.get("status")),
        quantity=_quantity(raw),
        notes=raw.get("notes") or IMPORT_NOTE,
        serial_number=raw.get("serialNumber"),
        model=raw.get("model"),
        manufacturer=raw.get("manufacturer"),
    )


def normalize_vm(raw: RawRecord) -> NormalizedVirtualMachine:
    def text(name: str, default: str = NOT_AVAILABLE) -> str:
        return raw.get(name) or default

    return NormalizedVirtualMachine(
        vm_id=raw.values["vmId"],
        vm_name=raw.values["vmName"],
        hypervisor=raw.values["hypervisor"],
        vm_status=text("vmStatus", DEFAULT_VM_STATUS),
        vm_ip=text("vmIp"),
        internet_access=(raw.get("internetAccess") or "").lower() in TRUTHY_TEXT,
        vm_os=text("vmOs"),
        vm_os_version=text("vmOsVersion"),
        hostname=text("hostname"),
        host_model=text("hostModel"),
        host_ip=text("hostIp"),
        host_os=text("hostOs"),
        rack=text("rack"),
        deployed_by=text("deployedBy"),
        user=text("user"),
        department=text("department"),
        start_date=text("startDate"),
        end_date=text("endDate"),
        jira_ticket=text("jiraTicket"),
        remarks=text("remarks"),
        date_deleted=None,
    )


def normalize_records(
    kind: EntityKind, raw_records: list[RawRecord], now: Clock | None = None
) -> list[NormalizedRecord]:
    """Normalize every RawRecord of one file, preserving order."""
    if kind is EntityKind.ASSET:
        clock = now or _utc_now
        return [normalize_asset(raw, index, clock) for index, raw in enumerate(raw_records)]
    if kind is EntityKind.COMPONENT:
        return [normalize_component(raw) for raw in raw_records]
    if kind is EntityKind.ACCESSORY:
        return [normalize_accessory(raw) for raw in raw_records]
    if kind is EntityKind.VM:
        return [normalize_vm(raw) for raw in raw_records]
    raise ValueError(f"unsupported entity kind: {kind}")
