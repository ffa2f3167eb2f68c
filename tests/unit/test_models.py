from __future__ import annotations

import pytest

from srph_import.models.entity_kind import EntityKind
from srph_import.models.processing_result import ImportSummary
from srph_import.models.raw_record import RawRecord
from srph_import.models.records import NormalizedAccessory, NormalizedComponent, to_camel


@pytest.mark.parametrize("text,kind", [("asset", EntityKind.ASSET), ("Accessories", EntityKind.ACCESSORY), (" vms ", EntityKind.VM)])
def test_entity_kind_parse(text: str, kind: EntityKind):
    assert EntityKind.parse(text) is kind


def test_entity_kind_parse_unknown():
    with pytest.raises(ValueError):
        EntityKind.parse("servers")


def test_entity_kind_names():
    assert EntityKind.ACCESSORY.plural == "accessories"
    assert EntityKind.VM.plural == "vms"
    assert EntityKind.VM.table_name == "vm_inventory"


def test_raw_record_missing_in_declaration_order():
    rec = RawRecord(line_number=2, values={"vmId": "1"})
    assert rec.missing(("vmId", "vmName", "hypervisor")) == ["vmName", "hypervisor"]


def test_to_camel():
    assert to_camel("vm_os_version") == "vmOsVersion"
    assert to_camel("name") == "name"


def test_payload_and_row_shapes():
    comp = NormalizedComponent(name="RAM", category="Memory", quantity=2, notes="n", serial_number="S1")
    assert comp.to_row()["serial_number"] == "S1"
    payload = comp.to_payload()
    assert payload["serialNumber"] == "S1"
    assert payload["quantity"] == 2
    acc = NormalizedAccessory(name="Mouse", category="P", status="available", quantity=1, notes="n")
    assert acc.to_payload()["assignedTo"] is None


def test_import_summary_from_response():
    summary = ImportSummary.from_response(
        {"total": 3, "successful": 1, "updated": 1, "failed": 1, "errors": ["Row 3: duplicate"], "message": "x"}
    )
    assert summary == ImportSummary(total=3, successful=1, failed=1, updated=1, errors=["Row 3: duplicate"])


def test_import_summary_tolerates_missing_keys():
    summary = ImportSummary.from_response({"total": 2, "successful": 2})
    assert summary.failed == 0 and summary.updated == 0 and summary.errors == []
