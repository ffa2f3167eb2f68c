from __future__ import annotations

import pytest

from srph_import.db.batch_insert import BatchInsertError, InsertResult, batch_insert, insert_records
from srph_import.logging.init import set_debug, setup_logging
from srph_import.models.entity_kind import EntityKind
from srph_import.models.records import NormalizedComponent, NormalizedVirtualMachine


class DummyCursor:
    def __init__(self) -> None:
        self.queries: list[str] = []
        self.rows: list[list] = []


# execute_values is monkeypatched inside the module so the logic can be
# tested without a database

@pytest.fixture(autouse=True)
def patch_execute_values(monkeypatch):
    import srph_import.db.batch_insert as bi
    def fake_execute_values(cursor, sql, rows, page_size=1000, template=None):  # noqa: D401
        cursor.queries.append(sql)
        cursor.rows.extend(rows)
    monkeypatch.setattr(bi, "execute_values", fake_execute_values)
    return fake_execute_values


def test_batch_insert_basic():
    cur = DummyCursor()
    res = batch_insert(cur, table="components", columns=["name", "quantity"], rows=[["RAM", 2], ["SSD", 1]])
    assert isinstance(res, InsertResult)
    assert res.inserted_rows == 2
    assert cur.queries == ['INSERT INTO components ("name","quantity") VALUES %s']


def test_batch_insert_empty_rows():
    cur = DummyCursor()
    res = batch_insert(cur, table="components", columns=["name"], rows=[])
    assert res.inserted_rows == 0
    assert cur.queries == []


def test_batch_insert_missing_driver(monkeypatch):
    import srph_import.db.batch_insert as bi
    monkeypatch.setattr(bi, "execute_values", None)
    with pytest.raises(BatchInsertError):
        batch_insert(DummyCursor(), table="t", columns=["c"], rows=[[1]])


def test_batch_insert_driver_error_wrapped(monkeypatch):
    import srph_import.db.batch_insert as bi
    def failing(cursor, sql, rows, page_size=1000):
        raise RuntimeError("duplicate key value violates unique constraint")
    monkeypatch.setattr(bi, "execute_values", failing)
    with pytest.raises(BatchInsertError, match="duplicate key"):
        batch_insert(DummyCursor(), table="t", columns=["c"], rows=[[1]])


def test_batch_insert_with_metrics_callback():
    captured = []
    batch_insert(
        DummyCursor(), table="components", columns=["name"], rows=[["RAM"], ["SSD"]],
        metrics_callback=captured.append,
    )
    assert len(captured) == 1
    metrics = captured[0]
    assert metrics.batch_size == 2
    assert metrics.elapsed_seconds >= 0
    assert metrics.end_time >= metrics.start_time


def test_insert_records_uses_kind_table_and_snake_case_columns():
    cur = DummyCursor()
    records = [
        NormalizedComponent(name="RAM", category="Memory", quantity=2, notes="Imported via CSV"),
        NormalizedComponent(name="SSD", category="Storage", quantity=1, notes="spare", serial_number="S1"),
    ]
    summary = insert_records(cur, EntityKind.COMPONENT, records)
    assert summary.total == 2 and summary.successful == 2 and summary.failed == 0
    sql = cur.queries[0]
    assert sql.startswith('INSERT INTO components ("name","category","quantity","notes","serial_number"')
    assert cur.rows[1][:5] == ["SSD", "Storage", 1, "spare", "S1"]


def test_insert_records_vm_uses_inventory_columns():
    cur = DummyCursor()
    vm = NormalizedVirtualMachine(
        vm_id="vm-1", vm_name="web01", hypervisor="KVM", vm_ip="10.0.0.5", vm_os="Ubuntu", hostname="esx01",
    )
    insert_records(cur, EntityKind.VM, [vm, NormalizedVirtualMachine(vm_id="vm-2", vm_name="db01", hypervisor="KVM")])
    assert cur.queries[0] == (
        'INSERT INTO vm_inventory ("vm_name","host_name","guest_os","power_state","ip_address","notes",'
        '"created_date","last_modified") VALUES %s'
    )
    assert cur.rows[0][:6] == ["web01", "esx01", "Ubuntu", "Provisioning", "10.0.0.5", None]
    # NOT NULL columns keep the placeholder, nullable ones get NULL
    assert cur.rows[1][:6] == ["db01", "N/A", "N/A", "Provisioning", None, None]
    assert cur.rows[0][6] == cur.rows[0][7]


def test_insert_records_logs_batch_timing(capsys):
    logger = setup_logging()
    set_debug(logger)
    cur = DummyCursor()
    insert_records(cur, EntityKind.COMPONENT, [NormalizedComponent(name="RAM", category="Memory", quantity=2, notes="x")])
    assert "DEBUG batch of 1 rows into components took " in capsys.readouterr().out


def test_insert_records_empty():
    cur = DummyCursor()
    assert insert_records(cur, EntityKind.ASSET, []).total == 0
    assert cur.queries == []
