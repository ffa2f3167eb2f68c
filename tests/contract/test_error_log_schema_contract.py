from __future__ import annotations

import json
import re
from pathlib import Path

from srph_import.cli.__main__ import main as cli_main

"""Error log contract: logs/errors-YYYYMMDD-HHMMSS.log, JSON Lines, fixed keys."""

FILE_NAME = re.compile(r"^errors-\d{8}-\d{6}\.log$")
KEYS = {"timestamp", "file", "kind", "line", "error_type", "message"}


def test_error_log_written_for_failed_files(write_config, write_csv, temp_workdir: Path):
    write_csv("assets.csv", "serialNumber,name\n,Laptop\n")
    write_csv("vms.csv", "vmId,vmName\nvm-1,web01,extra\n")
    assert cli_main(["--dry-run"]) == 2

    [log_file] = list((temp_workdir / "logs").iterdir())
    assert FILE_NAME.match(log_file.name)
    rows = [json.loads(l) for l in log_file.read_text(encoding="utf-8").splitlines()]
    assert [set(r) for r in rows] == [KEYS, KEYS]
    assert [(r["file"], r["kind"], r["line"], r["error_type"]) for r in rows] == [
        ("assets.csv", "asset", 2, "MISSING_REQUIRED_FIELD"),
        ("vms.csv", "vm", 2, "COLUMN_COUNT_MISMATCH"),
    ]
    assert rows[0]["message"] == "Line 2 is missing required field: serialNumber"
    for r in rows:
        assert r["timestamp"].endswith("Z")


def test_no_error_log_on_success(write_config, write_csv, temp_workdir: Path):
    write_csv("assets.csv", "serialNumber\nSN1\n")
    assert cli_main(["--dry-run"]) == 0
    assert list((temp_workdir / "logs").iterdir()) == []
