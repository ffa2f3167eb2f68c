from __future__ import annotations

import re

from srph_import.cli.__main__ import main as cli_main

"""SUMMARY line format contract: one line per run, fixed key order."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+files=([0-9]+)/(\1)\s+success=([0-9]+)\s+failed=([0-9]+)\s+"
    r"records=([0-9]+)\s+created=([0-9]+)\s+updated=([0-9]+)\s+rejected=([0-9]+)\s+"
    r"skipped_files=([0-9]+)\s+elapsed_sec=([0-9]+\.?[0-9]*)$"
)


def test_summary_pattern_example_line():
    line = (
        "SUMMARY files=3/3 success=2 failed=1 records=12 created=10 updated=2 "
        "rejected=0 skipped_files=0 elapsed_sec=0.84"
    )
    assert SUMMARY_PATTERN.match(line)


def test_cli_emits_exactly_one_summary_line(write_config, write_csv, capsys):
    write_csv("vms.csv", "vmId,vmName,hypervisor\nvm-1,web01,KVM\n")
    write_csv("unmapped.csv", "a\n1\n")
    cli_main(["--dry-run"])
    lines = [l for l in capsys.readouterr().out.splitlines() if l.startswith("SUMMARY")]
    assert len(lines) == 1
    m = SUMMARY_PATTERN.match(lines[0])
    assert m, lines[0]
    assert m.group(1) == "2"
    assert m.group(9) == "1"  # skipped_files
