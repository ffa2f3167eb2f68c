from __future__ import annotations

from pathlib import Path

"""Downloadable asset import template.

Static content: three sample assets (Laptop / Desktop / Server) with every
asset column the importer understands, so users can start from a file whose
headers are known to resolve.
"""

__all__ = [
    "ASSET_TEMPLATE_COLUMNS",
    "ASSET_TEMPLATE_FILENAME",
    "asset_template_csv",
    "write_asset_template",
]

ASSET_TEMPLATE_FILENAME = "asset-import-template.csv"

ASSET_TEMPLATE_COLUMNS = (
    "assetTag", "name", "category", "status", "serialNumber", "model", "purchaseDate",
    "manufacturer", "purchaseCost", "location", "knoxId", "ipAddress", "macAddress",
    "osType", "department", "description", "warranty", "supplier",
)

# Free-text columns are written quoted
_QUOTED = {"name", "model", "manufacturer", "location", "osType", "department", "description", "supplier"}

_SAMPLE_ASSETS: tuple[dict[str, str], ...] = (
    {
        "assetTag": "SRPH-LAP-001",
        "name": "Sample Laptop",
        "category": "Laptop",
        "status": "available",
        "serialNumber": "SN123456789",
        "model": "ThinkPad X1 Carbon",
        "purchaseDate": "2023-01-15",
        "manufacturer": "Lenovo",
        "purchaseCost": "1200.00",
        "location": "Head Office - Room 201",
        "knoxId": "KNOX001",
        "ipAddress": "192.168.1.100",
        "macAddress": "00:1A:2B:3C:4D:5E",
        "osType": "Windows 11 Pro",
        "department": "IT Department",
        "description": "High-performance laptop for development work",
        "warranty": "2026-01-15",
        "supplier": "Tech Solutions Inc",
    },
    {
        "assetTag": "SRPH-DES-001",
        "name": "Sample Desktop",
        "category": "Desktop",
        "status": "deployed",
        "serialNumber": "SN987654321",
        "model": "OptiPlex 7090",
        "purchaseDate": "2023-02-10",
        "manufacturer": "Dell",
        "purchaseCost": "800.00",
        "location": "Branch Office - Floor 3",
        "knoxId": "KNOX002",
        "ipAddress": "192.168.1.101",
        "macAddress": "00:1A:2B:3C:4D:5F",
        "osType": "Windows 10 Pro",
        "department": "Finance Department",
        "description": "Desktop computer for office productivity",
        "warranty": "2026-02-10",
        "supplier": "Dell Direct",
    },
    {
        "assetTag": "SRPH-SER-001",
        "name": "Sample Server",
        "category": "Server",
        "status": "available",
        "serialNumber": "SN456789123",
        "model": "PowerEdge R740",
        "purchaseDate": "2023-03-20",
        "manufacturer": "Dell",
        "purchaseCost": "3500.00",
        "location": "Data Center - Rack A1",
        "knoxId": "",
        "ipAddress": "192.168.1.50",
        "macAddress": "00:1A:2B:3C:4D:60",
        "osType": "Windows Server 2022",
        "department": "IT Department",
        "description": "Production server for web applications",
        "warranty": "2028-03-20",
        "supplier": "Enterprise Solutions",
    },
)


def asset_template_csv() -> str:
    """Return the template as CSV text (header + 3 sample rows, no trailing newline)."""
    lines = [",".join(ASSET_TEMPLATE_COLUMNS)]
    for sample in _SAMPLE_ASSETS:
        cells = [f'"{sample[col]}"' if col in _QUOTED else sample[col] for col in ASSET_TEMPLATE_COLUMNS]
        lines.append(",".join(cells))
    return "\n".join(lines)


def write_asset_template(path: Path) -> Path:
    """Write the template to path (a directory gets the default file name)."""
    if path.is_dir():
        path = path / ASSET_TEMPLATE_FILENAME
    path.write_text(asset_template_csv(), encoding="utf-8")
    return path
