# Shared pytest fixtures
from __future__ import annotations
import tempfile
from datetime import UTC, datetime
from pathlib import Path
import pytest

from srph_import.logging.init import reset_logging


@pytest.fixture(autouse=True)
def fresh_logging():
    # handlers bind sys.stdout at setup time; rebuild them for every capsys
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
file_mappings:
  "assets*.csv": asset
  "components*.csv": component
  "accessories*.csv": accessories
  "vm*.csv": vm
sink: api
api:
  base_url: http://api.test
  timeout_seconds: 5
database:
  host: localhost
  port: 5432
  user: appuser
  password: secret
  database: appdb
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def write_csv(temp_workdir: Path):
    """Write a file into ./data and return its path."""
    def _write(name: str, content: str) -> Path:
        path = temp_workdir / "data" / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture()
def fixed_clock():
    # 2024-01-01T00:00:00Z -> epoch millis 1704067200000 -> stamp "200000"
    moment = datetime(2024, 1, 1, tzinfo=UTC)
    return lambda: moment
