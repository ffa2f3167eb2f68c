from __future__ import annotations
import pytest
from pathlib import Path
from srph_import.config.loader import DEFAULT_API_URL, load_config, ConfigError
from srph_import.models.entity_kind import EntityKind


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.source_directory == "./data"
    assert cfg.sink == "api"
    assert cfg.api.base_url == "http://api.test"
    assert cfg.api.timeout_seconds == 5.0
    assert cfg.api.verify_ssl is True
    assert cfg.database.port == 5432
    assert [m.kind for m in cfg.file_mappings] == [
        EntityKind.ASSET, EntityKind.COMPONENT, EntityKind.ACCESSORY, EntityKind.VM,
    ]


def test_kind_for_is_case_insensitive_and_ordered(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.kind_for("Assets-2024.CSV") is EntityKind.ASSET
    assert cfg.kind_for("vm_inventory.csv") is EntityKind.VM
    assert cfg.kind_for("readme.csv") is None


def test_load_config_defaults(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "import.yml"
    cfg_path.write_text("source_directory: ./data\nfile_mappings:\n  '*.csv': vm\n", encoding="utf-8")
    cfg = load_config(cfg_path)
    assert cfg.sink == "api"
    assert cfg.api.base_url == DEFAULT_API_URL
    assert cfg.api.timeout_seconds == 30.0
    assert cfg.api.token is None
    assert cfg.database.host is None


def test_load_config_missing_file(temp_workdir: Path):
    missing = temp_workdir / "config" / "not_exists.yml"
    with pytest.raises(ConfigError):
        load_config(missing)


def test_load_config_missing_required(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("source_directory: ./data\n", "")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value) and "required property" in str(e.value)


def test_load_config_unknown_kind(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace('"vm*.csv": vm', '"vm*.csv": servers')
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_invalid_sink(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("sink: api", "sink: ftp")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(write_config)


def test_load_config_extra_field(write_config: Path):
    # additionalProperties: false
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_invalid_yaml(write_config: Path):
    write_config.write_text("source_directory: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "invalid yaml" in str(e.value)


def test_load_config_top_level_not_mapping(write_config: Path):
    write_config.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(write_config)
