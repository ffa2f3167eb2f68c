from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import ApiConfig, DatabaseConfig, FileMappingConfig, ImportConfig
from ..models.entity_kind import EntityKind

"""Config loader.

Responsibilities:
- Load YAML config (default config/import.yml)
- Validate against the packaged JSON schema (import_schema.json)
- Apply defaults (sink=api, api.base_url=http://localhost:5000, timeout 30s)
"""

SCHEMA_PATH = Path(__file__).with_name("import_schema.json")

DEFAULT_CONFIG_PATH = Path("config/import.yml")
DEFAULT_API_URL = "http://localhost:5000"
DEFAULT_TIMEOUT_SECONDS = 30.0


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or unreadable, or data failing validation
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config validation failed: top level must be a mapping")

    _validate_config_schema(data)

    mappings = [
        FileMappingConfig(pattern=str(pattern), kind=EntityKind.parse(kind))
        for pattern, kind in data["file_mappings"].items()
    ]
    api_raw = data.get("api") or {}
    api = ApiConfig(
        base_url=str(api_raw.get("base_url") or DEFAULT_API_URL).rstrip("/"),
        timeout_seconds=float(api_raw.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)),
        token=api_raw.get("token"),
        verify_ssl=bool(api_raw.get("verify_ssl", True)),
    )
    db_raw = data.get("database") or {}
    db = DatabaseConfig(
        host=db_raw.get("host"),
        port=db_raw.get("port"),
        user=db_raw.get("user"),
        password=db_raw.get("password"),
        database=db_raw.get("database"),
        dsn=db_raw.get("dsn"),
    )
    return ImportConfig(
        source_directory=data["source_directory"],
        file_mappings=mappings,
        api=api,
        database=db,
        sink=data.get("sink", "api"),
    )
