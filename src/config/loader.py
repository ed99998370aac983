from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import ManifestConfig, RecordDefaults

"""Config loader for the manifest exporter.

Responsibilities:
- Load an optional YAML config file
- Validate it against manifest_config_schema.json (unknown keys rejected)
- Fill anything not given from the ManifestConfig / RecordDefaults defaults
"""

__all__ = [
    "SCHEMA_PATH",
    "ConfigError",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("manifest_config_schema.json")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: the schema file is missing or unreadable, or the config
            data violates it (wrong types, unknown keys, bad prefix length ...)
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


def load_config(path: Path) -> ManifestConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    base = ManifestConfig()
    defaults_raw = data.get("defaults", {})
    defaults = RecordDefaults(
        date=defaults_raw.get("date", base.defaults.date),
        courier=defaults_raw.get("courier", base.defaults.courier),
        status=defaults_raw.get("status", base.defaults.status),
        quantity=defaults_raw.get("quantity", base.defaults.quantity),
    )
    return ManifestConfig(
        tracking_prefix=data.get("tracking_prefix", base.tracking_prefix),
        defaults=defaults,
        filename_template=data.get("filename_template", base.filename_template),
        output_directory=data.get("output_directory", base.output_directory),
    )
