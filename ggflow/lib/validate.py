"""
Schema validation for gg configuration.

Config values are checked against a JSON Schema before they are used,
so a typo in the config file fails loudly instead of being ignored.
"""

import json
from pathlib import Path

import jsonschema

from ggflow.lib.errors import ConfigError


# Cache loaded schemas
_schema_cache: dict[str, dict] = {}


def _get_schemas_dir() -> Path:
    """Get path to schemas directory."""
    return Path(__file__).parent.parent / "schemas"


def _load_schema(schema_name: str) -> dict:
    """Load schema by name, with caching."""
    if schema_name not in _schema_cache:
        schema_path = _get_schemas_dir() / f"{schema_name}.schema.json"
        if not schema_path.exists():
            raise ConfigError(f"[{schema_name}] Schema file not found: {schema_path}")
        _schema_cache[schema_name] = json.loads(schema_path.read_text())
    return _schema_cache[schema_name]


def validate(data: dict, schema_name: str, source: str = "") -> None:
    """
    Validate data against named schema.

    Args:
        data: Dictionary to validate
        schema_name: Schema name (e.g., "config")
        source: Where the data came from, for the error message

    Raises:
        ConfigError: If validation fails
    """
    schema = _load_schema(schema_name)

    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        path = ".".join(str(p) for p in e.absolute_path) if e.absolute_path else "(root)"
        where = f" in {source}" if source else ""
        raise ConfigError(f"invalid configuration{where}: {e.message} at {path}") from None
