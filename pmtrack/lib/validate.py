"""
Schema validation for pmtrack plan files.

Plans are checked against a JSON Schema before any project is built from
them, so structural problems surface as one clear error.
"""

import json
from pathlib import Path

import jsonschema
from jsonschema.exceptions import best_match
import yaml


class ValidationError(Exception):
    """Schema validation failed."""

    def __init__(self, schema_name: str, message: str, path: str = None):
        self.schema_name = schema_name
        self.path = path
        super().__init__(f"[{schema_name}] {message}" + (f" at {path}" if path else ""))


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
            raise ValidationError(schema_name, f"Schema file not found: {schema_path}")
        _schema_cache[schema_name] = json.loads(schema_path.read_text())
    return _schema_cache[schema_name]


def validate(data, schema_name: str) -> None:
    """
    Validate data against named schema.

    When several problems exist, the most relevant one is reported.

    Raises:
        ValidationError: If validation fails
    """
    schema = _load_schema(schema_name)
    validator_cls = jsonschema.validators.validator_for(schema)
    error = best_match(validator_cls(schema).iter_errors(data))
    if error is None:
        return

    path = ".".join(str(p) for p in error.absolute_path) if error.absolute_path else "(root)"
    raise ValidationError(schema_name, error.message, path)


def validate_yaml_file(filepath: Path, schema_name: str) -> dict:
    """
    Load YAML file and validate against schema.

    Returns:
        Parsed and validated data

    Raises:
        ValidationError: If file missing, unparsable, or doesn't match schema
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise ValidationError(schema_name, f"File not found: {filepath}")

    try:
        data = yaml.safe_load(filepath.read_text())
    except yaml.YAMLError as e:
        raise ValidationError(schema_name, f"Invalid YAML in {filepath}: {e}") from None

    validate(data, schema_name)
    return data
