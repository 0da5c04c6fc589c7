"""
JSON Schema checks for prd.json and generated story arrays.

The task store validates on every read and before every write; the setup
commands validate agent output before it is allowed near the task list.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema.exceptions import best_match

SCHEMAS_DIR = Path(__file__).resolve().parent.parent / "schemas"


class ValidationError(Exception):
    """A document did not match its schema."""

    def __init__(self, schema_name: str, message: str, path: str = None):
        self.schema_name = schema_name
        self.path = path
        detail = f"{message} at {path}" if path else message
        super().__init__(f"[{schema_name}] {detail}")


@lru_cache(maxsize=None)
def _validator(schema_name: str):
    schema_path = SCHEMAS_DIR / f"{schema_name}.schema.json"
    if not schema_path.exists():
        raise ValidationError(schema_name, f"Schema file not found: {schema_path}")

    schema = json.loads(schema_path.read_text())
    validator_cls = jsonschema.validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def validate(data: Any, schema_name: str) -> None:
    """Raise ValidationError for the most relevant schema violation in data.

    The error path is dotted (``userStories.0.id``), or ``(root)`` when the
    document itself is the wrong shape.
    """
    error = best_match(_validator(schema_name).iter_errors(data))
    if error is None:
        return

    path = ".".join(str(p) for p in error.absolute_path) or "(root)"
    raise ValidationError(schema_name, error.message, path)


def validate_before_write(data: Any, schema_name: str, filepath: Path) -> None:
    try:
        validate(data, schema_name)
    except ValidationError as e:
        raise ValidationError(schema_name, f"Refusing to write invalid data to {filepath.name}: {e}") from None
