"""JSON schema check for rendered log documents."""

import json
import os
from functools import lru_cache

import jsonschema

DEFAULT_SCHEMA_PATH = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), "schemas", "log_event.json"
)


@lru_cache(maxsize=None)
def _load_validator(schema_path: str) -> jsonschema.Draft202012Validator:
    with open(schema_path, "r", encoding="utf-8") as f:
        return jsonschema.Draft202012Validator(json.load(f))


def validate(document, schema_path: str | None = None) -> tuple[bool, list[str]]:
    """Check a rendered document (dict or JSON string) against the log event schema.

    Errors are prefixed with the JSON path of the offending value, e.g.
    ``$.event.server_side_app.exception: 'name' is a required property``.
    """
    if isinstance(document, (str, bytes)):
        document = json.loads(document)

    validator = _load_validator(schema_path or DEFAULT_SCHEMA_PATH)
    errors = sorted(validator.iter_errors(document), key=lambda e: e.json_path)
    return not errors, [f"{e.json_path}: {e.message}" for e in errors]
