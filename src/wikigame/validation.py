from __future__ import annotations

import json
from typing import Any, Optional

import jsonschema

from . import config


class ItemValidationError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


def load_schema(path: str = str(config.ITEM_SCHEMA_PATH)) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)


def item_validator(schema: Optional[dict[str, Any]] = None) -> jsonschema.Draft202012Validator:
    return jsonschema.Draft202012Validator(schema if schema is not None else load_schema())


def validate_item_record(record: Any, validator: jsonschema.Draft202012Validator) -> None:
    errors = sorted(validator.iter_errors(record), key=lambda e: len(list(e.absolute_path)))
    if errors:
        error = errors[0]
        details = {
            "path": list(error.absolute_path),
            "schema_path": list(error.absolute_schema_path),
            "message": error.message,
            "instance": error.instance,
        }
        raise ItemValidationError("SCHEMA_VIOLATION", "Item record does not match the output schema.", details)


def validate_items_file(path: str, schema: Optional[dict[str, Any]] = None) -> int:
    """Validate every line of an items JSONL file and return the record count."""
    validator = item_validator(schema)
    count = 0
    with open(path, "r", encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError as exc:
                details = {"line": line_number, "message": exc.msg, "column": exc.colno}
                raise ItemValidationError("INVALID_JSON", f"Line {line_number} is not valid JSON.", details)
            try:
                validate_item_record(record, validator)
            except ItemValidationError as exc:
                exc.details["line"] = line_number
                raise
            count += 1
    return count
