"""JSON serialization of reference and received values.

Snapshot values must be JSON data: None, bool, int, float (finite), str,
lists/tuples and dicts with string keys. Pydantic models are dumped in JSON
mode first. Anything else, including cyclic structures, is rejected with
``SnapshotSerializationError`` before any comparison happens.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel

from snapshot_engine.exceptions import MalformedSnapshotError, SnapshotSerializationError


def to_json_data(value: Any) -> Any:
    """Convert pydantic models to plain data; leave everything else as is."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    return value


def serialize_value(value: Any) -> str:
    """Serialize a value into the compact text stored as a reference."""
    data = to_json_data(value)
    try:
        return json.dumps(data, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SnapshotSerializationError(
            f"Snapshot values must be JSON data: {e}",
            value_type=type(value).__name__,
        ) from e


def normalize_value(value: Any) -> tuple[str, Any]:
    """
    Serialize a received value and parse it back.

    The parsed copy has the same shape a stored reference has after loading
    (tuples become lists, models become dicts), so both sides of a
    comparison live in the same type family.
    """
    text = serialize_value(value)
    return text, json.loads(text)


def parse_reference(text: str) -> Any:
    """Parse stored reference text."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedSnapshotError(
            f"Invalid snapshot format: could not parse snapshot ({e.msg} at line {e.lineno}, column {e.colno}).",
            text,
        ) from e


def pretty(value: Any) -> str:
    """Indented rendering used for diffs and the CLI."""
    return json.dumps(value, indent=2, ensure_ascii=False, sort_keys=False)
