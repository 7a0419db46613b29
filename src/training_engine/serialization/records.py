"""Plain-dict serialization for engine results.

Converts the frozen result dataclasses (snapshots, severities, prescriptions,
race plans, failures) into dicts of JSON primitives for storage or transport.

All functions are pure (no I/O).
"""

from __future__ import annotations

import dataclasses
import json
from datetime import date, datetime
from enum import Enum
from typing import Any


def to_record(value: Any) -> Any:
    """Convert a result object to JSON-safe primitives.

    Dataclasses become dicts keyed by field name, enums their values, dates
    ISO strings, tuples lists. Dict keys that are enums are replaced by their
    values.
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_record(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {_key(k): to_record(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_record(v) for v in value]
    return value


def to_json_string(value: Any, indent: int = 2) -> str:
    """Convert a result object to a JSON string."""
    return json.dumps(to_record(value), indent=indent)


def _key(key: Any) -> Any:
    if isinstance(key, Enum):
        return key.value
    if isinstance(key, date):
        return key.isoformat()
    return key
