"""Value normalization applied before encoding."""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import date, datetime, time
from typing import Any

from .constants import MAX_DEPTH
from .errors import TypeMismatchError
from .types import JsonValue
from .validation import validate_depth


def normalize_value(value: Any, _depth: int = 0) -> JsonValue:
    """
    Normalize a value into the JSON tree model.

    Converts:
    - NaN and +/-Infinity to None
    - -0.0 to 0
    - Tuples to lists, sets to lists sorted by their string form
    - date, time and datetime objects to ISO strings
    - Non-string mapping keys to strings

    Args:
        value: The value to normalize.

    Returns:
        A JSON-compatible value.

    Raises:
        TypeMismatchError: For values with no tree representation.
        InvalidStructureError: If nesting exceeds the depth ceiling.
    """
    if value is None or isinstance(value, (bool, str)):
        return value

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        if value == 0.0 and math.copysign(1.0, value) < 0:
            return 0
        return value

    if isinstance(value, Mapping):
        validate_depth(_depth, MAX_DEPTH)
        return {_normalize_key(k): normalize_value(v, _depth + 1) for k, v in value.items()}

    if isinstance(value, (list, tuple)):
        validate_depth(_depth, MAX_DEPTH)
        return [normalize_value(v, _depth + 1) for v in value]

    if isinstance(value, (set, frozenset)):
        validate_depth(_depth, MAX_DEPTH)
        return [normalize_value(v, _depth + 1) for v in sorted(value, key=str)]

    if isinstance(value, (datetime, date, time)):
        return value.isoformat()

    raise TypeMismatchError("tree value", type(value).__name__)


def _normalize_key(key: Any) -> str:
    # Same spelling json.dumps uses for non-string keys
    if isinstance(key, str):
        return key
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, (int, float)):
        return str(key)
    raise TypeMismatchError("string key", type(key).__name__)
