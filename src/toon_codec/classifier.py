"""Pick the cheapest valid encoding for an array."""

from __future__ import annotations

from enum import Enum

from .types import JsonValue


class ArrayShape(Enum):
    """How an array is written."""

    TABULAR = "tabular"
    PRIMITIVE = "primitive"
    NESTED = "nested"


def is_primitive(value: JsonValue) -> bool:
    """Check if value is a primitive (not dict or list)."""
    return not isinstance(value, (dict, list))


def tabular_fields(arr: list) -> list[str] | None:
    """
    Return the shared field list if the array can be written as a table.

    Every element must be an object with the same keys in the same order as
    the first one, the key list must be non-empty with no empty names, and
    every value must be a primitive.
    """
    if not arr or not all(isinstance(item, dict) for item in arr):
        return None

    fields = list(arr[0])
    if not fields or not all(fields):
        return None

    for item in arr:
        if list(item) != fields:
            return None
        if not all(is_primitive(v) for v in item.values()):
            return None

    return fields


def classify_array(arr: list) -> tuple[ArrayShape, list[str] | None]:
    """
    Classify an array by the first form that fits: tabular, primitive, nested.

    Empty arrays are written as a bare header and should be handled before
    calling this.

    Returns:
        The shape and, for tabular arrays, the field list.
    """
    fields = tabular_fields(arr)
    if fields is not None:
        return ArrayShape.TABULAR, fields

    if all(is_primitive(v) for v in arr):
        return ArrayShape.PRIMITIVE, None

    return ArrayShape.NESTED, None
