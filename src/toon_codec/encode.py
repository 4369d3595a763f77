"""TOON encoder implementation."""

from __future__ import annotations

import logging
from collections.abc import Generator
from typing import Any

from .classifier import ArrayShape, classify_array
from .constants import MAX_DEPTH
from .errors import TypeMismatchError
from .normalize import normalize_value
from .primitives import encode_key, encode_primitive, format_array_header
from .types import EncodeOptions, JsonValue
from .validation import validate_depth

logger = logging.getLogger(__name__)


def encode(value: Any, options: EncodeOptions | None = None) -> str:
    """
    Encode a Python value to TOON format.

    Args:
        value: The value to encode (dict, list, or primitive).
        options: Encoding options.

    Returns:
        The TOON-formatted string.

    Raises:
        TypeMismatchError: If the value contains an unsupported type.
        InvalidStructureError: If nesting exceeds the depth ceiling.
    """
    return "\n".join(encode_lines(value, options))


def encode_default(value: Any) -> str:
    """Encode with default options."""
    return encode(value, EncodeOptions())


def encode_lines(
    value: Any, options: EncodeOptions | None = None
) -> Generator[str, None, None]:
    """
    Encode a Python value to TOON format, yielding lines.

    Args:
        value: The value to encode.
        options: Encoding options.

    Yields:
        Lines of TOON output.
    """
    opts = options or EncodeOptions()
    yield from _encode_root(normalize_value(value), opts)


def encode_object(value: Any, options: EncodeOptions | None = None) -> str:
    """
    Encode a value that must be an object at the root.

    Raises:
        TypeMismatchError: If the value is not a mapping.
    """
    normalized = normalize_value(value)
    if not isinstance(normalized, dict):
        raise TypeMismatchError("object", _kind_name(normalized))
    return "\n".join(_encode_root(normalized, options or EncodeOptions()))


def encode_array(value: Any, options: EncodeOptions | None = None) -> str:
    """
    Encode a value that must be an array at the root.

    Raises:
        TypeMismatchError: If the value is not a list-like container.
    """
    normalized = normalize_value(value)
    if not isinstance(normalized, list):
        raise TypeMismatchError("array", _kind_name(normalized))
    return "\n".join(_encode_root(normalized, options or EncodeOptions()))


def _kind_name(value: JsonValue) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _encode_root(value: JsonValue, opts: EncodeOptions) -> Generator[str, None, None]:
    if isinstance(value, dict):
        yield from _encode_object_lines(value, opts, 0, 0)
    elif isinstance(value, list):
        yield from _encode_array("", None, value, opts, 1, 0)
    else:
        yield encode_primitive(value, opts.delimiter)


def _encode_object_lines(
    obj: dict, opts: EncodeOptions, depth: int, level: int
) -> Generator[str, None, None]:
    """Encode an object's key-value pairs at one indentation depth."""
    validate_depth(level, MAX_DEPTH)
    indent = opts.indent * depth

    for key, value in obj.items():
        yield from _encode_entry(indent, key, value, opts, depth + 1, level)


def _encode_entry(
    lead: str,
    key: str,
    value: JsonValue,
    opts: EncodeOptions,
    child_depth: int,
    level: int,
) -> Generator[str, None, None]:
    """Encode one key and its value; lead is the text before the key."""
    if isinstance(value, dict):
        yield f"{lead}{encode_key(key, opts.delimiter)}:"
        if value:
            yield from _encode_object_lines(value, opts, child_depth, level + 1)
        else:
            validate_depth(level + 1, MAX_DEPTH)
    elif isinstance(value, list):
        yield from _encode_array(lead, key, value, opts, child_depth, level + 1)
    else:
        encoded_value = encode_primitive(value, opts.delimiter)
        yield f"{lead}{encode_key(key, opts.delimiter)}: {encoded_value}"


def _encode_array(
    lead: str,
    key: str | None,
    arr: list,
    opts: EncodeOptions,
    body_depth: int,
    level: int,
) -> Generator[str, None, None]:
    """Encode an array header and body; rows and items go at body_depth."""
    validate_depth(level, MAX_DEPTH)

    if not arr:
        yield lead + format_array_header(0, key, options=opts)
        return

    shape, fields = classify_array(arr)
    logger.debug("Encoding %d-element array as %s", len(arr), shape.value)
    delimiter = opts.delimiter

    if shape is ArrayShape.TABULAR:
        validate_depth(level + 1, MAX_DEPTH)
        yield lead + format_array_header(len(arr), key, fields, opts)
        indent = opts.indent * body_depth
        for row in arr:
            yield indent + delimiter.char.join(encode_primitive(row[f], delimiter) for f in fields)
    elif shape is ArrayShape.PRIMITIVE:
        values = delimiter.char.join(encode_primitive(v, delimiter) for v in arr)
        yield f"{lead}{format_array_header(len(arr), key, options=opts)} {values}"
    else:
        yield lead + format_array_header(len(arr), key, options=opts)
        for item in arr:
            yield from _encode_list_item(item, opts, body_depth, level + 1)


def _encode_list_item(
    item: JsonValue, opts: EncodeOptions, depth: int, level: int
) -> Generator[str, None, None]:
    """Encode a list item (after the - marker)."""
    indent = opts.indent * depth

    if isinstance(item, dict):
        validate_depth(level, MAX_DEPTH)
        if not item:
            yield f"{indent}-"
        else:
            yield from _encode_object_list_item(item, opts, depth, level)
    elif isinstance(item, list):
        yield from _encode_array(f"{indent}- ", None, item, opts, depth + 1, level)
    else:
        yield f"{indent}- {encode_primitive(item, opts.delimiter)}"


def _encode_object_list_item(
    obj: dict, opts: EncodeOptions, depth: int, level: int
) -> Generator[str, None, None]:
    """Encode an object as a list item with its first field on the hyphen line."""
    entries = iter(obj.items())
    first_key, first_value = next(entries)

    # Remaining fields sit one level past the hyphen, so the first field's
    # own body goes one level further.
    yield from _encode_entry(f"{opts.indent * depth}- ", first_key, first_value, opts, depth + 2, level)

    child_indent = opts.indent * (depth + 1)
    for key, value in entries:
        yield from _encode_entry(child_indent, key, value, opts, depth + 2, level)
