"""Primitive value and header encoding for TOON."""

from __future__ import annotations

import math

from .errors import TypeMismatchError
from .string_utils import QuotingContext, needs_quoting, quote_string
from .types import Delimiter, EncodeOptions, JsonPrimitive


def encode_primitive(value: JsonPrimitive, delimiter: Delimiter = Delimiter.COMMA) -> str:
    """
    Encode a primitive value to TOON format.

    Args:
        value: The primitive value (str, int, float, bool, or None).
        delimiter: The active delimiter for quoting checks.

    Returns:
        The encoded string representation.

    Raises:
        TypeMismatchError: If value is not a primitive.
    """
    if value is None:
        return "null"

    if isinstance(value, bool):
        return "true" if value else "false"

    if isinstance(value, (int, float)):
        return encode_number(value)

    if isinstance(value, str):
        return encode_string_literal(value, delimiter)

    raise TypeMismatchError("primitive", type(value).__name__)


def encode_number(value: int | float) -> str:
    """Encode a number to TOON format."""
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return "null"
        if value == 0.0 and math.copysign(1.0, value) < 0:
            return "0"
        # repr keeps a '.' or exponent, so the value reads back as a float
        return repr(value)

    return str(value)


def encode_string_literal(value: str, delimiter: Delimiter = Delimiter.COMMA) -> str:
    """
    Encode a string value, with or without quotes.

    Args:
        value: The string to encode.
        delimiter: The active delimiter for quoting checks.

    Returns:
        The encoded string (quoted if necessary).
    """
    if needs_quoting(value, delimiter, QuotingContext.VALUE):
        return quote_string(value)
    return value


def encode_key(key: str, delimiter: Delimiter = Delimiter.COMMA) -> str:
    """
    Encode an object key for TOON format.

    Keys need quoting if they contain special characters or internal spaces.
    """
    if " " in key or needs_quoting(key, delimiter, QuotingContext.KEY):
        return quote_string(key)
    return key


def encode_field_name(name: str, delimiter: Delimiter = Delimiter.COMMA) -> str:
    """Encode a tabular field name. Field names are quoted like keys."""
    return encode_key(name, delimiter)


def format_array_header(
    length: int,
    key: str | None = None,
    fields: list[str] | None = None,
    options: EncodeOptions | None = None,
) -> str:
    """
    Format an array header line.

    Args:
        length: The array length.
        key: Optional key name (None for root arrays or list items).
        fields: Optional field names for tabular format.
        options: Supplies the delimiter (written in the brackets unless it is
            a comma) and the length marker.

    Returns:
        The formatted header string, ending with ':'.
    """
    opts = options or EncodeOptions()
    delimiter = opts.delimiter

    if delimiter is Delimiter.COMMA:
        bracket = f"[{opts.format_length(length)}]"
    else:
        bracket = f"[{opts.format_length(length)}{delimiter.char}]"

    fields_part = ""
    if fields:
        encoded_fields = [encode_field_name(f, delimiter) for f in fields]
        fields_part = "{" + delimiter.char.join(encoded_fields) + "}"

    if key is not None:
        return f"{encode_key(key, delimiter)}{bracket}{fields_part}:"
    return f"{bracket}{fields_part}:"
