"""TOON decoder entry points."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .errors import TypeMismatchError
from .parser import Parser
from .types import DecodeOptions, JsonValue

logger = logging.getLogger(__name__)


def decode(text: str, options: DecodeOptions | None = None) -> JsonValue:
    """
    Decode TOON text to a Python value.

    Args:
        text: The TOON-formatted string.
        options: Decoding options. Defaults to strict decoding with literal
            coercion and delimiter auto-detection.

    Returns:
        The decoded Python value. An empty document decodes to ``{}``.

    Raises:
        ParseError: For malformed input.
        LengthMismatchError: If a declared array length is wrong (strict mode).
        InvalidStructureError: If nesting exceeds the depth ceiling.
    """
    if not isinstance(text, str):
        raise TypeMismatchError("string", type(text).__name__)

    opts = options or DecodeOptions()
    logger.debug(
        "Decoding %d characters (strict=%s, coerce_types=%s)", len(text), opts.strict, opts.coerce_types
    )
    return Parser(text, opts).parse()


def decode_lines(lines: Iterable[str], options: DecodeOptions | None = None) -> JsonValue:
    """
    Decode TOON from pre-split lines.

    Args:
        lines: Iterable of line strings, without trailing newlines.
        options: Decoding options.

    Returns:
        The decoded Python value.
    """
    return decode("\n".join(lines), options)


def decode_default(text: str) -> JsonValue:
    """Decode with default options."""
    return decode(text, DecodeOptions())


def decode_strict(text: str) -> JsonValue:
    """Decode enforcing declared lengths and indentation."""
    return decode(text, DecodeOptions(strict=True))


def decode_lenient(text: str) -> JsonValue:
    """Decode without length, indentation-unit or header-consistency checks."""
    return decode(text, DecodeOptions(strict=False))


def decode_no_coerce(text: str) -> JsonValue:
    """Decode with the no-coercion preset. Scanned literals stay typed."""
    return decode(text, DecodeOptions(coerce_types=False))
