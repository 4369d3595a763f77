"""String utilities for TOON encoding/decoding."""

from __future__ import annotations

import unicodedata
from enum import Enum

from .constants import BRACKET_CHARS, KEYWORDS
from .errors import InvalidInputError
from .types import Delimiter

# TOON only allows these 5 escape sequences
ESCAPE_MAP = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

UNESCAPE_MAP = {
    "\\": "\\",
    '"': '"',
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_DIGITS = frozenset("0123456789")
_NUMERIC_CHARS = _DIGITS | frozenset(".eE+-")


class QuotingContext(Enum):
    """Syntactic position a string is written in."""

    KEY = "key"
    """Object keys and tabular field names."""

    VALUE = "value"
    """Scalars and array elements."""


def escape_string(value: str) -> str:
    """
    Escape a string for use in TOON quoted strings.

    Only the 5 valid TOON escape sequences are produced:
    - \\\\ (backslash)
    - \\" (double quote)
    - \\n (newline)
    - \\r (carriage return)
    - \\t (tab)

    Args:
        value: The string to escape.

    Returns:
        The escaped string (without surrounding quotes).
    """
    return "".join(ESCAPE_MAP.get(char, char) for char in value)


def unescape_string(value: str) -> str:
    """
    Unescape a TOON string that was inside quotes.

    Args:
        value: The string content (without surrounding quotes).

    Returns:
        The unescaped string.

    Raises:
        InvalidInputError: If an invalid escape sequence is found or backslash at end.
    """
    result = []
    i = 0
    while i < len(value):
        char = value[i]
        if char == "\\":
            if i + 1 >= len(value):
                raise InvalidInputError("Backslash at end of string")
            next_char = value[i + 1]
            if next_char not in UNESCAPE_MAP:
                raise InvalidInputError(f"Invalid escape sequence: \\{next_char}")
            result.append(UNESCAPE_MAP[next_char])
            i += 2
        else:
            result.append(char)
            i += 1
    return "".join(result)


def quote_string(value: str) -> str:
    """Wrap a string in quotes, escaping its content."""
    return f'"{escape_string(value)}"'


def is_keyword(value: str) -> bool:
    """Check for the reserved literals (case-sensitive)."""
    return value in KEYWORDS


def is_numeric_like(value: str) -> bool:
    """
    Check if a string would be read back as a number.

    Matches an optional leading '-', a digit, then only digits, '.', 'e',
    'E' and signs, and the whole run must parse as a number. A leading zero
    followed by another digit ("007") is text, not a number.
    """
    s = value[1:] if value.startswith("-") else value
    if not s or s[0] not in _DIGITS:
        return False

    if len(s) > 1 and s[0] == "0" and s[1] in _DIGITS:
        return False

    if not all(c in _NUMERIC_CHARS for c in s):
        return False

    try:
        float(value)
    except ValueError:
        return False
    return True


def is_literal_like(value: str) -> bool:
    """Check if a string looks like null/true/false or a number."""
    return is_keyword(value) or is_numeric_like(value)


def _has_control_char(value: str) -> bool:
    return any(unicodedata.category(c) == "Cc" for c in value)


def needs_quoting(
    value: str,
    delimiter: Delimiter | str = Delimiter.COMMA,
    context: QuotingContext = QuotingContext.VALUE,
) -> bool:
    """
    Check if a string must be quoted to be read back unchanged.

    Args:
        value: The string to check.
        delimiter: The active delimiter character.
        context: Where the string is written. A lone '-' or a '- ' prefix
            only collides with the list marker in value position.

    Returns:
        True if the string needs quotes.
    """
    if not value:
        return True

    if value != value.strip():
        return True

    if is_literal_like(value):
        return True

    if any(c in BRACKET_CHARS for c in value):
        return True

    if ":" in value:
        return True

    if Delimiter.parse(delimiter).char in value:
        return True

    if "\\" in value or '"' in value or _has_control_char(value):
        return True

    if context is QuotingContext.VALUE and (value == "-" or value.startswith("- ")):
        return True

    return False

