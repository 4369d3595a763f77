"""Type definitions for TOON encoder/decoder."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .constants import DEFAULT_INDENT, DEFAULT_INDENT_SIZE, DELIMITER_CHARS, STRUCTURAL_CHARS
from .errors import InvalidDelimiterError, InvalidInputError

# JSON type aliases
JsonPrimitive = str | int | float | bool | None
JsonArray = list["JsonValue"]
JsonObject = dict[str, "JsonValue"]
JsonValue = JsonPrimitive | JsonArray | JsonObject


class Delimiter(str, Enum):
    """Separator between sibling primitives and tabular cells."""

    COMMA = ","
    TAB = "\t"
    PIPE = "|"

    @property
    def char(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Delimiter | str) -> Delimiter:
        """
        Resolve a delimiter from a member, its character, or its name.

        Raises:
            InvalidDelimiterError: For anything that is not comma, tab or pipe.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            if value in DELIMITER_CHARS:
                return cls(value)
            named = _DELIMITER_NAMES.get(value.lower())
            if named is not None:
                return named
        raise InvalidDelimiterError(f"{value!r} (expected comma, tab or pipe)")


_DELIMITER_NAMES = {
    "comma": Delimiter.COMMA,
    "tab": Delimiter.TAB,
    "pipe": Delimiter.PIPE,
}

# Characters a length marker may not use: they would be read back as part of
# the number, as whitespace, or as structure.
_FORBIDDEN_MARKER_CHARS = frozenset("0123456789+-.\"\\ \t\r\n") | STRUCTURAL_CHARS | DELIMITER_CHARS


@dataclass(frozen=True)
class EncodeOptions:
    """Options for TOON encoding."""

    delimiter: Delimiter = Delimiter.COMMA
    """Delimiter for inline arrays and tabular rows."""

    length_marker: str | None = None
    """Optional character written before array lengths, e.g. '#' gives [#3]."""

    indent: str = DEFAULT_INDENT
    """String written once per nesting level. An int means that many spaces."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "delimiter", Delimiter.parse(self.delimiter))

        indent = self.indent
        if isinstance(indent, int) and not isinstance(indent, bool):
            indent = " " * indent
        if not isinstance(indent, str) or not indent or indent.strip(" "):
            raise InvalidInputError(f"indent must be one or more spaces, got {self.indent!r}")
        object.__setattr__(self, "indent", indent)

        marker = self.length_marker
        if marker is not None:
            if not isinstance(marker, str) or len(marker) != 1 or marker in _FORBIDDEN_MARKER_CHARS:
                raise InvalidInputError(f"length_marker must be a single non-numeric symbol, got {marker!r}")

    def format_length(self, length: int) -> str:
        """Render an array length with the optional marker."""
        if self.length_marker:
            return f"{self.length_marker}{length}"
        return str(length)


@dataclass(frozen=True)
class DecodeOptions:
    """Options for TOON decoding."""

    delimiter: Delimiter | None = None
    """Pinned delimiter. None detects it from the first array header."""

    strict: bool = True
    """Enforce declared lengths, indentation and header consistency."""

    coerce_types: bool = True
    """No-coercion preset switch. Literals are typed by the scanner in both
    modes; ambiguous bare text ("007", "1e999") always stays a string."""

    indent: int = DEFAULT_INDENT_SIZE
    """Indentation unit checked in strict mode."""

    def __post_init__(self) -> None:
        if self.delimiter is not None:
            object.__setattr__(self, "delimiter", Delimiter.parse(self.delimiter))
        if isinstance(self.indent, bool) or not isinstance(self.indent, int) or self.indent < 1:
            raise InvalidInputError(f"indent must be a positive integer, got {self.indent!r}")


@dataclass
class ArrayHeaderInfo:
    """Parsed array header information."""

    length: int
    """Declared array length."""

    delimiter: Delimiter | None = None
    """Delimiter written inside the brackets, if any."""

    fields: list[str] | None = None
    """Field names for tabular format (None for non-tabular)."""

    line_indent: int = 0
    """Indentation the array body must exceed."""

    @property
    def is_tabular(self) -> bool:
        return self.fields is not None
