"""Exception hierarchy for TOON encoding/decoding."""

from __future__ import annotations


class ToonError(ValueError):
    """Base class for every error raised by the codec."""


class InvalidInputError(ToonError):
    """Malformed input or configuration that fits no narrower category."""

    def __init__(self, message: str):
        super().__init__(f"Invalid input: {message}")
        self.message = message


class ParseError(ToonError):
    """A structural expectation was violated while parsing."""

    def __init__(self, line: int, column: int, message: str):
        super().__init__(f"Parse error at line {line}, column {column}: {message}")
        self.line = line
        self.column = column
        self.message = message


class InvalidCharacterError(ToonError):
    """A character that is not allowed at this position."""

    def __init__(self, char: str, position: int):
        super().__init__(f"Invalid character {char!r} at position {position}")
        self.char = char
        self.position = position


class UnexpectedEofError(ToonError):
    """Input ended inside a quoted string or an unfinished structure."""

    def __init__(self, context: str | None = None):
        message = "Unexpected end of input"
        if context:
            message = f"{message} ({context})"
        super().__init__(message)
        self.context = context


class TypeMismatchError(ToonError):
    """A value of the wrong type was supplied."""

    def __init__(self, expected: str, found: str):
        super().__init__(f"Type mismatch: expected {expected}, found {found}")
        self.expected = expected
        self.found = found


class InvalidDelimiterError(ToonError):
    """Unsupported delimiter, or a header delimiter that conflicts with the active one."""

    def __init__(self, message: str):
        super().__init__(f"Invalid delimiter: {message}")
        self.message = message


class LengthMismatchError(ToonError):
    """Declared array length differs from the number of elements present."""

    def __init__(self, expected: int, found: int):
        super().__init__(f"Array length mismatch: expected {expected}, found {found}")
        self.expected = expected
        self.found = found


class InvalidStructureError(ToonError):
    """Structural limits were violated (depth ceiling, empty field name)."""

    def __init__(self, message: str):
        super().__init__(f"Invalid structure: {message}")
        self.message = message


class SerializationError(ToonError):
    """A typed value could not be converted to the tree model."""

    def __init__(self, message: str):
        super().__init__(f"Serialization error: {message}")
        self.message = message


class DeserializationError(ToonError):
    """A decoded tree could not be converted to the requested type."""

    def __init__(self, message: str):
        super().__init__(f"Deserialization error: {message}")
        self.message = message
