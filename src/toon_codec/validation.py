"""Structural checks shared by the encoder and the strict decoder."""

from __future__ import annotations

from .constants import MAX_DEPTH
from .errors import InvalidStructureError, LengthMismatchError


def validate_depth(depth: int, max_depth: int = MAX_DEPTH) -> None:
    """Raise if nesting depth exceeds the ceiling."""
    if depth > max_depth:
        raise InvalidStructureError(f"Maximum nesting depth of {max_depth} exceeded")


def validate_field_name(name: str) -> None:
    """Raise if a tabular field name is empty."""
    if not name:
        raise InvalidStructureError("Field name cannot be empty")


def validate_length(expected: int, found: int) -> None:
    """Raise if a declared array length differs from the actual count."""
    if expected != found:
        raise LengthMismatchError(expected, found)
