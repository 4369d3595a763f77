"""
TOON (Token-Oriented Object Notation) codec for Python.

Encodes JSON-style trees into a compact, indentation-based notation that
writes uniform arrays of objects as tables, and decodes it back.

Usage:
    import toon_codec

    # Encode Python data to TOON
    data = {"users": [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}]}
    encoded = toon_codec.encode(data)
    # users[2]{id,name}:
    #   1,Alice
    #   2,Bob

    # Decode TOON to Python data
    decoded = toon_codec.decode(encoded)

    # With options
    from toon_codec import DecodeOptions, Delimiter, EncodeOptions

    encoded = toon_codec.encode(data, EncodeOptions(delimiter=Delimiter.PIPE, length_marker="#"))
    decoded = toon_codec.decode(encoded, DecodeOptions(strict=False))

Typed values (pydantic models, dataclasses) are handled by ``toon_codec.typed``.
"""

__version__ = "0.3.0"

from .decode import (
    decode,
    decode_default,
    decode_lenient,
    decode_lines,
    decode_no_coerce,
    decode_strict,
)
from .encode import encode, encode_array, encode_default, encode_lines, encode_object
from .errors import (
    DeserializationError,
    InvalidCharacterError,
    InvalidDelimiterError,
    InvalidInputError,
    InvalidStructureError,
    LengthMismatchError,
    ParseError,
    SerializationError,
    ToonError,
    TypeMismatchError,
    UnexpectedEofError,
)
from .normalize import normalize_value as normalize
from .types import DecodeOptions, Delimiter, EncodeOptions, JsonValue

__all__ = [
    # Version
    "__version__",
    # Main API
    "encode",
    "encode_lines",
    "encode_object",
    "encode_array",
    "encode_default",
    "decode",
    "decode_lines",
    "decode_default",
    "decode_strict",
    "decode_lenient",
    "decode_no_coerce",
    "normalize",
    # Options
    "EncodeOptions",
    "DecodeOptions",
    "Delimiter",
    # Types
    "JsonValue",
    # Errors
    "ToonError",
    "InvalidInputError",
    "ParseError",
    "InvalidCharacterError",
    "UnexpectedEofError",
    "TypeMismatchError",
    "InvalidDelimiterError",
    "LengthMismatchError",
    "InvalidStructureError",
    "SerializationError",
    "DeserializationError",
]
