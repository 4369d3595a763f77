"""Typed convenience layer over the tree model, using pydantic.

Anything pydantic can adapt works here: ``BaseModel`` subclasses,
dataclasses, ``TypedDict`` and plain annotated containers.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticSchemaGenerationError
from pydantic_core import PydanticSerializationError

from .decode import decode
from .encode import encode
from .errors import DeserializationError, SerializationError
from .types import DecodeOptions, EncodeOptions

T = TypeVar("T")


def to_tree(obj: Any) -> Any:
    """
    Convert a typed value to plain tree data.

    Raises:
        SerializationError: If pydantic cannot serialize the value.
    """
    try:
        return TypeAdapter(type(obj)).dump_python(obj, mode="json")
    except (PydanticSerializationError, PydanticSchemaGenerationError) as e:
        raise SerializationError(str(e)) from e


def from_tree(data: Any, type_: type[T]) -> T:
    """
    Validate plain tree data into the requested type.

    Raises:
        DeserializationError: If the data does not fit the type.
    """
    try:
        return TypeAdapter(type_).validate_python(data)
    except ValidationError as e:
        raise DeserializationError(str(e)) from e
    except PydanticSchemaGenerationError as e:
        raise DeserializationError(str(e)) from e


def encode_model(obj: Any, options: EncodeOptions | None = None) -> str:
    """Serialize a typed value and encode it to TOON."""
    return encode(to_tree(obj), options)


def decode_model(text: str, type_: type[T], options: DecodeOptions | None = None) -> T:
    """Decode TOON text and validate it into the requested type."""
    return from_tree(decode(text, options), type_)
