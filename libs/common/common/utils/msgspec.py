from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from pathlib import PurePath
from typing import Any

import msgspec
from pydantic import BaseModel

Serializer = Callable[[Any], Any]

__all__ = (
    "SerializationError",
    "default_serializer",
    "encode_json",
    "encode_json_str",
)


class SerializationError(Exception):
    """Encoding of an object failed."""


def _encode_mapped_row(value: Any) -> dict[str, Any]:
    return {column.name: getattr(value, column.name) for column in value.__table__.columns}


def default_serializer(value: Any) -> Any:
    """Encode values ``msgspec`` does not support natively.

    Handles the objects that show up in enum log events: config models,
    model and enum classes, mapped rows (``Lookup``) and paths.

    Raises:
        TypeError: if value is not supported
    """
    if isinstance(value, type):
        return f"{value.__module__}.{value.__qualname__}"
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=True)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, PurePath):
        return str(value)
    if hasattr(value, "__table__") and hasattr(value, "__tablename__"):
        return _encode_mapped_row(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)

    raise TypeError(f"Unsupported type: {type(value)!r}")


_default_json_encoder = msgspec.json.Encoder(enc_hook=default_serializer)


def encode_json(value: Any, serializer: Serializer | None = None) -> bytes:
    """Encode a value into JSON bytes.

    Raises:
        SerializationError: If ``value`` cannot be encoded
    """
    try:
        return msgspec.json.encode(value, enc_hook=serializer) if serializer else _default_json_encoder.encode(value)
    except (TypeError, msgspec.EncodeError) as msgspec_error:
        raise SerializationError(str(msgspec_error)) from msgspec_error


def encode_json_str(value: Any, serializer: Serializer | None = None) -> str:
    return encode_json(value, serializer).decode("utf-8")
