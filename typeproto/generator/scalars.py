"""Mapping from Python scalar types to schema scalar keywords."""

from datetime import datetime
from typing import Any

from typeproto.proto.types import byte, float32, float64, int16, int32, int64

TIMESTAMP = "google.protobuf.Timestamp"

PRIMITIVE_TYPES: dict[Any, str] = {
    float: "double",
    float64: "double",
    float32: "float",
    int32: "sint32",
    int: "sint64",
    int64: "sint64",
    int16: "int32",
    bool: "bool",
    byte: "bytes",
    bytes: "bytes",
    bytearray: "bytes",
    str: "string",
    datetime: TIMESTAMP,
}

# Well-known types and the file that declares them
WELL_KNOWN_IMPORTS: dict[str, str] = {
    TIMESTAMP: "google/protobuf/timestamp.proto",
}


def is_scalar(t: Any) -> bool:
    """Check if a type is in the primitive type table."""
    try:
        return t in PRIMITIVE_TYPES
    except TypeError:
        # unhashable annotation objects are never scalars
        return False


def scalar_keyword(t: Any) -> str | None:
    """Get the schema keyword for a scalar type, or None if it is not one."""
    if not is_scalar(t):
        return None
    return PRIMITIVE_TYPES[t]
