"""Typed value serialization into SQL literals."""

from dbdump.serialization.serializer import (
    NULL,
    RowSerializer,
    quote_string,
    serialize_row,
    serialize_value,
    temporal_text,
)
from dbdump.serialization.types import (
    COLUMN_TYPE_FAMILIES,
    ColumnType,
    TypeFamily,
    UnsupportedTypeError,
    normalize_type_name,
    supported_type_names,
)

__all__ = [
    # Types
    "COLUMN_TYPE_FAMILIES",
    "ColumnType",
    "TypeFamily",
    "UnsupportedTypeError",
    "normalize_type_name",
    "supported_type_names",
    # Serializer
    "NULL",
    "RowSerializer",
    "quote_string",
    "serialize_row",
    "serialize_value",
    "temporal_text",
]
