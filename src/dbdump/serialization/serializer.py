"""Conversion of raw driver values into SQL literals.

Dispatch is on the column's declared type, not on the runtime type of the
value: the declared type decides how the driver decoded the cell. Every
function here is pure.
"""

import re
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Any, Callable, Dict, List, Sequence, Union

from dbdump.catalog.models import Column
from dbdump.serialization.types import ColumnType, TypeFamily, UnsupportedTypeError

NULL = "NULL"

# Zone marker left at the end of textual timestamps
_ZONE_SUFFIX = re.compile(r"(?:\s?UTC|Z|\+00:?00)$")


def quote_string(value: str) -> str:
    """
    Quote text as a single-line MySQL string literal.

    Single quotes are doubled; backslashes, line feeds and carriage returns
    are backslash-escaped.

    Example:
        >>> quote_string("O'Brien")
        "'O''Brien'"
    """
    escaped = (
        value.replace("'", "''")
        .replace("\\", "\\\\")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f"'{escaped}'"


def _to_text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8")
    return str(value)


def _format_duration(value: timedelta) -> str:
    # MySQL TIME values arrive as timedelta and may exceed 24 hours
    total = value // timedelta(microseconds=1)
    sign = "-" if total < 0 else ""
    seconds, micros = divmod(abs(total), 1_000_000)
    hours, remainder = divmod(seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    text = f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d}"
    if micros:
        text += f".{micros:06d}"
    return text


def temporal_text(value: Any) -> str:
    """
    Render a temporal value as canonical text without a zone marker.

    Aware datetimes are converted to UTC and made naive. Textual values lose
    a trailing ``UTC``, ``Z`` or ``+00:00`` marker.
    """
    if isinstance(value, datetime):
        if value.utcoffset() is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, time):
        return value.replace(tzinfo=None).isoformat()
    if isinstance(value, timedelta):
        return _format_duration(value)
    return _ZONE_SUFFIX.sub("", _to_text(value).strip())


def _encode_boolean(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return _encode_bit(value)


def _encode_bit(value: Any) -> str:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return str(int.from_bytes(bytes(value), "big"))
    return str(int(value))


def _encode_integer(value: Any) -> str:
    return str(int(value))


def _encode_float(value: Any) -> str:
    return repr(float(value))


def _encode_decimal(value: Any) -> str:
    if not isinstance(value, Decimal):
        value = Decimal(_to_text(value))
    return format(value, "f")


def _encode_string(value: Any) -> str:
    return quote_string(_to_text(value))


def _encode_temporal(value: Any) -> str:
    return f"'{temporal_text(value)}'"


_ENCODERS: Dict[TypeFamily, Callable[[Any], str]] = {
    TypeFamily.BOOLEAN: _encode_boolean,
    TypeFamily.BIT: _encode_bit,
    TypeFamily.INTEGER: _encode_integer,
    TypeFamily.FLOAT: _encode_float,
    TypeFamily.DECIMAL: _encode_decimal,
    TypeFamily.STRING: _encode_string,
    TypeFamily.TEMPORAL: _encode_temporal,
}


def serialize_value(
    column_type: Union[str, ColumnType],
    value: Any,
    skip_unknown_types: bool = False,
) -> str:
    """
    Serialize one cell into a SQL literal.

    Args:
        column_type: Declared type label or an already resolved ColumnType
        value: Raw value from the driver; None means SQL NULL
        skip_unknown_types: Emit NULL for unrecognized types instead of failing

    Returns:
        Literal text ready for an INSERT statement, or ``NULL``

    Raises:
        UnsupportedTypeError: If the type is unrecognized and
            skip_unknown_types is False
        ValueError: If the value cannot be decoded as its declared type
    """
    if value is None:
        return NULL

    if isinstance(column_type, str):
        column_type = ColumnType.from_type_name(column_type)

    if column_type.family == TypeFamily.BINARY:
        return NULL

    if column_type.family == TypeFamily.UNSUPPORTED:
        if skip_unknown_types:
            return NULL
        raise UnsupportedTypeError(column_type.type_name)

    try:
        return _ENCODERS[column_type.family](value)
    except (ArithmeticError, TypeError, ValueError) as e:
        raise ValueError(
            f"Cannot encode value {value!r} of declared type "
            f"{column_type.type_name}: {e}"
        ) from e


class RowSerializer:
    """Serialize rows of one result set, resolving column types once."""

    def __init__(self, columns: Sequence[Column], skip_unknown_types: bool = False):
        """
        Initialize the row serializer.

        Args:
            columns: Result-set columns in row order
            skip_unknown_types: Emit NULL for unrecognized types instead of failing
        """
        self.columns = list(columns)
        self.skip_unknown_types = skip_unknown_types
        self._types = [ColumnType.from_type_name(c.type_name) for c in self.columns]

    def serialize(self, values: Sequence[Any]) -> List[str]:
        """Serialize one row of raw values aligned with the columns."""
        if len(values) != len(self._types):
            raise ValueError(
                f"Row has {len(values)} values but the result set has "
                f"{len(self._types)} columns"
            )
        return [
            serialize_value(column_type, value, self.skip_unknown_types)
            for column_type, value in zip(self._types, values)
        ]


def serialize_row(
    columns: Sequence[Column],
    values: Sequence[Any],
    skip_unknown_types: bool = False,
) -> List[str]:
    """Serialize a single row without reusing resolved column types."""
    return RowSerializer(columns, skip_unknown_types).serialize(values)
