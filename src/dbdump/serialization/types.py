"""Column type families recognized by the value serializer.

Declared engine type labels are resolved into a closed set of families. Every
label that is not listed resolves to ``TypeFamily.UNSUPPORTED`` and keeps its
original text for error reporting.
"""

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class TypeFamily(str, Enum):
    """Serialization strategy for a group of column types."""

    BOOLEAN = "boolean"
    BIT = "bit"
    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    STRING = "string"
    TEMPORAL = "temporal"
    BINARY = "binary"
    UNSUPPORTED = "unsupported"


class UnsupportedTypeError(ValueError):
    """Raised when a value of an unrecognized column type must be serialized."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(
            f"The database type {type_name} is not supported by this version of "
            "dbdump. Use --skip-unknown-types to export such columns as NULL."
        )


def _family(family: TypeFamily, *names: str) -> Dict[str, TypeFamily]:
    return {name: family for name in names}


_INTEGER_NAMES = ["TINYINT", "SMALLINT", "MEDIUMINT", "INT", "INTEGER", "BIGINT"]

COLUMN_TYPE_FAMILIES: Dict[str, TypeFamily] = {
    **_family(TypeFamily.BOOLEAN, "BOOLEAN", "BOOL"),
    **_family(TypeFamily.BIT, "BIT"),
    **_family(TypeFamily.INTEGER, *_INTEGER_NAMES),
    **_family(TypeFamily.INTEGER, *(f"{name} UNSIGNED" for name in _INTEGER_NAMES)),
    **_family(TypeFamily.INTEGER, "YEAR"),
    **_family(TypeFamily.FLOAT, "FLOAT", "DOUBLE", "REAL"),
    **_family(TypeFamily.DECIMAL, "DECIMAL", "NUMERIC"),
    **_family(
        TypeFamily.STRING,
        "CHAR",
        "VARCHAR",
        "TINYTEXT",
        "TEXT",
        "MEDIUMTEXT",
        "LONGTEXT",
        "ENUM",
        "SET",
        "JSON",
    ),
    **_family(TypeFamily.TEMPORAL, "TIMESTAMP", "DATETIME", "DATE", "TIME"),
    **_family(
        TypeFamily.BINARY,
        "BINARY",
        "VARBINARY",
        "TINYBLOB",
        "BLOB",
        "MEDIUMBLOB",
        "LONGBLOB",
    ),
}


def normalize_type_name(type_name: str) -> str:
    """Upper-case a type label and collapse internal whitespace."""
    return " ".join(type_name.upper().split())


class ColumnType(BaseModel):
    """A declared column type resolved to its serialization family."""

    model_config = ConfigDict(frozen=True)

    type_name: str = Field(..., description="Declared type label as reported")
    family: TypeFamily = Field(..., description="Serialization family")

    @classmethod
    def from_type_name(cls, type_name: str) -> "ColumnType":
        """
        Resolve a declared type label.

        Args:
            type_name: Engine type label, e.g. "int unsigned" or "VARCHAR"

        Returns:
            ColumnType whose family is UNSUPPORTED for unknown labels
        """
        family = COLUMN_TYPE_FAMILIES.get(
            normalize_type_name(type_name), TypeFamily.UNSUPPORTED
        )
        return cls(type_name=type_name, family=family)

    @property
    def is_supported(self) -> bool:
        return self.family != TypeFamily.UNSUPPORTED


def supported_type_names() -> List[str]:
    """List every recognized type label in sorted order."""
    return sorted(COLUMN_TYPE_FAMILIES)
