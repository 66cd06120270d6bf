"""Pydantic models for objects and data read from a catalog."""

from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from dbdump.global_models import ObjectKind


class ObjectDefinition(BaseModel):
    """Creation text of a schema object plus routine/trigger metadata."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Object name as reported by the catalog")
    kind: ObjectKind = Field(..., description="Kind of object")
    ddl: str = Field(..., description="CREATE statement text")

    # Only populated for procedures, functions and triggers
    sql_mode: Optional[str] = Field(None, description="SQL mode at creation time")
    character_set: Optional[str] = Field(None, description="Client character set")
    collation: Optional[str] = Field(None, description="Connection collation")
    database_collation: Optional[str] = Field(None, description="Database collation")


class SchemaObject(BaseModel):
    """A named object in the exported schema."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Object name (compared case-insensitively)")
    kind: ObjectKind = Field(..., description="Kind of object")
    definition: Optional[ObjectDefinition] = Field(
        None, description="Definition, once fetched from the catalog"
    )

    def matches(self, name: str) -> bool:
        """Return True if this object has the given name, ignoring case."""
        return self.name.casefold() == name.casefold()

    def with_definition(self, definition: ObjectDefinition) -> "SchemaObject":
        """Return a copy of this object carrying its fetched definition."""
        return self.model_copy(update={"definition": definition})


class Column(BaseModel):
    """A result-set column with its declared engine type label."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Column name")
    type_name: str = Field(..., description="Declared type label, e.g. 'INT UNSIGNED'")
    index: int = Field(..., description="Zero-based ordinal position")


class RowSet(BaseModel):
    """All rows of one table together with their column metadata."""

    columns: List[Column] = Field(default_factory=list)
    rows: List[Tuple[Any, ...]] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.rows
