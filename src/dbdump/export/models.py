"""Pydantic models for export settings and results."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from dbdump.global_models import LogLevel, OrderingStrategy, ReferenceStrategy
from dbdump.script.batch import DEFAULT_BATCH_SIZE, rows_per_statement


class DumpSettings(BaseModel):
    """Fully resolved settings for one export run."""

    schema_name: str = Field(..., description="Schema to export")
    url: str = Field("", description="Database URL")
    catalog_type: str = Field("mysql", description="Catalog provider name")
    new_schema_name: Optional[str] = Field(
        None, description="Schema name used in the script instead of schema_name"
    )
    output_file: Optional[Path] = Field(None, description="Script file, stdout if None")
    no_data: bool = False
    single_row_inserts: bool = False
    skip_unknown_types: bool = False
    create_schema: bool = False
    disable_fk_checks: bool = True
    include_routines: bool = True
    include_triggers: bool = True
    batch_size: int = Field(DEFAULT_BATCH_SIZE, ge=1)
    jobs: int = Field(1, ge=1, description="Worker threads for table data")
    pool_size: int = Field(5, ge=1, description="Database connection pool size")
    ordering: OrderingStrategy = OrderingStrategy.REPOSITION
    view_references: ReferenceStrategy = ReferenceStrategy.PATTERN
    log_level: LogLevel = LogLevel.WARNING

    @property
    def max_rows_per_statement(self) -> int:
        return rows_per_statement(self.single_row_inserts, self.batch_size)


class ExportSummary(BaseModel):
    """Counts of what an export run wrote."""

    tables: int = 0
    views: int = 0
    procedures: int = 0
    functions: int = 0
    triggers: int = 0
    rows: int = 0
    statements: int = 0
    dangling_references: int = 0
