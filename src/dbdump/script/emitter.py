"""Sequencing of header, prefix, DDL, data and postfix text."""

from datetime import datetime
from importlib.metadata import PackageNotFoundError, version
from typing import Optional

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from dbdump.catalog.models import ObjectDefinition
from dbdump.global_models import ObjectKind
from dbdump.script.sink import ScriptSink
from dbdump.utils.sql import quote_identifier

BANNER = "-- " + "-" * 89

# Routine bodies may contain ';', so they are wrapped in an alternate delimiter
ROUTINE_DELIMITER = ";;"

_ROUTINE_KINDS = (ObjectKind.PROCEDURE, ObjectKind.FUNCTION, ObjectKind.TRIGGER)

_KIND_LABELS = {
    ObjectKind.TABLE: "table",
    ObjectKind.VIEW: "view",
    ObjectKind.PROCEDURE: "stored procedure",
    ObjectKind.FUNCTION: "function",
    ObjectKind.TRIGGER: "trigger",
}


def tool_version() -> str:
    """Return the installed dbdump version."""
    try:
        return version("dbdump")
    except PackageNotFoundError:
        return "unknown"


def mask_url(url: str) -> str:
    """Return the URL with its password replaced by asterisks."""
    try:
        return make_url(url).render_as_string(hide_password=True)
    except ArgumentError:
        return url


class ScriptEmitter:
    """Write the sections of a dump script to a sink."""

    def __init__(self, sink: ScriptSink):
        self.sink = sink

    def write_header(
        self,
        schema: str,
        url: str,
        created_at: Optional[datetime] = None,
    ) -> None:
        """
        Write the comment banner at the top of the script.

        Args:
            schema: Source schema name
            url: Connection URL; the password is masked
            created_at: Timestamp to print. Defaults to now.
        """
        created_at = created_at or datetime.now().astimezone()
        self.sink.println(BANNER)
        self.sink.println(f"-- Database Dump Tool v{tool_version()}")
        self.sink.println("-- ")
        self.sink.println(f"-- Created at {created_at.isoformat(sep=' ')}")
        self.sink.println(f"-- Schema: {schema}")
        self.sink.println(f"-- URL: {mask_url(url)}")
        self.sink.println(BANNER)

    def write_prefix(
        self,
        source_schema: str,
        target_schema: Optional[str] = None,
        create_schema: bool = False,
        disable_fk_checks: bool = True,
    ) -> None:
        """
        Write the statements that select the target schema.

        Args:
            source_schema: Schema being exported
            target_schema: Name to restore under. Defaults to source_schema.
            create_schema: Emit CREATE SCHEMA IF NOT EXISTS first
            disable_fk_checks: Turn off foreign key checks for the load
        """
        schema = quote_identifier(target_schema or source_schema)
        if create_schema:
            self.sink.println(f"CREATE SCHEMA IF NOT EXISTS {schema};")
        self.sink.println(f"USE {schema};")
        if disable_fk_checks:
            self.sink.println("SET FOREIGN_KEY_CHECKS=0;")

    def write_postfix(self, disable_fk_checks: bool = True) -> None:
        if disable_fk_checks:
            self.sink.println("SET FOREIGN_KEY_CHECKS=1;")

    def write_definition(self, definition: ObjectDefinition) -> None:
        """
        Write the creation statement of one object.

        Tables and views are terminated with ';'. Procedures, functions and
        triggers are preceded by their SQL mode, character set and collation
        as comments and wrapped in DELIMITER ;; ... DELIMITER ;.
        """
        label = _KIND_LABELS[definition.kind]
        self.sink.println(f"-- Extract DDL for {label} {definition.name}")

        if definition.kind not in _ROUTINE_KINDS:
            self.sink.println(f"{definition.ddl};")
            return

        self.sink.println(f"-- SQL Mode {definition.sql_mode or ''}")
        self.sink.println(f"-- Character Set {definition.character_set or ''}")
        self.sink.println(f"-- Collation {definition.collation or ''}")
        self.sink.println(
            f"-- Database Collation {definition.database_collation or ''}"
        )
        self.sink.println(f"DELIMITER {ROUTINE_DELIMITER}")
        self.sink.println(f"{definition.ddl}{ROUTINE_DELIMITER}")
        self.sink.println("DELIMITER ;")

    def write_table_data(self, table_name: str, statements: str) -> None:
        """Write the data comment for a table followed by its INSERT block."""
        self.sink.println(f"-- Extracting data for {table_name}")
        if statements:
            self.sink.print(statements)

    def finish(self) -> None:
        self.sink.flush()
