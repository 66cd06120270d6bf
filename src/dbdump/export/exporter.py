"""Export driver that sequences catalog reads into a dump script."""

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Iterator, List, Optional, Sequence

from dbdump.catalog.base import Catalog
from dbdump.catalog.models import SchemaObject
from dbdump.export.models import DumpSettings, ExportSummary
from dbdump.export.planner import ExportPlanner
from dbdump.global_models import ObjectKind
from dbdump.script.batch import InsertBlock, render_insert_block
from dbdump.script.emitter import ScriptEmitter
from dbdump.utils.diagnostics import Diagnostics


class SchemaExporter:
    """Export one schema's objects and data through a ScriptEmitter.

    DDL is always written sequentially in dependency order. Table data may be
    rendered by several worker threads; each table is rendered into its own
    buffer and the blocks are written in dependency order.
    """

    def __init__(
        self,
        catalog: Catalog,
        emitter: ScriptEmitter,
        settings: DumpSettings,
        diagnostics: Optional[Diagnostics] = None,
    ):
        """
        Initialize the exporter.

        Args:
            catalog: Configured catalog to read from
            emitter: Emitter that writes the script
            settings: Resolved export settings
            diagnostics: Channel for diagnostics. Uses stderr if not provided.
        """
        self.catalog = catalog
        self.emitter = emitter
        self.settings = settings
        self.diagnostics = diagnostics or Diagnostics(settings.log_level)
        self.planner = ExportPlanner(
            catalog,
            settings.schema_name,
            ordering=settings.ordering,
            view_references=settings.view_references,
            diagnostics=self.diagnostics,
        )
        self.summary = ExportSummary()

    @property
    def schema(self) -> str:
        return self.settings.schema_name

    def export_tables(self) -> List[SchemaObject]:
        """Write table DDL in foreign-key order and return the ordered tables."""
        tables = self.planner.with_definitions(self.planner.order_tables())
        for table in tables:
            self.emitter.write_definition(table.definition)
        self.summary.tables = len(tables)
        return tables

    def export_views(
        self, table_names: Optional[Iterable[str]] = None
    ) -> List[SchemaObject]:
        """Write view DDL in dependency order and return the ordered views."""
        views = self.planner.order_views(table_names)
        for view in views:
            self.emitter.write_definition(view.definition)
        self.summary.views = len(views)
        return views

    def _export_routines(self, kind: ObjectKind) -> int:
        routines = self.planner.with_definitions(self.planner.objects(kind))
        for routine in routines:
            self.emitter.write_definition(routine.definition)
        return len(routines)

    def export_procedures(self) -> None:
        self.summary.procedures = self._export_routines(ObjectKind.PROCEDURE)

    def export_functions(self) -> None:
        self.summary.functions = self._export_routines(ObjectKind.FUNCTION)

    def export_triggers(self) -> None:
        self.summary.triggers = self._export_routines(ObjectKind.TRIGGER)

    def render_table_data(self, table_name: str) -> InsertBlock:
        """Fetch one table's rows and render them as INSERT statements."""
        row_set = self.catalog.fetch_rows(self.schema, table_name)
        return render_insert_block(
            table_name,
            row_set.columns,
            row_set.rows,
            max_rows_per_statement=self.settings.max_rows_per_statement,
            skip_unknown_types=self.settings.skip_unknown_types,
        )

    def _render_all(self, table_names: Sequence[str]) -> Iterator[InsertBlock]:
        if self.settings.jobs <= 1 or len(table_names) <= 1:
            for name in table_names:
                yield self.render_table_data(name)
            return

        with ThreadPoolExecutor(max_workers=self.settings.jobs) as executor:
            # map() yields results in submission order
            yield from executor.map(self.render_table_data, table_names)

    def export_data(self, tables: Sequence[SchemaObject]) -> None:
        """
        Write INSERT statements for every table.

        A table's block is written only once it is fully rendered, so a
        failure while serializing never leaves a statement unterminated.

        Raises:
            UnsupportedTypeError: If a column type is unrecognized and
                skip_unknown_types is off
        """
        for block in self._render_all([table.name for table in tables]):
            self.emitter.write_table_data(block.table_name, block.text)
            self.summary.rows += block.row_count
            self.summary.statements += block.statement_count
            self.diagnostics.debug(
                f"Wrote {block.row_count} row(s) in {block.statement_count} "
                f"statement(s) for {block.table_name}"
            )

    def run(self) -> ExportSummary:
        """
        Export the whole schema.

        Writes the header, prefix, tables, views, procedures, functions,
        triggers, data and postfix in that order.

        Returns:
            Summary of what was written
        """
        settings = self.settings
        self.emitter.write_header(self.schema, settings.url)
        self.emitter.write_prefix(
            self.schema,
            target_schema=settings.new_schema_name,
            create_schema=settings.create_schema,
            disable_fk_checks=settings.disable_fk_checks,
        )

        tables = self.export_tables()
        self.export_views([table.name for table in tables])
        if settings.include_routines:
            self.export_procedures()
            self.export_functions()
        if settings.include_triggers:
            self.export_triggers()
        if not settings.no_data:
            self.export_data(tables)

        self.emitter.write_postfix(settings.disable_fk_checks)
        self.emitter.finish()

        self.summary.dangling_references = len(self.planner.resolver.dangling_edges)
        return self.summary
