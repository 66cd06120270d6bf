"""Discovery and dependency ordering of the objects to export."""

from typing import Dict, Iterable, List, Optional

from dbdump.catalog.base import Catalog
from dbdump.catalog.models import SchemaObject
from dbdump.global_models import ObjectKind, OrderingStrategy, ReferenceStrategy
from dbdump.ordering.models import DependencyEdge
from dbdump.ordering.references import foreign_key_edges, view_reference_edges
from dbdump.ordering.resolver import DependencyResolver
from dbdump.utils.diagnostics import Diagnostics, quiet_diagnostics


class ExportPlanner:
    """List a schema's objects and order them by their dependencies."""

    def __init__(
        self,
        catalog: Catalog,
        schema: str,
        ordering: OrderingStrategy = OrderingStrategy.REPOSITION,
        view_references: ReferenceStrategy = ReferenceStrategy.PATTERN,
        diagnostics: Optional[Diagnostics] = None,
    ):
        """
        Initialize the planner.

        Args:
            catalog: Configured catalog to read from
            schema: Schema to plan
            ordering: Ordering algorithm for tables and views
            view_references: How view definitions are scanned for references
            diagnostics: Channel for diagnostics. Prints nothing if not provided.
        """
        self.catalog = catalog
        self.schema = schema
        self.view_references = ReferenceStrategy(view_references)
        self.diagnostics = diagnostics or quiet_diagnostics()
        self.resolver = DependencyResolver(
            strategy=ordering, diagnostics=self.diagnostics
        )

    def objects(self, kind: ObjectKind) -> List[SchemaObject]:
        """List all objects of one kind in discovery order."""
        names = self.catalog.list_objects(self.schema, kind)
        self.diagnostics.debug(f"Found {len(names)} {kind.value}(s) in {self.schema}")
        return [SchemaObject(name=name, kind=kind) for name in names]

    def with_definitions(self, objects: Iterable[SchemaObject]) -> List[SchemaObject]:
        """Return the objects carrying their definitions fetched from the catalog."""
        return [
            obj.with_definition(
                self.catalog.get_definition(self.schema, obj.kind, obj.name)
            )
            for obj in objects
        ]

    def order_tables(self) -> List[SchemaObject]:
        """List tables ordered by their foreign keys."""
        tables = self.objects(ObjectKind.TABLE)
        edges = foreign_key_edges(self.catalog.list_foreign_keys(self.schema))
        return self.resolver.order(tables, edges)

    def order_views(
        self, table_names: Optional[Iterable[str]] = None
    ) -> List[SchemaObject]:
        """
        List views with their definitions, ordered by what they select from.

        Args:
            table_names: Tables of the schema. References to them are dropped
                        before ordering since tables are emitted before views.

        Returns:
            Views carrying their fetched definitions, in dependency order
        """
        views = self.with_definitions(self.objects(ObjectKind.VIEW))
        tables = {name.casefold() for name in table_names or []}

        edges: List[DependencyEdge] = []
        for view in views:
            for edge in view_reference_edges(
                view.name,
                view.definition.ddl,
                schema=self.schema,
                strategy=self.view_references,
                diagnostics=self.diagnostics,
            ):
                if edge.referenced.casefold() not in tables:
                    edges.append(edge)

        return self.resolver.order(views, edges)

    def resolve_order(self) -> Dict[ObjectKind, List[str]]:
        """Return table and view names in the order they would be exported."""
        table_names = [table.name for table in self.order_tables()]
        views = self.order_views(table_names)
        return {
            ObjectKind.TABLE: table_names,
            ObjectKind.VIEW: [view.name for view in views],
        }
