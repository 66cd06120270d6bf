"""Shared fixtures for dbdump tests."""

from typing import Any, Dict, List, Optional, Tuple

import pytest

from dbdump.catalog.base import Catalog, CatalogError
from dbdump.catalog.models import Column, ObjectDefinition, RowSet
from dbdump.global_models import ObjectKind


class InMemoryCatalog(Catalog):
    """Catalog backed by plain dictionaries."""

    def __init__(self) -> None:
        self.objects: Dict[ObjectKind, List[str]] = {kind: [] for kind in ObjectKind}
        self.definitions: Dict[Tuple[ObjectKind, str], ObjectDefinition] = {}
        self.foreign_keys: List[Tuple[str, str]] = []
        self.rows: Dict[str, RowSet] = {}
        self.config: Optional[Dict[str, Any]] = None
        self.closed = False

    @property
    def name(self) -> str:
        return "memory"

    def add(self, kind: ObjectKind, name: str, ddl: str, **metadata: str) -> None:
        self.objects[kind].append(name)
        self.definitions[(kind, name)] = ObjectDefinition(
            name=name, kind=kind, ddl=ddl, **metadata
        )

    def add_table(
        self,
        name: str,
        columns: Optional[List[Tuple[str, str]]] = None,
        rows: Optional[List[Tuple[Any, ...]]] = None,
    ) -> None:
        columns = columns or [("id", "INT")]
        self.add(ObjectKind.TABLE, name, f"CREATE TABLE `{name}` (`id` int)")
        self.rows[name] = RowSet(
            columns=[
                Column(name=col, type_name=type_name, index=i)
                for i, (col, type_name) in enumerate(columns)
            ],
            rows=rows or [],
        )

    def configure(self, config: Optional[Dict[str, Any]] = None) -> None:
        self.config = config

    def close(self) -> None:
        self.closed = True

    def list_objects(self, schema: str, kind: ObjectKind) -> List[str]:
        return list(self.objects[kind])

    def get_definition(
        self, schema: str, kind: ObjectKind, name: str
    ) -> ObjectDefinition:
        try:
            return self.definitions[(kind, name)]
        except KeyError:
            raise CatalogError(f"No {kind.value} named {name}")

    def list_foreign_keys(self, schema: str) -> List[Tuple[str, str]]:
        return list(self.foreign_keys)

    def fetch_rows(self, schema: str, table: str) -> RowSet:
        return self.rows[table]


@pytest.fixture
def memory_catalog() -> InMemoryCatalog:
    """An empty in-memory catalog."""
    return InMemoryCatalog()


@pytest.fixture
def shop_catalog() -> InMemoryCatalog:
    """A small shop schema discovered in an order that needs fixing."""
    catalog = InMemoryCatalog()
    catalog.add_table(
        "orders",
        columns=[("id", "INT"), ("customer_id", "INT"), ("note", "VARCHAR")],
        rows=[(1, 10, "first"), (2, 10, None), (3, 11, "O'Brien")],
    )
    catalog.add_table(
        "customers",
        columns=[("id", "INT"), ("name", "VARCHAR")],
        rows=[(10, "Ann"), (11, "Bob")],
    )
    catalog.foreign_keys = [("orders", "customers")]
    catalog.add(
        ObjectKind.VIEW,
        "order_summary",
        "CREATE VIEW `order_summary` AS select `o`.`id` AS `id` "
        "from `shop`.`big_orders` `o`",
    )
    catalog.add(
        ObjectKind.VIEW,
        "big_orders",
        "CREATE VIEW `big_orders` AS select `o`.`id` AS `id` "
        "from `shop`.`orders` `o` join `shop`.`customers` `c` "
        "on `o`.`customer_id` = `c`.`id`",
    )
    catalog.add(
        ObjectKind.PROCEDURE,
        "purge_orders",
        "CREATE PROCEDURE `purge_orders`() BEGIN DELETE FROM orders; END",
        sql_mode="STRICT_TRANS_TABLES",
        character_set="utf8mb4",
        collation="utf8mb4_general_ci",
        database_collation="utf8mb4_0900_ai_ci",
    )
    catalog.add(
        ObjectKind.FUNCTION,
        "order_count",
        "CREATE FUNCTION `order_count`() RETURNS int RETURN 1",
    )
    catalog.add(
        ObjectKind.TRIGGER,
        "orders_bi",
        "CREATE TRIGGER `orders_bi` BEFORE INSERT ON `orders` FOR EACH ROW SET @x = 1",
    )
    return catalog
