"""The interface every catalog provider implements, and its error type."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from dbdump.catalog.models import ObjectDefinition, RowSet
from dbdump.global_models import ObjectKind


class CatalogError(Exception):
    """A catalog could not be reached, queried or configured."""

    pass


class Catalog(ABC):
    """Read-only view of one database server.

    A catalog answers the questions the exporter asks about a schema: which
    objects of a kind exist, what their creation text is, which foreign keys
    connect the tables, and what rows a table holds. Catalogs are discovered
    via entry points.

    Example:
        >>> class MyCatalog(Catalog):
        ...     @property
        ...     def name(self) -> str:
        ...         return "my-catalog"
        ...
        ...     def list_objects(self, schema: str, kind: ObjectKind) -> List[str]:
        ...         return ["customers", "orders"]
        ...
        ...     # get_definition, list_foreign_keys and fetch_rows as well
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Name the provider is registered under, e.g. "mysql"."""
        pass

    @abstractmethod
    def list_objects(self, schema: str, kind: ObjectKind) -> List[str]:
        """List the names of all objects of one kind in a schema.

        Args:
            schema: Schema (database) name.
            kind: Kind of object to list.

        Returns:
            Object names in discovery order.

        Raises:
            CatalogError: If the catalog cannot be queried.
        """
        pass

    @abstractmethod
    def get_definition(
        self, schema: str, kind: ObjectKind, name: str
    ) -> ObjectDefinition:
        """Fetch the creation text of a single object.

        Args:
            schema: Schema (database) name.
            kind: Kind of the object.
            name: Object name.

        Returns:
            The object's definition. Routines and triggers also carry their
            SQL mode, character set and collation metadata.

        Raises:
            CatalogError: If the object is not found or the query fails.
        """
        pass

    @abstractmethod
    def list_foreign_keys(self, schema: str) -> List[Tuple[str, str]]:
        """List foreign-key relationships between tables of a schema.

        Args:
            schema: Schema (database) name.

        Returns:
            (dependent_table, referenced_table) pairs in discovery order.

        Raises:
            CatalogError: If the catalog cannot be queried.
        """
        pass

    @abstractmethod
    def fetch_rows(self, schema: str, table: str) -> RowSet:
        """Fetch every row of a table along with its column metadata.

        Args:
            schema: Schema (database) name.
            table: Table name.

        Returns:
            RowSet whose columns carry the declared engine type labels.

        Raises:
            CatalogError: If the query fails.
        """
        pass

    def configure(self, config: Optional[Dict[str, Any]] = None) -> None:
        """Apply connection settings before the first query.

        The CLI passes the resolved "url" and "pool_size". Providers that
        need nothing may keep this default, which ignores the settings.

        Args:
            config: Settings for this provider.

        Raises:
            CatalogError: If required configuration is missing or invalid.
        """
        pass

    def close(self) -> None:
        """Release any connections held by the catalog."""
        pass
