"""Catalog module for reading schema objects and rows from a database.

This module provides a plugin system for connecting to database catalogs
and answering the questions the exporter asks: object listings, creation
text, foreign keys and table rows.

Example:
    >>> from dbdump.catalog import get_catalog, list_catalogs
    >>> print(list_catalogs())
    ['mysql']
    >>> catalog = get_catalog("mysql")
    >>> catalog.configure({"url": "mysql://root@localhost/shop"})
    >>> catalog.list_foreign_keys("shop")
    [('orders', 'customers')]
"""

from dbdump.catalog.base import Catalog, CatalogError
from dbdump.catalog.models import Column, ObjectDefinition, RowSet, SchemaObject
from dbdump.catalog.registry import (
    clear_registry,
    get_catalog,
    list_catalogs,
    register_catalog,
)

__all__ = [
    "Catalog",
    "CatalogError",
    "Column",
    "ObjectDefinition",
    "RowSet",
    "SchemaObject",
    "get_catalog",
    "list_catalogs",
    "register_catalog",
    "clear_registry",
]
