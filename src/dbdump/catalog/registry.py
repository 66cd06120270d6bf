"""Lookup of catalog providers by name.

Providers come from two places: the built-in MySQL catalog, and classes that
installed packages advertise in the ``dbdump.catalogs`` entry-point group.
Entry points are loaded once, on first lookup.
"""

from importlib.metadata import entry_points
from typing import Dict, List, Optional, Type

from dbdump.catalog.base import Catalog, CatalogError
from dbdump.catalog.mysql import MySQLCatalog
from dbdump.utils.diagnostics import Diagnostics, quiet_diagnostics

ENTRY_POINT_GROUP = "dbdump.catalogs"

_BUILTIN_CATALOGS: Dict[str, Type[Catalog]] = {"mysql": MySQLCatalog}

_providers: Dict[str, Type[Catalog]] = {}
_loaded: bool = False


def _is_catalog_class(candidate: object) -> bool:
    return isinstance(candidate, type) and issubclass(candidate, Catalog)


def _load_providers(diagnostics: Optional[Diagnostics] = None) -> None:
    """Fill the provider table from built-ins and entry points, once."""
    global _loaded

    if _loaded:
        return

    diagnostics = diagnostics or quiet_diagnostics()
    for name, catalog_class in _BUILTIN_CATALOGS.items():
        _providers.setdefault(name, catalog_class)

    for ep in entry_points(group=ENTRY_POINT_GROUP):
        try:
            candidate = ep.load()
        except Exception as e:
            # A provider with missing optional dependencies must not break
            # the others
            diagnostics.warning(f"Could not load catalog '{ep.name}': {e}")
            continue
        if _is_catalog_class(candidate):
            _providers.setdefault(ep.name, candidate)

    _loaded = True


def get_catalog(name: str, diagnostics: Optional[Diagnostics] = None) -> Catalog:
    """Instantiate the provider registered under a name.

    Each call returns a fresh, unconfigured instance. Providers that fail to
    load are reported through diagnostics on the first lookup.

    Raises:
        CatalogError: If no provider has that name.

    Example:
        >>> catalog = get_catalog("mysql")
        >>> catalog.configure({"url": "mysql://root@localhost"})
        >>> catalog.list_objects("shop", ObjectKind.TABLE)
        ['customers', 'orders']
    """
    _load_providers(diagnostics)

    catalog_class = _providers.get(name)
    if catalog_class is None:
        available = ", ".join(list_catalogs())
        raise CatalogError(
            f"Unknown catalog '{name}'. Available catalogs: {available or 'none'}."
        )
    return catalog_class()


def list_catalogs() -> List[str]:
    """Return the names of all known providers, sorted."""
    _load_providers()
    return sorted(_providers)


def register_catalog(name: str, catalog_class: Type[Catalog]) -> None:
    """Add or replace a provider without going through entry points.

    Raises:
        ValueError: If catalog_class is not a Catalog subclass.
    """
    if not _is_catalog_class(catalog_class):
        raise ValueError(f"{catalog_class} must be a subclass of Catalog")

    _load_providers()
    _providers[name] = catalog_class


def clear_registry() -> None:
    """Forget registered providers; the next lookup reloads them."""
    global _loaded
    _providers.clear()
    _loaded = False
