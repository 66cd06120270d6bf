"""Dependency ordering of schema objects for dbdump."""

from dbdump.ordering.models import DanglingEdge, DependencyEdge
from dbdump.ordering.references import (
    foreign_key_edges,
    parsed_references,
    pattern_references,
    view_reference_edges,
)
from dbdump.ordering.resolver import DependencyResolver, order_objects

__all__ = [
    # Models
    "DependencyEdge",
    "DanglingEdge",
    # Edge extraction
    "foreign_key_edges",
    "pattern_references",
    "parsed_references",
    "view_reference_edges",
    # Resolver
    "DependencyResolver",
    "order_objects",
]
