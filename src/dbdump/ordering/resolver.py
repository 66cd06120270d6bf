"""Dependency ordering for schema objects.

Objects are reordered so that, as far as the edges allow, every object is
emitted after the objects its definition references. Two strategies exist:

- ``reposition`` walks the edges in discovery order and moves a referenced
  object in front of its dependent whenever it sits after it. Later edges can
  undo earlier placements, and cycles settle silently into some order.
- ``topological`` builds a rustworkx graph and runs a lexicographic
  topological sort keyed by discovery position. When the graph has a cycle it
  warns and falls back to ``reposition``.
"""

from typing import Dict, List, Optional, Sequence

import rustworkx as rx

from dbdump.catalog.models import SchemaObject
from dbdump.global_models import OrderingStrategy
from dbdump.ordering.models import DanglingEdge, DependencyEdge
from dbdump.utils.diagnostics import Diagnostics, quiet_diagnostics


def _position(objects: Sequence[SchemaObject], name: str) -> Optional[int]:
    for i, obj in enumerate(objects):
        if obj.matches(name):
            return i
    return None


class DependencyResolver:
    """Order schema objects so referenced objects come before dependents."""

    def __init__(
        self,
        strategy: OrderingStrategy = OrderingStrategy.REPOSITION,
        diagnostics: Optional[Diagnostics] = None,
    ):
        """
        Initialize the resolver.

        Args:
            strategy: Ordering algorithm to use
            diagnostics: Channel for dangling-reference and cycle messages.
                        Prints nothing if not provided.
        """
        self.strategy = OrderingStrategy(strategy)
        self.diagnostics = diagnostics or quiet_diagnostics()
        self._dangling_edges: List[DanglingEdge] = []
        self._cycles: List[List[str]] = []

    def order(
        self,
        objects: Sequence[SchemaObject],
        edges: Sequence[DependencyEdge],
    ) -> List[SchemaObject]:
        """
        Return the objects reordered according to the edges.

        Edges naming an object that is not in ``objects`` are recorded as
        dangling and ignored. The input sequence is not modified.

        Args:
            objects: Objects in discovery order
            edges: Reference edges in discovery order

        Returns:
            New list holding the same objects in dependency order
        """
        usable = self._usable_edges(objects, edges)

        if self.strategy == OrderingStrategy.TOPOLOGICAL:
            ordered = self._topological(objects, usable)
            if ordered is not None:
                return ordered

        return self._reposition(objects, usable)

    def _usable_edges(
        self,
        objects: Sequence[SchemaObject],
        edges: Sequence[DependencyEdge],
    ) -> List[DependencyEdge]:
        usable = []
        for edge in edges:
            if _position(objects, edge.dependent) is None:
                self._record_dangling(
                    edge,
                    f"Found a reference from {edge.dependent} which is not in the "
                    f"exported set",
                )
                continue
            if _position(objects, edge.referenced) is None:
                self._record_dangling(
                    edge,
                    f"Found a referenced object {edge.referenced} that doesn't "
                    f"exist for {edge.dependent}",
                )
                continue
            usable.append(edge)
        return usable

    def _record_dangling(self, edge: DependencyEdge, reason: str) -> None:
        self._dangling_edges.append(DanglingEdge(edge=edge, reason=reason))
        self.diagnostics.info(reason)

    @staticmethod
    def _reposition(
        objects: Sequence[SchemaObject],
        edges: Sequence[DependencyEdge],
    ) -> List[SchemaObject]:
        ordered = list(objects)
        for edge in edges:
            dependent_index = _position(ordered, edge.dependent)
            referenced_index = _position(ordered, edge.referenced)
            if dependent_index is None or referenced_index is None:
                continue

            if referenced_index > dependent_index:
                referenced = ordered.pop(referenced_index)
                ordered.insert(dependent_index, referenced)
        return ordered

    def _topological(
        self,
        objects: Sequence[SchemaObject],
        edges: Sequence[DependencyEdge],
    ) -> Optional[List[SchemaObject]]:
        graph: rx.PyDiGraph = rx.PyDiGraph()
        node_index_map: Dict[str, int] = {}
        for position, obj in enumerate(objects):
            node_idx = graph.add_node(position)
            node_index_map.setdefault(obj.name.casefold(), node_idx)

        seen = set()
        for edge in edges:
            if edge.is_self_reference:
                continue
            source = node_index_map[edge.referenced.casefold()]
            target = node_index_map[edge.dependent.casefold()]
            if (source, target) not in seen:
                graph.add_edge(source, target, None)
                seen.add((source, target))

        if not rx.is_directed_acyclic_graph(graph):
            cycle = [objects[graph[u]].name for u, _ in rx.digraph_find_cycle(graph)]
            self._cycles.append(cycle)
            self.diagnostics.warning(
                f"Circular dependency between {', '.join(cycle)}; "
                "falling back to reposition ordering"
            )
            return None

        positions = rx.lexicographical_topological_sort(
            graph, key=lambda position: f"{position:010d}"
        )
        return [objects[position] for position in positions]

    @property
    def dangling_edges(self) -> List[DanglingEdge]:
        """Get the edges skipped because an end was missing."""
        return self._dangling_edges.copy()

    @property
    def cycles(self) -> List[List[str]]:
        """Get the cycles detected by the topological strategy."""
        return [list(cycle) for cycle in self._cycles]


def order_objects(
    objects: Sequence[SchemaObject],
    edges: Sequence[DependencyEdge],
    strategy: OrderingStrategy = OrderingStrategy.REPOSITION,
    diagnostics: Optional[Diagnostics] = None,
) -> List[SchemaObject]:
    """Order objects with a one-off DependencyResolver."""
    return DependencyResolver(strategy=strategy, diagnostics=diagnostics).order(
        objects, edges
    )
