"""
Weighted Value Graph
--------------------

Generic graph over hashable values where every connection is inserted in
both directions: the forward edge carries the given weight and the reverse
edge carries its multiplicative inverse.

Storage is an arena: the graph owns one list of vertices, a dict maps each
value to its vertex index, and edges refer to vertices by index. Nothing
holds a reference back to the graph, so there are no reference cycles.

The graph is built once from the full connection list and is read-only
afterwards. Queries never mutate it, so a built graph can be shared between
threads without locking.

API:
  Graph(connections)                         -> Graph
  graph.find_path(origin, target, strategy)  -> list[Edge] | None
  graph.fold_path(origin, target, seed)      -> float | None

Examples:
  >>> g = Graph([("m", "ft", 3.28), ("ft", "in", 12.0)])
  >>> round(g.fold_path("m", "in", 2.0), 6)
  78.72
  >>> g.fold_path("in", "m", 12.0) == 12.0 / 12.0 / 3.28
  True
  >>> g.fold_path("m", "sec", 1.0) is None
  True
"""

from __future__ import annotations

import logging
import math
from collections import deque
from typing import (
    Dict,
    Generic,
    Hashable,
    Iterable,
    List,
    NamedTuple,
    Optional,
    Set,
    Tuple,
    TypeVar,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)

STRATEGIES = ("bfs", "dfs")


class Connection(NamedTuple):
    """A known weighted link: 1 `origin` equals `weight` `destination`."""

    origin: Hashable
    destination: Hashable
    weight: float


class Edge(NamedTuple):
    """Directed edge between two vertex indices."""

    source: int
    target: int
    weight: float


class Vertex(Generic[T]):
    """Graph vertex: a value and its outgoing edges, in insertion order."""

    __slots__ = ("value", "edges")

    def __init__(self, value: T):
        self.value = value
        self.edges: List[Edge] = []

    def __repr__(self) -> str:
        return f"Vertex({self.value!r}, edges={len(self.edges)})"


def _inverse(weight: float) -> float:
    # 1/0 follows IEEE semantics instead of raising
    if weight == 0:
        return math.copysign(math.inf, weight)
    return 1.0 / weight


class Graph(Generic[T]):
    """Weighted graph with paired inverse edges and O(1) lookup by value."""

    def __init__(self, connections: Iterable[Tuple[T, T, float]] = ()):
        self._vertices: List[Vertex[T]] = []
        self._index: Dict[T, int] = {}
        self._edge_count = 0

        for origin, destination, weight in connections:
            self._connect(origin, destination, float(weight))

        logger.debug(
            f"Built graph with {len(self._vertices)} vertices and {self._edge_count} edges"
        )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _vertex_index(self, value: T) -> int:
        """Return the index for `value`, creating its vertex on first sight."""
        idx = self._index.get(value)
        if idx is None:
            idx = len(self._vertices)
            self._vertices.append(Vertex(value))
            self._index[value] = idx
        return idx

    def _connect(self, origin: T, destination: T, weight: float) -> None:
        if weight <= 0 or math.isnan(weight):
            logger.warning(
                f"Non-positive weight {weight} for {origin!r} -> {destination!r}; "
                f"paths through this edge will be degenerate"
            )

        src = self._vertex_index(origin)
        dst = self._vertex_index(destination)

        if any(edge.target == dst for edge in self._vertices[src].edges):
            logger.warning(
                f"Parallel connection {origin!r} -> {destination!r}; "
                f"the first edge reached during traversal wins"
            )

        self._vertices[src].edges.append(Edge(src, dst, weight))
        self._vertices[dst].edges.append(Edge(dst, src, _inverse(weight)))
        self._edge_count += 2

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, value: object) -> bool:
        try:
            return value in self._index
        except TypeError:
            return False

    def __repr__(self) -> str:
        return f"Graph(vertices={len(self._vertices)}, edges={self._edge_count})"

    @property
    def values(self) -> List[T]:
        """Vertex values in order of first appearance."""
        return [v.value for v in self._vertices]

    @property
    def edge_count(self) -> int:
        return self._edge_count

    def neighbors(self, value: T) -> List[Tuple[T, float]]:
        """Return (neighbor value, edge weight) pairs leaving `value`.

        Raises:
            KeyError: If `value` is not in the graph
        """
        vertex = self._vertices[self._index[value]]
        return [(self._vertices[e.target].value, e.weight) for e in vertex.edges]

    def path_values(self, origin: T, path: List[Edge]) -> List[T]:
        """Return the values visited along `path`, starting with `origin`."""
        return [origin] + [self._vertices[edge.target].value for edge in path]

    def components(self) -> List[Set[T]]:
        """Connected components, each a set of values.

        Every edge has an inverse partner, so reachability is symmetric and
        these are exactly the groups of mutually convertible values.
        """
        seen: Set[int] = set()
        result: List[Set[T]] = []

        for start in range(len(self._vertices)):
            if start in seen:
                continue
            seen.add(start)
            members = {self._vertices[start].value}
            stack = [start]
            while stack:
                idx = stack.pop()
                for edge in self._vertices[idx].edges:
                    if edge.target not in seen:
                        seen.add(edge.target)
                        members.add(self._vertices[edge.target].value)
                        stack.append(edge.target)
            result.append(members)

        return result

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def find_path(
        self,
        origin: T,
        target: T,
        strategy: str = "bfs",
    ) -> Optional[List[Edge]]:
        """Find an ordered list of edges leading from `origin` to `target`.

        Iterative search carrying (vertex index, edge taken) on an explicit
        frontier. A vertex is expanded at most once, so the search terminates
        on any graph, cyclic or not. Paths are rebuilt from parent edges, so
        memory stays linear in the size of the graph.

        Args:
            origin: Starting value
            target: Value to reach
            strategy: "bfs" (fewest hops, default) or "dfs" (first found)

        Returns:
            List of edges (empty when origin == target), or None if either
            value is absent from the graph or no path connects them

        Raises:
            ValueError: If strategy is not "bfs" or "dfs"
        """
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown strategy: {strategy}. Use 'bfs' or 'dfs'")

        if origin not in self or target not in self:
            return None

        start = self._index[origin]
        goal = self._index[target]

        # edge used to reach each expanded vertex; the path is rebuilt from it
        parents: Dict[int, Optional[Edge]] = {}
        frontier = deque([(start, None)])
        # bfs pops the oldest entry, dfs the newest
        pop = frontier.popleft if strategy == "bfs" else frontier.pop

        while frontier:
            idx, via = pop()
            if idx in parents:
                continue
            parents[idx] = via

            if idx == goal:
                return self._rebuild_path(parents, goal)

            edges = self._vertices[idx].edges
            if strategy == "dfs":
                # keep insertion order when popping from the right
                edges = reversed(edges)
            for edge in edges:
                if edge.target not in parents:
                    frontier.append((edge.target, edge))

        logger.debug(f"No path from {origin!r} to {target!r}")
        return None

    @staticmethod
    def _rebuild_path(parents: Dict[int, Optional[Edge]], goal: int) -> List[Edge]:
        path: List[Edge] = []
        edge = parents[goal]
        while edge is not None:
            path.append(edge)
            edge = parents[edge.source]
        path.reverse()
        return path

    def fold_path(
        self,
        origin: T,
        target: T,
        seed: float,
        strategy: str = "bfs",
    ) -> Optional[float]:
        """Multiply `seed` by every edge weight along a path, in path order.

        Returns:
            The folded value, or None if no path exists
        """
        path = self.find_path(origin, target, strategy=strategy)
        if path is None:
            return None

        value = seed
        for edge in path:
            value *= edge.weight
        return value


__all__ = [
    "Connection",
    "Edge",
    "Vertex",
    "Graph",
    "STRATEGIES",
]
