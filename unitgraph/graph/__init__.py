"""Generic weighted graph with paired inverse edges.

Public API:
    Graph(connections) -> Graph
        Build from (origin, destination, weight) triples

    Graph.find_path(origin, target, strategy="bfs") -> list[Edge] | None
    Graph.fold_path(origin, target, seed, strategy="bfs") -> float | None
"""

from .weightedgraph import (
    Connection,
    Edge,
    Graph,
    STRATEGIES,
)

__all__ = [
    "Connection",
    "Edge",
    "Graph",
    "STRATEGIES",
]
