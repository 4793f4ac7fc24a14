# domain/graph_compiler.py
from collections.abc import Iterable

import numpy as np

from route_graph.domain.canonical import Canonicalizer
from route_graph.domain.entities.geography import Edge, EdgeKey, Graph, Node, NodeKey, Route


def segment_weights(route: Route) -> np.ndarray:
    """Planar length of each consecutive pair: hypot(dlng, dlat)."""
    xy = np.asarray([c.as_tuple() for c in route.coordinates], dtype=float)
    d = np.diff(xy, axis=0)
    return np.hypot(d[:, 0], d[:, 1])


def compile_graph(routes: Iterable[Route], canonicalizer: Canonicalizer | None = None) -> Graph:
    """
    Build a fresh directed graph from every committed route.

    Total: never fails, and an empty input gives an empty graph. A later edge
    for the same ordered pair overwrites the earlier weight. Repeated
    consecutive points give zero-weight self-loops.
    """
    canon = canonicalizer or Canonicalizer()
    nodes: dict[NodeKey, Node] = {}
    edges: dict[EdgeKey, Edge] = {}

    for route in routes:
        if len(route.coordinates) < 2:
            continue
        keys = [canon.canonicalize(c) for c in route.coordinates]
        for k, c in zip(keys, route.coordinates):
            nodes.setdefault(k, Node(k, c))
        for u, v, w in zip(keys, keys[1:], segment_weights(route)):
            edges[(u, v)] = Edge(u, v, float(w))

    return Graph(nodes=nodes, edges=edges)
