# domain/path_finder.py
import heapq
from dataclasses import dataclass

from route_graph.domain.canonical import Canonicalizer
from route_graph.domain.entities.geography import Coordinate, Graph, NodeKey
from route_graph.domain.errors import NodeNotFound, NoPathFound

PathFailure = NodeNotFound | NoPathFound


@dataclass(frozen=True)
class PathResult:
    """Outcome of one query: an ordered path, or the failure that stopped it."""

    coordinates: tuple[Coordinate, ...] = ()
    keys: tuple[NodeKey, ...] = ()
    total_weight: float = float("inf")
    failure: PathFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def failed(cls, failure: PathFailure) -> "PathResult":
        return cls(failure=failure)

    def unwrap(self) -> tuple[Coordinate, ...]:
        if self.failure is not None:
            raise self.failure
        return self.coordinates


def dijkstra(
    graph: Graph, source: NodeKey, target: NodeKey | None = None
) -> tuple[dict[NodeKey, float], dict[NodeKey, NodeKey]]:
    """
    Single-source shortest distances over directed edges.

    Returns (dist, pred) for settled nodes. Stops as soon as `target` is
    settled. Heap entries carry an insertion counter, so among equal
    distances the first-discovered node is settled first, and a predecessor
    only changes on strict improvement.
    """
    dist: dict[NodeKey, float] = {source: 0.0}
    pred: dict[NodeKey, NodeKey] = {}
    settled: set[NodeKey] = set()
    seq = 0
    q: list[tuple[float, int, NodeKey]] = [(0.0, seq, source)]

    while q:
        d, _, u = heapq.heappop(q)
        if u in settled:
            continue  # stale entry
        settled.add(u)
        if u == target:
            break
        for e in graph.successors(u):
            if e.weight < 0:
                raise ValueError(f"negative edge weight {e.weight} on {e.source}->{e.target}")
            v = e.target
            if v in settled:
                continue
            nd = d + e.weight
            if nd < dist.get(v, float("inf")):
                dist[v] = nd
                pred[v] = u
                seq += 1
                heapq.heappush(q, (nd, seq, v))

    return {k: dist[k] for k in settled}, {k: pred[k] for k in settled if k in pred}


def find_path(
    graph: Graph, source, destination, canonicalizer: Canonicalizer | None = None
) -> PathResult:
    canon = canonicalizer or Canonicalizer()
    s, t = canon.canonicalize(source), canon.canonicalize(destination)
    if s not in graph:
        return PathResult.failed(NodeNotFound("source", s))
    if t not in graph:
        return PathResult.failed(NodeNotFound("destination", t))

    dist, pred = dijkstra(graph, s, t)
    if t not in dist:
        return PathResult.failed(NoPathFound(s, t))

    keys = [t]
    while keys[-1] != s:
        keys.append(pred[keys[-1]])
    keys.reverse()

    return PathResult(
        coordinates=tuple(graph.nodes[k].coordinate for k in keys),
        keys=tuple(keys),
        total_weight=dist[t],
    )
