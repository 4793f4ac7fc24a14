from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from functools import cached_property
from math import isfinite
from numbers import Real
from types import MappingProxyType

from route_graph.domain.errors import InvalidCoordinateFormat

NodeKey = str
RouteId = int
EdgeKey = tuple[NodeKey, NodeKey]


def _component(raw, value) -> float:
    if isinstance(value, bool):
        raise InvalidCoordinateFormat(raw, "components must be numbers, not booleans")
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise InvalidCoordinateFormat(raw, f"{value!r} is not numeric") from None
    elif not isinstance(value, Real):
        raise InvalidCoordinateFormat(raw, f"{type(value).__name__} is not numeric")
    v = float(value)
    if not isfinite(v):
        raise InvalidCoordinateFormat(raw, "components must be finite")
    return v


# Core geometry types; lng/lat are raw map degrees, never projected
@dataclass(frozen=True)
class Coordinate:
    lng: float
    lat: float

    def __post_init__(self):
        raw = (self.lng, self.lat)
        lng, lat = _component(raw, self.lng), _component(raw, self.lat)
        # bounded map degrees: every segment length stays finite
        if not -180.0 <= lng <= 180.0:
            raise InvalidCoordinateFormat(raw, f"longitude {lng} outside [-180, 180]")
        if not -90.0 <= lat <= 90.0:
            raise InvalidCoordinateFormat(raw, f"latitude {lat} outside [-90, 90]")
        object.__setattr__(self, "lng", lng)
        object.__setattr__(self, "lat", lat)

    @classmethod
    def parse(cls, raw) -> "Coordinate":
        """Accept a Coordinate, a (lng, lat) pair, a "lng, lat" string, or a
        mapping with lng/lat (or longitude/latitude) keys."""
        if isinstance(raw, Coordinate):
            return raw
        if isinstance(raw, str):
            parts = raw.split(",")
        elif isinstance(raw, Mapping):
            if "lng" in raw and "lat" in raw:
                parts = [raw["lng"], raw["lat"]]
            elif "longitude" in raw and "latitude" in raw:
                parts = [raw["longitude"], raw["latitude"]]
            else:
                raise InvalidCoordinateFormat(raw, "mapping needs lng/lat or longitude/latitude")
        elif isinstance(raw, Sequence) or (hasattr(raw, "__len__") and hasattr(raw, "__getitem__")):
            parts = list(raw)
        else:
            raise InvalidCoordinateFormat(raw, f"unsupported type {type(raw).__name__}")
        if len(parts) != 2:
            raise InvalidCoordinateFormat(raw, f"expected 2 components, got {len(parts)}")
        return cls(_component(raw, parts[0]), _component(raw, parts[1]))

    def as_tuple(self) -> tuple[float, float]:
        return (self.lng, self.lat)


@dataclass(frozen=True)
class Node:
    key: NodeKey
    coordinate: Coordinate  # first raw coordinate seen for this key


@dataclass(frozen=True)
class Edge:
    source: NodeKey
    target: NodeKey
    weight: float  # planar distance in degrees, not meters

    def __post_init__(self):
        if not isfinite(self.weight) or self.weight < 0:
            raise ValueError(f"edge weight must be finite and >= 0, got {self.weight}")


@dataclass(frozen=True)
class Route:
    route_id: RouteId
    coordinates: tuple[Coordinate, ...]

    def __len__(self) -> int:
        return len(self.coordinates)


@dataclass(frozen=True)
class Graph:
    """Immutable snapshot produced by one compilation.

    Edges are directed. Re-inserting an ordered pair replaces the weight but
    keeps the pair's first insertion position, which fixes edge iteration order.
    """

    nodes: Mapping[NodeKey, Node] = field(default_factory=dict)
    edges: Mapping[EdgeKey, Edge] = field(default_factory=dict)

    __hash__ = None  # mappings are not hashable

    def __post_init__(self):
        # private copies behind read-only views; callers cannot patch a snapshot
        object.__setattr__(self, "nodes", MappingProxyType(dict(self.nodes)))
        object.__setattr__(self, "edges", MappingProxyType(dict(self.edges)))

    @cached_property
    def _adjacency(self) -> dict[NodeKey, tuple[Edge, ...]]:
        adj: dict[NodeKey, list[Edge]] = {k: [] for k in self.nodes}
        for e in self.edges.values():
            adj.setdefault(e.source, []).append(e)
        return {k: tuple(v) for k, v in adj.items()}

    def __contains__(self, key: NodeKey) -> bool:
        return key in self.nodes

    def successors(self, key: NodeKey) -> tuple[Edge, ...]:
        return self._adjacency.get(key, ())

    def edge(self, source: NodeKey, target: NodeKey) -> Edge | None:
        return self.edges.get((source, target))

    @property
    def n_nodes(self) -> int:
        return len(self.nodes)

    @property
    def n_edges(self) -> int:
        return len(self.edges)
