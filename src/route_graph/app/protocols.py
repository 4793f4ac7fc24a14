from typing import Protocol, runtime_checkable

from route_graph.domain.entities.geography import Coordinate, RouteId


@runtime_checkable
class Renderer(Protocol):
    """
    Responsibilities:
      • Draw each committed route and the latest found path.
      • Forget a route's polyline when the route is removed.
    The core only hands over data; it never draws.
    """

    def render_polyline(
        self, route_id: RouteId, coordinates: tuple[Coordinate, ...], style
    ) -> None: ...
    def remove_polyline(self, route_id: RouteId) -> None: ...
    def render_path(self, coordinates: tuple[Coordinate, ...], style) -> None: ...


@runtime_checkable
class SessionHooks(Protocol):
    """Observation points of a planner session; implementations must not raise."""

    def route_committed(self, *, route_id, n_points): ...
    def route_removed(self, *, route_id, removed): ...
    def graph_compiled(self, *, n_routes, n_nodes, n_edges, ms): ...
    def path_found(self, *, source, destination, hops, weight, ms): ...
    def path_failed(self, *, reason: str, **kw): ...
    def selection(self, *, state, **kw): ...
