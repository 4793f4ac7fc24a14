# domain/route_store.py
from collections.abc import Iterable

from route_graph.domain.entities.geography import Coordinate, Route, RouteId
from route_graph.domain.errors import InvalidRoute


class RouteStore:
    """Append-only log of committed polylines for one session."""

    def __init__(self):
        self._routes: dict[RouteId, Route] = {}
        self._next_id: RouteId = 0

    def commit_route(self, coordinates: Iterable) -> RouteId:
        pts = tuple(Coordinate.parse(p) for p in coordinates)
        if len(pts) < 2:
            raise InvalidRoute(len(pts))
        rid = self._next_id
        self._next_id += 1  # ids are never reused, even after removal
        self._routes[rid] = Route(rid, pts)
        return rid

    def remove_route(self, route_id: RouteId) -> bool:
        return self._routes.pop(route_id, None) is not None

    def clear(self) -> int:
        n = len(self._routes)
        self._routes.clear()
        return n

    def get(self, route_id: RouteId) -> Route | None:
        return self._routes.get(route_id)

    def list_routes(self) -> tuple[Route, ...]:
        return tuple(self._routes.values())

    def __len__(self) -> int:
        return len(self._routes)

