# app/session.py
import time
from collections.abc import Iterable, Mapping

from route_graph.app.hooks import NoopHooks
from route_graph.app.protocols import Renderer, SessionHooks
from route_graph.app.selection import SelectionMachine
from route_graph.config.models import PlannerModel, StyleModel
from route_graph.domain.canonical import Canonicalizer
from route_graph.domain.entities.geography import Graph, Route, RouteId
from route_graph.domain.errors import NodeNotFound
from route_graph.domain.graph_compiler import compile_graph
from route_graph.domain.path_finder import PathResult, find_path
from route_graph.domain.route_store import RouteStore
from route_graph.io.render import GeoJsonRenderer, JsonlSink, MemorySink
from route_graph.io.session_logging import SessionLogging


class PlannerSession:
    """
    Route-finding session: committed routes, the latest compiled graph, and
    the two-click selection. The graph is only replaced by compile(); a query
    always runs against the snapshot held at call time.
    """

    def __init__(
        self,
        *,
        canonicalizer: Canonicalizer | None = None,
        renderer: Renderer | None = None,
        hooks: SessionHooks | None = None,
        style: StyleModel | None = None,
    ):
        self.canon = canonicalizer or Canonicalizer()
        self.renderer = renderer or GeoJsonRenderer()
        self.hooks = hooks or NoopHooks()
        self.style = style or StyleModel()
        self.store = RouteStore()
        self.selection = SelectionMachine(self.canon, hooks=self.hooks)
        self.graph: Graph | None = None

    # ------------- routes --------------------------

    def commit_route(self, coordinates: Iterable) -> RouteId:
        rid = self.store.commit_route(coordinates)
        route = self.store.get(rid)
        self.hooks.route_committed(route_id=rid, n_points=len(route))
        self.renderer.render_polyline(rid, route.coordinates, self.style.route)
        return rid

    def remove_route(self, route_id: RouteId) -> bool:
        removed = self.store.remove_route(route_id)
        if removed:
            self.renderer.remove_polyline(route_id)
        self.hooks.route_removed(route_id=route_id, removed=removed)
        return removed

    def waypoints(self) -> tuple[Route, ...]:
        return self.store.list_routes()

    # ------------- graph & queries --------------------

    def compile(self) -> Graph:
        t0 = time.perf_counter()
        routes = self.store.list_routes()
        graph = compile_graph(routes, self.canon)
        self.graph = graph
        self.hooks.graph_compiled(
            n_routes=len(routes),
            n_nodes=graph.n_nodes,
            n_edges=graph.n_edges,
            ms=(time.perf_counter() - t0) * 1000,
        )
        return graph

    def find_path(self, source=None, destination=None) -> PathResult:
        """Query explicit coordinates, or the READY selection when both are omitted."""
        if source is None and destination is None:
            source, destination = self.selection.query()
        graph = self.graph if self.graph is not None else self.compile()

        t0 = time.perf_counter()
        result = find_path(graph, source, destination, self.canon)
        ms = (time.perf_counter() - t0) * 1000

        if result.ok:
            self.hooks.path_found(
                source=result.keys[0],
                destination=result.keys[-1],
                hops=len(result.keys) - 1,
                weight=result.total_weight,
                ms=ms,
            )
            self.renderer.render_path(result.coordinates, self.style.path)
        elif isinstance(result.failure, NodeNotFound):
            f = result.failure
            self.hooks.path_failed(reason="node_not_found", side=f.side, key=f.key, ms=ms)
        else:
            f = result.failure
            self.hooks.path_failed(
                reason="no_path", source=f.source_key, destination=f.destination_key, ms=ms
            )
        return result


def build(
    cfg: PlannerModel | Mapping | None = None, *, use_logging: bool = True, renderer=None
) -> PlannerSession:
    # 0) Validate config
    if cfg is None:
        model = PlannerModel()
    else:
        model = cfg if isinstance(cfg, PlannerModel) else PlannerModel.model_validate(cfg)

    # 1) Hooks
    hooks = (
        SessionLogging(session=model.name, level=model.log.level, debug=model.log.debug)
        if use_logging
        else NoopHooks()
    )

    # 2) Renderer
    if renderer is None:
        sink = JsonlSink() if model.render.sink == "jsonl" else MemorySink()
        renderer = GeoJsonRenderer(sink)

    return PlannerSession(
        canonicalizer=Canonicalizer(model.canonical.precision),
        renderer=renderer,
        hooks=hooks,
        style=model.style,
    )
