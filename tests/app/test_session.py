import pytest

from route_graph.app.hooks import NoopHooks
from route_graph.app.session import PlannerSession, build
from route_graph.config.models import PlannerModel
from route_graph.domain.canonical import Canonicalizer
from route_graph.domain.errors import InvalidRoute, NodeNotFound, NoPathFound, SelectionIncomplete
from route_graph.io.render import GeoJsonRenderer, MemorySink


class RecordingHooks(NoopHooks):
    def __init__(self):
        self.calls = []

    def route_committed(self, **kw):
        self.calls.append(("route_committed", kw))

    def route_removed(self, **kw):
        self.calls.append(("route_removed", kw))

    def graph_compiled(self, **kw):
        self.calls.append(("graph_compiled", kw))

    def path_found(self, **kw):
        self.calls.append(("path_found", kw))

    def path_failed(self, **kw):
        self.calls.append(("path_failed", kw))


@pytest.fixture
def sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def hooks() -> RecordingHooks:
    return RecordingHooks()


@pytest.fixture
def session(sink, hooks) -> PlannerSession:
    return PlannerSession(renderer=GeoJsonRenderer(sink), hooks=hooks)


def test_commit_renders_polyline(session: PlannerSession, sink: MemorySink, hooks):
    rid = session.commit_route([(0, 0), (0, 1)])
    msg = sink.messages[-1]
    assert msg["op"] == "add" and msg["layer"] == f"route{rid}"
    assert msg["feature"]["geometry"]["coordinates"] == [[0.0, 0.0], [0.0, 1.0]]
    assert msg["feature"]["properties"] == {"line-color": "#FF0000", "line-width": 4.0}
    assert hooks.calls[-1] == ("route_committed", {"route_id": rid, "n_points": 2})


def test_single_point_commit_fails_and_renders_nothing(session: PlannerSession, sink):
    with pytest.raises(InvalidRoute):
        session.commit_route([(0, 0)])
    assert sink.messages == []
    assert session.waypoints() == ()


def test_compile_then_find_with_selection(session: PlannerSession, sink, hooks):
    session.commit_route([(0, 0), (0, 1), (1, 1)])
    g = session.compile()
    assert (g.n_nodes, g.n_edges) == (3, 2)

    session.selection.enable()
    session.selection.click({"lng": 0.00001, "lat": 0.0})
    session.selection.click({"lng": 1.0, "lat": 0.99999})
    r = session.find_path()
    assert r.ok and r.total_weight == pytest.approx(2.0)
    assert sink.messages[-1]["layer"] == "path"
    assert sink.messages[-1]["feature"]["properties"]["line-color"] == "#00FFFF"
    name, kw = hooks.calls[-1]
    assert name == "path_found" and kw["hops"] == 2


def test_find_path_without_selection_fails(session: PlannerSession):
    session.commit_route([(0, 0), (1, 0)])
    with pytest.raises(SelectionIncomplete):
        session.find_path()


def test_find_path_compiles_lazily_once(session: PlannerSession, hooks):
    session.commit_route([(0, 0), (1, 0)])
    assert session.graph is None
    session.find_path((0, 0), (1, 0))
    session.find_path((0, 0), (1, 0))
    assert [c for c, _ in hooks.calls].count("graph_compiled") == 1


def test_query_uses_held_snapshot_until_recompiled(session: PlannerSession):
    session.commit_route([(0, 0), (1, 0)])
    old = session.compile()
    session.commit_route([(1, 0), (2, 0)])
    assert isinstance(session.find_path((0, 0), (2, 0)).failure, NodeNotFound)

    new = session.compile()
    assert new is not old and old.n_nodes == 2
    assert session.find_path((0, 0), (2, 0)).ok


def test_failures_are_returned_and_reported(session: PlannerSession, hooks):
    session.commit_route([(0, 0), (1, 0)])
    session.compile()

    r = session.find_path((1, 0), (0, 0))
    assert isinstance(r.failure, NoPathFound)
    assert hooks.calls[-1][1]["reason"] == "no_path"

    r = session.find_path((0, 0), (7, 7))
    assert isinstance(r.failure, NodeNotFound)
    assert hooks.calls[-1][1]["reason"] == "node_not_found"
    assert hooks.calls[-1][1]["side"] == "destination"


def test_remove_route_then_recompile(session: PlannerSession, sink, hooks):
    a = session.commit_route([(0, 0), (1, 0)])
    session.commit_route([(1, 0), (1, 1)])
    assert session.remove_route(a) is True
    assert sink.messages[-1] == {"op": "remove", "layer": f"route{a}"}
    assert session.remove_route(a) is False
    assert hooks.calls[-1] == ("route_removed", {"route_id": a, "removed": False})
    assert "0.0000,0.0000" not in session.compile()


def test_build_from_mapping_applies_config():
    s = build(
        {
            "name": "t",
            "canonical": {"precision": 2},
            "style": {"route": {"color": "#00ff00", "width": 2}},
        },
        use_logging=False,
    )
    assert s.canon == Canonicalizer(2)
    assert s.style.route.color == "#00FF00"
    assert isinstance(s.hooks, NoopHooks)
    assert isinstance(s.renderer, GeoJsonRenderer)


def test_build_accepts_model_and_runs_end_to_end():
    s = build(PlannerModel(), use_logging=False)
    s.commit_route([(0, 0), (1, 0)])
    s.commit_route([(1, 0), (1, 1)])
    s.compile()
    assert [c.as_tuple() for c in s.find_path((0, 0), (1, 1)).unwrap()] == [(0, 0), (1, 0), (1, 1)]
