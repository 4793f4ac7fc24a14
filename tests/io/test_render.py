import io
import json

from route_graph.app.protocols import Renderer
from route_graph.config.models import LineStyleModel
from route_graph.domain.entities.geography import Coordinate
from route_graph.io.render import GeoJsonRenderer, JsonlSink, MemorySink, line_feature


def test_renderer_satisfies_protocol():
    assert isinstance(GeoJsonRenderer(), Renderer)


def test_line_feature_shape():
    f = line_feature("route0", (Coordinate(0, 0), Coordinate(1.5, 2)), LineStyleModel())
    assert f == {
        "type": "Feature",
        "id": "route0",
        "geometry": {"type": "LineString", "coordinates": [[0.0, 0.0], [1.5, 2.0]]},
        "properties": {"line-color": "#FF0000", "line-width": 4.0},
    }


def test_fan_out_to_every_sink():
    mem, buf = MemorySink(), io.StringIO()
    r = GeoJsonRenderer(mem, JsonlSink(buf))
    style = LineStyleModel(color="#123abc", width=3)
    r.render_polyline(7, (Coordinate(0, 0), Coordinate(0, 1)), style)
    r.render_path((Coordinate(0, 0), Coordinate(0, 1)), style)
    r.remove_polyline(7)

    assert [m["layer"] for m in mem.messages] == ["route7", "path", "route7"]
    assert [f["id"] for f in mem.features] == ["route7", "path"]
    lines = [json.loads(x) for x in buf.getvalue().splitlines()]
    assert lines == mem.messages
    assert lines[0]["feature"]["properties"]["line-color"] == "#123ABC"
