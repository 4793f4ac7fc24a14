# io/render.py
import json
import sys
from typing import Protocol

from route_graph.config.models import LineStyleModel
from route_graph.domain.entities.geography import Coordinate, RouteId


class Sink(Protocol):
    def write(self, msg: dict) -> None: ...


class JsonlSink:
    def __init__(self, fp=sys.stdout):
        self.fp = fp

    def write(self, msg: dict) -> None:
        self.fp.write(json.dumps(msg) + "\n")


class MemorySink:
    def __init__(self):
        self.messages: list[dict] = []

    def write(self, msg: dict) -> None:
        self.messages.append(msg)

    @property
    def features(self) -> list[dict]:
        return [m["feature"] for m in self.messages if "feature" in m]


def line_feature(layer_id: str, coordinates: tuple[Coordinate, ...], style: LineStyleModel) -> dict:
    """GeoJSON LineString feature with paint hints in its properties."""
    return {
        "type": "Feature",
        "id": layer_id,
        "geometry": {
            "type": "LineString",
            "coordinates": [list(c.as_tuple()) for c in coordinates],
        },
        "properties": {"line-color": style.color, "line-width": style.width},
    }


class GeoJsonRenderer:
    """
    Emits add/remove layer messages for a map front-end.
    Routes go to layers "route<id>", the found path to the single layer "path".
    """

    PATH_LAYER = "path"

    def __init__(self, *sinks: Sink):
        self.sinks = sinks or (MemorySink(),)

    def _send(self, msg: dict) -> None:
        for s in self.sinks:
            s.write(msg)

    def render_polyline(self, route_id: RouteId, coordinates, style: LineStyleModel) -> None:
        lid = f"route{route_id}"
        self._send({"op": "add", "layer": lid, "feature": line_feature(lid, coordinates, style)})

    def remove_polyline(self, route_id: RouteId) -> None:
        self._send({"op": "remove", "layer": f"route{route_id}"})

    def render_path(self, coordinates, style: LineStyleModel) -> None:
        lid = self.PATH_LAYER
        self._send({"op": "add", "layer": lid, "feature": line_feature(lid, coordinates, style)})
