# domain/errors.py
from typing import Literal

Side = Literal["source", "destination"]


class RouteGraphError(ValueError):
    """Base for every recoverable failure raised or returned by the core.

    Failures compare by type and payload, so repeating a failed query
    gives an equal result.
    """

    def _ident(self) -> tuple:
        return self.args

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._ident() == other._ident()

    def __hash__(self):
        return hash((type(self), self._ident()))


class InvalidCoordinateFormat(RouteGraphError):
    def __init__(self, raw, reason: str = "expected exactly two numeric components"):
        self.raw = raw
        self.reason = reason
        super().__init__(f"invalid coordinate {raw!r}: {reason}")


class InvalidRoute(RouteGraphError):
    def __init__(self, n_points: int):
        self.n_points = n_points
        super().__init__(f"a route needs at least 2 points, got {n_points}")


class NodeNotFound(RouteGraphError):
    def __init__(self, side: Side, key: str):
        self.side, self.key = side, key
        super().__init__(f"{side} node {key!r} is not in the compiled graph")

    def _ident(self) -> tuple:
        return (self.side, self.key)


class NoPathFound(RouteGraphError):
    def __init__(self, source_key: str, destination_key: str):
        self.source_key, self.destination_key = source_key, destination_key
        super().__init__(f"no directed path from {source_key!r} to {destination_key!r}")

    def _ident(self) -> tuple:
        return (self.source_key, self.destination_key)


class SelectionIncomplete(RouteGraphError):
    def __init__(self, state: str):
        self.state = state
        super().__init__(f"source and destination not both selected (state={state})")
