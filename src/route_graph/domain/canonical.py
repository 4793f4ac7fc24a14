# domain/canonical.py
from dataclasses import dataclass

from route_graph.domain.entities.geography import Coordinate, NodeKey

DEFAULT_PRECISION = 4  # decimals shown by the capture panel


@dataclass(frozen=True)
class Canonicalizer:
    """
    Maps a raw coordinate to the node identity used by the graph.

    The same instance (same precision) must be used to compile a graph and to
    query it; two coordinates share a node iff their keys are equal strings.
      • precision=p: round each component to p decimals, format with p digits
      • precision=None: full float repr, exact matching only
    """

    precision: int | None = DEFAULT_PRECISION

    def __post_init__(self):
        if self.precision is not None and not (0 <= self.precision <= 12):
            raise ValueError(f"precision must be in 0..12 or None, got {self.precision}")

    def _fmt(self, v: float) -> str:
        if self.precision is None:
            return repr(v + 0.0)
        return f"{self._round(v):.{self.precision}f}"

    def _round(self, v: float) -> float:
        if self.precision is None:
            return v + 0.0
        # + 0.0 folds -0.0 into 0.0 so both sides of the meridian agree
        return round(v, self.precision) + 0.0

    def canonicalize(self, coordinate) -> NodeKey:
        c = Coordinate.parse(coordinate)
        return f"{self._fmt(c.lng)},{self._fmt(c.lat)}"

    def quantize(self, coordinate) -> Coordinate:
        c = Coordinate.parse(coordinate)
        return Coordinate(self._round(c.lng), self._round(c.lat))

    def display(self, coordinate) -> str:
        """Panel text, e.g. "-74.0090, 40.7128"."""
        c = Coordinate.parse(coordinate)
        return f"{self._fmt(c.lng)}, {self._fmt(c.lat)}"


def canonicalize(coordinate, precision: int | None = DEFAULT_PRECISION) -> NodeKey:
    return Canonicalizer(precision).canonicalize(coordinate)
