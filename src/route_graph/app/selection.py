# app/selection.py
from enum import Enum

from route_graph.app.hooks import NoopHooks
from route_graph.app.protocols import SessionHooks
from route_graph.domain.canonical import Canonicalizer
from route_graph.domain.entities.geography import Coordinate
from route_graph.domain.errors import SelectionIncomplete


class SelectionState(str, Enum):
    IDLE = "idle"
    AWAITING_SOURCE = "awaiting_source"
    AWAITING_DESTINATION = "awaiting_destination"
    READY = "ready"


class SelectionMachine:
    """
    Two-click capture of a source then a destination.

    IDLE --enable--> AWAITING_SOURCE --click--> AWAITING_DESTINATION --click--> READY
    Enabling from READY starts over. Clicks in IDLE or READY are ignored.
    Captured points are quantized with the session canonicalizer so they
    resolve against compiled nodes under the same precision rule.
    """

    def __init__(
        self, canonicalizer: Canonicalizer | None = None, hooks: SessionHooks | None = None
    ):
        self.canon = canonicalizer or Canonicalizer()
        self._hooks = hooks or NoopHooks()
        self.state = SelectionState.IDLE
        self.source: Coordinate | None = None
        self.destination: Coordinate | None = None

    def _to(self, state: SelectionState) -> None:
        self.state = state
        self._hooks.selection(
            state=state.value,
            source=self.source.as_tuple() if self.source else None,
            destination=self.destination.as_tuple() if self.destination else None,
        )

    def enable(self) -> SelectionState:
        if self.state is SelectionState.IDLE:
            self._to(SelectionState.AWAITING_SOURCE)
        elif self.state is SelectionState.READY:
            self.source = self.destination = None
            self._to(SelectionState.AWAITING_SOURCE)
        return self.state

    def click(self, lnglat) -> bool:
        """Feed one map click; returns False when the click was ignored."""
        if self.state is SelectionState.AWAITING_SOURCE:
            self.source = self.canon.quantize(lnglat)
            self._to(SelectionState.AWAITING_DESTINATION)
            return True
        if self.state is SelectionState.AWAITING_DESTINATION:
            self.destination = self.canon.quantize(lnglat)
            self._to(SelectionState.READY)
            return True
        return False

    def reset(self) -> None:
        self.source = self.destination = None
        self._to(SelectionState.IDLE)

    @property
    def ready(self) -> bool:
        return self.state is SelectionState.READY

    def query(self) -> tuple[Coordinate, Coordinate]:
        if not self.ready:
            raise SelectionIncomplete(self.state.value)
        return self.source, self.destination

    def display(self) -> tuple[str, str]:
        return (
            self.canon.display(self.source) if self.source else "",
            self.canon.display(self.destination) if self.destination else "",
        )
