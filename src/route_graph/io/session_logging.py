# io/session_logging.py
import json
import logging
import sys

from route_graph.app.hooks import NoopHooks


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, default=str)


def default_json_logger(name="route_graph", level="INFO", stream=None):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(stream or sys.stdout)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


class SessionLogging(NoopHooks):
    """
    Shapes planner session events into structured JSON log lines.
    The domain code never logs; it only calls these hooks.
    """

    def __init__(
        self,
        session: str = "session",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
    ):
        self.session, self.debug = session, debug
        self.log = logger or default_json_logger(level=level)

    def _emit(self, level: str, msg: str, **extra):
        payload = {"session": self.session}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    # ------------- routes --------------------------

    def route_committed(self, *, route_id, n_points):
        self._emit("INFO", "route_committed", route_id=route_id, n_points=n_points)

    def route_removed(self, *, route_id, removed):
        level = "INFO" if removed else "WARNING"
        self._emit(level, "route_removed", route_id=route_id, removed=removed)

    # ------------- graph & queries --------------------

    def graph_compiled(self, *, n_routes, n_nodes, n_edges, ms):
        self._emit(
            "INFO",
            "graph_compiled",
            n_routes=n_routes,
            n_nodes=n_nodes,
            n_edges=n_edges,
            ms=round(ms, 3),
        )

    def path_found(self, *, source, destination, hops, weight, ms):
        self._emit(
            "INFO",
            "path_found",
            source=source,
            destination=destination,
            hops=hops,
            weight=weight,
            ms=round(ms, 3),
        )

    def path_failed(self, *, reason: str, **kw):
        self._emit("WARNING", "path_failed", reason=reason, **kw)

    def selection(self, *, state, **kw):
        if self.debug:
            self._emit("DEBUG", "selection", state=state, **kw)
