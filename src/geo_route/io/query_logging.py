# geo_route/io/query_logging.py
import json
import logging
import math
import sys

from geo_route.domain.routing.hooks import NoopHooks


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


def _finite(x):
    return x if isinstance(x, (int, float)) and math.isfinite(x) else None


def default_json_logger(name="geo_route", level="INFO", *, json_format: bool = True):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stderr)
        fmt = "%(levelname)s %(name)s: %(message)s"
        h.setFormatter(_JsonFormatter() if json_format else logging.Formatter(fmt))
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


class QueryLogging(NoopHooks):
    """
    Shapes and emits structured logs for path queries and bulk loads.
    """

    def __init__(
        self,
        session: str = "default",
        level: str = "INFO",
        debug: bool = False,
        json_format: bool = True,
        logger: logging.Logger | None = None,
    ):
        self.session, self.debug = session, debug
        self.log = logger or default_json_logger(level=level, json_format=json_format)
        self.queries = 0

    def _emit(self, level: str, msg: str, **extra):
        payload = {"session": self.session}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    def query_start(self, *, source, target, vertices):
        self.queries += 1
        if self.debug:
            self._emit("DEBUG", "query_start", source=source, target=target, vertices=vertices)

    def query_end(self, result, *, wall_ms):
        self._emit(
            "INFO",
            "query_end",
            found=result.found,
            hops=max(len(result.path) - 1, 0),
            cost=_finite(result.cost),
            explored=result.explored,
            wall_ms=round(wall_ms, 3),
        )

    def load_end(self, *, nodes, arcs, skipped):
        level = "WARNING" if skipped else "INFO"
        self._emit(level, "load_end", nodes=nodes, arcs=arcs, skipped=skipped)

    def invalid_reference(self, exc):
        self._emit(
            "WARNING",
            "invalid_reference",
            from_id=exc.from_id,
            to_id=exc.to_id,
            missing=list(exc.missing),
        )
