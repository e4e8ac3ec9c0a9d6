# io/server_logging.py
import json
import logging
import sys

from roadnet.app.codec import DecodedRequest
from roadnet.app.hooks import NoopHooks


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(name="roadnet", level="INFO", stream=None) -> logging.Logger:
    # stderr: stdout may be carrying responses
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(stream or sys.stderr)
        h.setFormatter(JsonFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


class ServerLogging(NoopHooks):
    """
    Structured logs for the request loop lifecycle.
    Per-query records only when debug is on.
    """

    def __init__(
        self,
        name: str = "roadnet",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
    ):
        self.name, self.debug = name, debug
        self.log = logger or configure_logging(level="DEBUG" if debug else level)

    def _emit(self, level: str, msg: str, **extra):
        self.log.log(getattr(logging, level), msg, extra={"extra": {"server": self.name, **extra}})

    @staticmethod
    def _shape(req: DecodedRequest) -> dict:
        base = {"status": req.status.value}
        if req.ok:
            base["start"] = [req.start.lat, req.start.lon]
            base["end"] = [req.end.lat, req.end.lon]
        elif req.fields:
            base["fields"] = len(req.fields)
        return base

    def serve_start(self, *, max_message_bytes, **info):
        self._emit("INFO", "serve_start", max_message_bytes=max_message_bytes, **info)

    def serve_end(self, *, served, reason, wall_ms):
        self._emit("INFO", "serve_end", served=served, reason=reason, wall_ms=round(wall_ms, 3))

    def request(self, req, *, seq):
        if self.debug:
            self._emit("DEBUG", "request", seq=seq, **self._shape(req))

    def response(self, req, *, seq, found, vertices, distance, ms):
        if self.debug:
            self._emit(
                "DEBUG",
                "response",
                seq=seq,
                found=found,
                vertices=vertices,
                distance=distance,
                ms=round(ms, 3),
            )

    def malformed(self, req, *, seq):
        self._emit("WARNING", "malformed_request", seq=seq, **self._shape(req))

    def error(self, req, *, exc: BaseException, **extra):
        self._emit("ERROR", "query_error", error=str(exc), **self._shape(req), **extra)
