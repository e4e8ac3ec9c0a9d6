# app/hooks.py
from typing import Protocol

from roadnet.app.codec import DecodedRequest


class ServerHooks(Protocol):
    def serve_start(self, *, max_message_bytes, **info): ...
    def serve_end(self, *, served, reason, wall_ms): ...
    def request(self, req: DecodedRequest, *, seq): ...
    def response(self, req: DecodedRequest, *, seq, found, vertices, distance, ms): ...
    def malformed(self, req: DecodedRequest, *, seq): ...
    def error(self, req: DecodedRequest, *, exc: BaseException, **kw): ...


class NoopHooks:
    def serve_start(self, **_):
        pass

    def serve_end(self, **_):
        pass

    def request(self, *_, **__):
        pass

    def response(self, *_, **__):
        pass

    def malformed(self, *_, **__):
        pass

    def error(self, *_, **__):
        pass
