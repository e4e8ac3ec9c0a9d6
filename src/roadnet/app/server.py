# app/server.py
import time
from typing import BinaryIO

from roadnet.app.codec import (
    REQUEST_FIELDS,
    DecodedRequest,
    DecodeStatus,
    count_fields,
    decode_request,
    encode_no_path,
    encode_path,
)
from roadnet.app.hooks import NoopHooks, ServerHooks
from roadnet.app.protocols import RoutePlanner

MAX_MESSAGE_BYTES = 1024


class RequestReader:
    """
    Frames requests out of a byte stream.

    A request ends at the first newline where either REQUEST_FIELDS fields or
    two non-blank lines are buffered. Bytes past that point stay buffered for
    the next request. The buffer never grows beyond max_message_bytes.
    """

    def __init__(
        self,
        stream: BinaryIO,
        *,
        max_message_bytes: int = MAX_MESSAGE_BYTES,
        chunk_bytes: int = MAX_MESSAGE_BYTES,
    ):
        self.stream = stream
        self.max_message_bytes = max_message_bytes
        self.chunk_bytes = min(chunk_bytes, max_message_bytes)
        self._buf = bytearray()
        self._eof = False

    def _frame_end(self) -> int | None:
        lines = fields = start = 0
        while (nl := self._buf.find(b"\n", start)) != -1:
            n = count_fields(self._buf[start:nl])
            if n:
                lines += 1
                fields += n
            start = nl + 1
            if lines >= 2 or fields >= REQUEST_FIELDS:
                return start
        return None

    def _take(self, n: int) -> bytes:
        out = bytes(self._buf[:n])
        del self._buf[:n]
        return out

    def read_request(self) -> DecodedRequest:
        while True:
            end = self._frame_end()
            if end is not None:
                return decode_request(self._take(end))
            if self._eof:
                # whatever is left is the last request (possibly without a newline)
                return decode_request(self._take(len(self._buf)))
            room = self.max_message_bytes - len(self._buf)
            if room <= 0:
                self._take(len(self._buf))
                return DecodedRequest(DecodeStatus.OVERSIZED)
            chunk = self.stream.read(min(self.chunk_bytes, room))
            if not chunk:
                self._eof = True
            else:
                self._buf += chunk


class RouteServer:
    """Serves one query at a time until the input ends or a request is malformed."""

    def __init__(
        self,
        router: RoutePlanner,
        *,
        hooks: ServerHooks | None = None,
        max_message_bytes: int = MAX_MESSAGE_BYTES,
        read_chunk_bytes: int = MAX_MESSAGE_BYTES,
        info: dict | None = None,
    ):
        self.router = router
        self.max_message_bytes, self.read_chunk_bytes = max_message_bytes, read_chunk_bytes
        self._hooks = hooks or NoopHooks()
        self._info = info or {}

    def answer(self, req: DecodedRequest, *, seq: int = 0) -> bytes:
        t0 = time.perf_counter()
        try:
            path = self.router.route(req.start, req.end)
        except Exception as exc:
            self._hooks.error(req, exc=exc, seq=seq)
            raise
        self._hooks.response(
            req,
            seq=seq,
            found=path is not None,
            vertices=len(path) if path is not None else 0,
            distance=path.total if path is not None else None,
            ms=(time.perf_counter() - t0) * 1000,
        )
        if path is None:
            return encode_no_path()
        return encode_path(path.points)

    def serve(self, instream: BinaryIO, outstream: BinaryIO) -> int:
        t0 = time.perf_counter()
        self._hooks.serve_start(max_message_bytes=self.max_message_bytes, **self._info)
        reader = RequestReader(
            instream, max_message_bytes=self.max_message_bytes, chunk_bytes=self.read_chunk_bytes
        )
        served = 0
        while True:
            req = reader.read_request()
            if not req.ok:
                break
            self._hooks.request(req, seq=served)
            outstream.write(self.answer(req, seq=served))
            outstream.flush()
            served += 1

        if req.status is DecodeStatus.EMPTY:
            reason = "eof"
        else:
            # malformed input ends the session, same as end of stream
            reason = "malformed"
            self._hooks.malformed(req, seq=served)
        self._hooks.serve_end(
            served=served, reason=reason, wall_ms=(time.perf_counter() - t0) * 1000
        )
        return served
