# app/codec.py
import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from roadnet.domain.entities.geography import Coord, format_fixed

REQUEST_FIELDS = 4  # startLat startLon endLat endLon
TERMINATOR = b"E\n"
SEPARATORS = frozenset(" \t\r\n")
_FIELD = re.compile(rb"[^ \t\r\n]+")


class DecodeStatus(Enum):
    OK = "ok"
    EMPTY = "empty"  # nothing left on the stream
    WRONG_ARITY = "wrong_arity"
    BAD_NUMBER = "bad_number"
    OVERSIZED = "oversized"  # no complete request within the read bound


@dataclass(frozen=True)
class DecodedRequest:
    status: DecodeStatus
    start: Coord | None = None
    end: Coord | None = None
    fields: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.status is DecodeStatus.OK


def tokenize(text: str) -> list[str]:
    """Split on runs of spaces, tabs and line breaks."""
    fields: list[str] = []
    cur: list[str] = []
    for ch in text:
        if ch in SEPARATORS:
            if cur:
                fields.append("".join(cur))
                cur = []
        else:
            cur.append(ch)
    if cur:
        fields.append("".join(cur))
    return fields


def count_fields(line: bytes) -> int:
    """Number of fields in raw bytes, split the same way as tokenize."""
    return len(_FIELD.findall(line))


def decode_request(payload: bytes) -> DecodedRequest:
    if not payload:
        return DecodedRequest(DecodeStatus.EMPTY)
    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError:
        return DecodedRequest(DecodeStatus.BAD_NUMBER)

    fields = tuple(tokenize(text))
    if not fields:
        return DecodedRequest(DecodeStatus.EMPTY)
    if len(fields) != REQUEST_FIELDS:
        return DecodedRequest(DecodeStatus.WRONG_ARITY, fields=fields)
    try:
        start, end = Coord.from_degrees(*fields[:2]), Coord.from_degrees(*fields[2:])
    except ValueError:
        return DecodedRequest(DecodeStatus.BAD_NUMBER, fields=fields)
    return DecodedRequest(DecodeStatus.OK, start, end, fields)


def encode_point(p: Coord) -> bytes:
    return f"{format_fixed(p.lat)} {format_fixed(p.lon)}\n".encode("ascii")


def encode_path(points: Iterable[Coord]) -> bytes:
    return b"".join(encode_point(p) for p in points) + TERMINATOR


def encode_no_path() -> bytes:
    return TERMINATOR
