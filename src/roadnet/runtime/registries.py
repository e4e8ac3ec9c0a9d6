# runtime/registries.py
from collections.abc import Callable
from contextlib import AbstractContextManager
from typing import Any

from roadnet.config.models import TransportFifoModel, TransportStdioModel, TransportUnion
from roadnet.io.transport import fifo_pair, stdio_pair

TransportFactory = Callable[[TransportUnion], AbstractContextManager[Any]]

_transport_registry: dict[str, TransportFactory] = {}


# ------------------- Transports ---------------------------


def register_transport(kind: str):
    def deco(fn: TransportFactory):
        _transport_registry[kind] = fn
        return fn

    return deco


def make_transport(cfg: TransportUnion) -> AbstractContextManager[Any]:
    try:
        factory = _transport_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown transport kind {cfg.kind!r}") from None
    return factory(cfg)


@register_transport("fifo")
def _make_fifo(cfg: TransportFifoModel):
    return fifo_pair(cfg.inpipe, cfg.outpipe, mode=cfg.mode)


@register_transport("stdio")
def _make_stdio(cfg: TransportStdioModel):
    return stdio_pair()
