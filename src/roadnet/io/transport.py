# io/transport.py
import logging
import os
import sys
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager
from typing import BinaryIO

log = logging.getLogger(__name__)


def _unlink_quietly(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass


@contextmanager
def fifo_pair(inpipe: str, outpipe: str, *, mode: int = 0o666) -> Iterator[tuple[BinaryIO, BinaryIO]]:
    """
    Create both named pipes, open them and yield (instream, outstream).

    The input pipe is opened first; each open blocks until the peer opens the
    other end. Both pipes are closed and unlinked on exit. A pipe that already
    exists is a startup error (FileExistsError).
    """
    with ExitStack() as stack:
        os.mkfifo(inpipe, mode)
        stack.callback(_unlink_quietly, inpipe)
        fin = stack.enter_context(open(inpipe, "rb", buffering=0))
        log.info("pipe opened", extra={"extra": {"path": inpipe, "direction": "in"}})

        os.mkfifo(outpipe, mode)
        stack.callback(_unlink_quietly, outpipe)
        fout = stack.enter_context(open(outpipe, "wb"))
        log.info("pipe opened", extra={"extra": {"path": outpipe, "direction": "out"}})

        yield fin, fout


@contextmanager
def stdio_pair() -> Iterator[tuple[BinaryIO, BinaryIO]]:
    # unbuffered stdin so a read returns as soon as any bytes arrive
    fin = open(sys.stdin.fileno(), "rb", buffering=0, closefd=False)
    try:
        yield fin, sys.stdout.buffer
    finally:
        fin.close()
