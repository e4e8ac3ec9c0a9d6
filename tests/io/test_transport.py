# tests/io/test_transport.py
import os
import threading
import time

import pytest

from roadnet.app.server import RouteServer
from roadnet.domain.mechanics.mechanics_routers import NetworkRouter
from roadnet.io.graph_loader import read_road_network
from roadnet.io.transport import fifo_pair

pytestmark = pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="named pipes need POSIX")


def _wait_for(path: str, timeout: float = 5.0) -> None:
    deadline = time.monotonic() + timeout
    while not os.path.exists(path):
        if time.monotonic() > deadline:
            raise TimeoutError(path)
        time.sleep(0.01)


def test_fifo_pair_serves_and_cleans_up(tmp_path):
    inpipe, outpipe = str(tmp_path / "inpipe"), str(tmp_path / "outpipe")
    server = RouteServer(NetworkRouter(read_road_network(["V,1,0,0", "V,2,1,0", "E,1,2"])))
    result = {}

    def run():
        with fifo_pair(inpipe, outpipe) as (fin, fout):
            result["served"] = server.serve(fin, fout)

    t = threading.Thread(target=run, daemon=True)
    t.start()

    _wait_for(inpipe)
    with open(inpipe, "wb", buffering=0) as w:
        _wait_for(outpipe)
        with open(outpipe, "rb") as r:
            w.write(b"0 0\n")
            time.sleep(0.05)  # second half arrives in a separate read
            w.write(b"1 0\n")
            lines = [r.readline() for _ in range(3)]
    t.join(timeout=5.0)

    assert not t.is_alive()
    assert lines == [b"0.00000 0.00000\n", b"1.00000 0.00000\n", b"E\n"]
    assert result["served"] == 1
    assert not os.path.exists(inpipe) and not os.path.exists(outpipe)


def test_existing_pipe_path_is_a_startup_error(tmp_path):
    inpipe = tmp_path / "inpipe"
    inpipe.write_text("left over")
    with pytest.raises(FileExistsError):
        with fifo_pair(str(inpipe), str(tmp_path / "outpipe")):
            pass
    assert inpipe.read_text() == "left over"
