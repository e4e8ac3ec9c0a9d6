# roadnet/runtime/resources.py
from functools import lru_cache

from roadnet.domain.graph import RoadNetwork
from roadnet.io.graph_loader import load_road_network


@lru_cache(maxsize=8)
def load_network_from_path(file: str, fmt: str) -> RoadNetwork:
    if fmt == "csv":
        return load_road_network(file)
    raise ValueError(f"Unsupported graph fmt {fmt!r}")
