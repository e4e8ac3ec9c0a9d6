from typing import Protocol, runtime_checkable

from roadnet.domain.entities.geography import Coord, Path


@runtime_checkable
class RoutePlanner(Protocol):
    """
    Responsibilities:
      • Snap both endpoints onto the network.
      • Return the shortest path between the snapped vertices, or None if unreachable.
    Units: fixed-point degrees (1e-5) for coordinates and distances.
    """

    def route(self, a: Coord, b: Coord) -> Path | None: ...
    def snap(self, p: Coord) -> int: ...

