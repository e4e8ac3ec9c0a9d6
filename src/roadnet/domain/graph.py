# roadnet/domain/graph.py
from collections.abc import Iterator
from dataclasses import dataclass, field

from roadnet.domain.entities.geography import Coord
from roadnet.domain.mechanics.snapping import NearestVertexIndex

INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1


class VertexIdRangeError(ValueError):
    pass


class WDigraph:
    """
    Weighted directed graph over integer vertex ids.
    Parallel edges and self-loops are kept as given.
    """

    def __init__(self):
        self._adj: dict[int, list[tuple[int, int]]] = {}
        self._edges = 0

    def add_vertex(self, v: int) -> bool:
        if not INT32_MIN <= v <= INT32_MAX:
            raise VertexIdRangeError(f"vertex id {v} does not fit in 32 bits")
        if v in self._adj:
            return False
        self._adj[v] = []
        return True

    def add_edge(self, u: int, v: int, weight: int) -> None:
        if u not in self._adj:
            raise KeyError(u)
        if v not in self._adj:
            raise KeyError(v)
        if weight < 0:
            raise ValueError(f"negative weight {weight} on edge {u}->{v}")
        self._adj[u].append((v, weight))
        self._edges += 1

    def neighbors(self, u: int) -> tuple[tuple[int, int], ...]:
        return tuple(self._adj.get(u, ()))

    def is_vertex(self, v: int) -> bool:
        return v in self._adj

    __contains__ = is_vertex

    def vertices(self) -> Iterator[int]:
        return iter(self._adj)

    def size(self) -> int:
        return len(self._adj)

    def num_edges(self) -> int:
        return self._edges


@dataclass(frozen=True)
class RoadNetwork:
    """Graph + coordinate table + snapping index, shared read-only by all queries."""

    graph: WDigraph
    points: dict[int, Coord]
    index: NearestVertexIndex = field(repr=False)

    @classmethod
    def build(cls, graph: WDigraph, points: dict[int, Coord]) -> "RoadNetwork":
        return cls(graph=graph, points=points, index=NearestVertexIndex(points))

    def point(self, v: int) -> Coord:
        return self.points[v]
