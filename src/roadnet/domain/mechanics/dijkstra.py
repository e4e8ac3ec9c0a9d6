# roadnet/domain/mechanics/dijkstra.py
import heapq
from collections import deque
from dataclasses import dataclass, field

from roadnet.domain.graph import WDigraph


@dataclass
class ShortestPathTree:
    source: int
    entries: dict[int, tuple[int, int]] = field(default_factory=dict)  # v -> (pred, dist)

    def __len__(self) -> int:
        return len(self.entries)

    def reached(self, v: int) -> bool:
        return v in self.entries

    def predecessor(self, v: int) -> int:
        return self.entries[v][0]

    def distance(self, v: int) -> int:
        return self.entries[v][1]

    def path_to(self, target: int) -> list[int] | None:
        """Vertices from source to target, or None when target was not reached."""
        if target not in self.entries:
            return None
        path = deque([target])
        v = target
        while (pred := self.entries[v][0]) != v:
            path.appendleft(pred)
            v = pred
        return list(path)


def dijkstra(graph: WDigraph, source: int) -> ShortestPathTree:
    """
    Single-source shortest paths over the whole reachable component.
    An unknown source yields an empty tree.
    """
    tree = ShortestPathTree(source)
    if not graph.is_vertex(source):
        return tree

    dist: dict[int, int] = {source: 0}
    pred: dict[int, int] = {source: source}
    done: set[int] = set()
    seq = 0
    q: list[tuple[int, int, int]] = [(0, seq, source)]  # (dist, seq, vertex); seq breaks ties FIFO

    while q:
        d, _, u = heapq.heappop(q)
        if u in done:
            continue
        done.add(u)
        for v, w in graph.neighbors(u):
            nd = d + w
            if v not in dist or nd < dist[v]:
                dist[v], pred[v] = nd, u
                seq += 1
                heapq.heappush(q, (nd, seq, v))

    tree.entries = {v: (pred[v], dist[v]) for v in dist}
    return tree
