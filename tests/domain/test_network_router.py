# tests/domain/test_network_router.py
import random

from roadnet.app.protocols import RoutePlanner
from roadnet.domain.entities.geography import Coord, manhattan
from roadnet.domain.graph import RoadNetwork, WDigraph
from roadnet.domain.mechanics.dijkstra import dijkstra
from roadnet.domain.mechanics.mechanics_routers import NetworkRouter


def _grid_network(n: int = 6, seed: int = 1) -> RoadNetwork:
    """n x n grid, 1e-3 deg spacing, random one-way streets."""
    rnd = random.Random(seed)
    g, points = WDigraph(), {}
    for i in range(n):
        for j in range(n):
            v = i * n + j
            g.add_vertex(v)
            points[v] = Coord(5_350_000 + 100 * i, -11_350_000 + 100 * j)
    for i in range(n):
        for j in range(n):
            v = i * n + j
            for w in (v + 1 if j + 1 < n else None, v + n if i + 1 < n else None):
                if w is None:
                    continue
                direction = rnd.random()
                if direction < 0.7:
                    g.add_edge(v, w, manhattan(points[v], points[w]))
                if direction > 0.3:
                    g.add_edge(w, v, manhattan(points[v], points[w]))
    return RoadNetwork.build(g, points)


def test_router_satisfies_protocol():
    assert isinstance(NetworkRouter(_grid_network()), RoutePlanner)


def test_paths_start_and_end_at_snapped_vertices():
    net = _grid_network()
    router = NetworkRouter(net)
    rnd = random.Random(9)
    for _ in range(40):
        a = Coord(5_350_000 + rnd.randint(-50, 550), -11_350_000 + rnd.randint(-50, 550))
        b = Coord(5_350_000 + rnd.randint(-50, 550), -11_350_000 + rnd.randint(-50, 550))
        s, t = router.snap(a), router.snap(b)
        path = router.route(a, b)
        tree = dijkstra(net.graph, s)
        if not tree.reached(t):
            assert path is None
            continue
        assert path.vertices[0] == s and path.vertices[-1] == t
        assert path.points == [net.point(v) for v in path.vertices]
        legs = sum(manhattan(p, q) for p, q in zip(path.points, path.points[1:]))
        assert legs == path.total == tree.distance(t)


def test_same_vertex_route_is_single_point():
    net = _grid_network()
    path = NetworkRouter(net).route(Coord(5_350_000, -11_350_000), Coord(5_350_001, -11_350_001))
    assert path.vertices == [0]
    assert path.total == 0
    assert len(path) == 1
