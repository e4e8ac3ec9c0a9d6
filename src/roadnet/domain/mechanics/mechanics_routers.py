from roadnet.app.protocols import RoutePlanner
from roadnet.domain.entities.geography import Coord, Path
from roadnet.domain.graph import RoadNetwork
from roadnet.domain.mechanics.dijkstra import dijkstra


class NetworkRouter(RoutePlanner):
    def __init__(self, network: RoadNetwork):
        self.N = network

    def snap(self, p: Coord) -> int:
        return self.N.index.nearest(p)

    def route(self, a: Coord, b: Coord) -> Path | None:
        na, nb = self.snap(a), self.snap(b)
        # full traversal from na; the tree is discarded with this call
        tree = dijkstra(self.N.graph, na)
        nodes = tree.path_to(nb)
        if nodes is None:
            return None
        return Path(nodes, [self.N.point(v) for v in nodes], tree.distance(nb))
