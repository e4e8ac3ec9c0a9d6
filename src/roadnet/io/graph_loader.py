# io/graph_loader.py
import logging
from collections.abc import Iterable

from roadnet.domain.entities.geography import Coord, manhattan
from roadnet.domain.graph import RoadNetwork, VertexIdRangeError, WDigraph

log = logging.getLogger(__name__)

VERTEX, EDGE = "V", "E"


def _parse_id(text: str) -> int:
    return int(text.strip())


def read_road_network(lines: Iterable[str]) -> RoadNetwork:
    """
    Build a network from "V,id,lat,lon" and "E,u,v[,name]" records.

    Loading is best-effort: it stops at the first line that is not one of
    those shapes. A vertex id outside 32-bit range is fatal (ValueError).
    """
    graph = WDigraph()
    points: dict[int, Coord] = {}

    for lineno, raw in enumerate(lines, start=1):
        p = raw.rstrip("\r\n").split(",")
        try:
            if p[0] == VERTEX and len(p) == 4:
                v = _parse_id(p[1])
                coord = Coord.from_degrees(p[2], p[3])
                if not graph.add_vertex(v):
                    log.warning("duplicate vertex ignored", extra={"extra": {"line": lineno, "id": v}})
                    continue
                points[v] = coord
            elif p[0] == EDGE and len(p) in (3, 4):
                u, v = _parse_id(p[1]), _parse_id(p[2])
                if u not in points or v not in points:
                    raise KeyError(u if u not in points else v)
                graph.add_edge(u, v, manhattan(points[u], points[v]))
            else:
                log.warning("graph load stopped", extra={"extra": {"line": lineno, "reason": "shape"}})
                break
        except KeyError as exc:
            log.warning(
                "graph load stopped",
                extra={"extra": {"line": lineno, "reason": "unknown_vertex", "id": exc.args[0]}},
            )
            break
        except VertexIdRangeError:
            raise
        except ValueError as exc:
            log.warning(
                "graph load stopped",
                extra={"extra": {"line": lineno, "reason": "bad_number", "error": str(exc)}},
            )
            break

    if not points:
        raise ValueError("graph source has no vertices")
    log.info(
        "graph loaded", extra={"extra": {"vertices": graph.size(), "edges": graph.num_edges()}}
    )
    return RoadNetwork.build(graph, points)


def load_road_network(path: str) -> RoadNetwork:
    with open(path, encoding="utf-8") as f:
        return read_road_network(f)
