# roadnet/domain/mechanics/snapping.py
from collections.abc import Mapping

import numpy as np

from roadnet.domain.entities.geography import Coord


class NearestVertexIndex:
    """
    Linear-scan snapping over a fixed vertex table.
    Ties go to the vertex enumerated first in the source mapping.
    """

    def __init__(self, points: Mapping[int, Coord]):
        if not points:
            raise ValueError("nearest-vertex index needs at least one vertex")
        self._ids = np.fromiter(points.keys(), dtype=np.int64, count=len(points))
        self._lat = np.fromiter((p.lat for p in points.values()), dtype=np.int64, count=len(points))
        self._lon = np.fromiter((p.lon for p in points.values()), dtype=np.int64, count=len(points))

    def __len__(self) -> int:
        return len(self._ids)

    def distances(self, p: Coord) -> np.ndarray:
        return np.abs(self._lat - p.lat) + np.abs(self._lon - p.lon)

    def nearest(self, p: Coord) -> int:
        # argmin returns the first occurrence of the minimum
        return int(self._ids[np.argmin(self.distances(p))])


def nearest_vertex(p: Coord, vertices: Mapping[int, Coord]) -> int:
    return NearestVertexIndex(vertices).nearest(p)
