# tests/domain/test_snapping.py
import numpy as np
import pytest

from roadnet.domain.entities.geography import Coord, manhattan
from roadnet.domain.mechanics.snapping import NearestVertexIndex, nearest_vertex


@pytest.fixture
def points() -> dict[int, Coord]:
    rng = np.random.default_rng(3)
    lat = rng.integers(5_300_000, 5_370_000, size=200)
    lon = rng.integers(-11_370_000, -11_330_000, size=200)
    return {1000 + i: Coord(int(a), int(b)) for i, (a, b) in enumerate(zip(lat, lon))}


def test_each_vertex_snaps_to_itself(points):
    index = NearestVertexIndex(points)
    seen: set[Coord] = set()
    for vid, p in points.items():
        if p in seen:  # a lower-enumerated vertex shares the coordinate
            continue
        seen.add(p)
        assert index.nearest(p) == vid


def test_matches_linear_scan(points):
    index = NearestVertexIndex(points)
    rng = np.random.default_rng(8)
    for _ in range(50):
        q = Coord(int(rng.integers(5_290_000, 5_380_000)), int(rng.integers(-11_380_000, -11_320_000)))
        best = min(points.items(), key=lambda kv: manhattan(q, kv[1]))[0]  # min keeps the first
        assert index.nearest(q) == best


def test_ties_go_to_first_enumerated_vertex():
    pts = {9: Coord(0, 10), 4: Coord(10, 0), 7: Coord(0, 10)}
    assert nearest_vertex(Coord(0, 0), pts) == 9
    pts = {4: Coord(10, 0), 9: Coord(0, 10)}
    assert nearest_vertex(Coord(0, 0), pts) == 4


def test_deterministic_for_identical_input(points):
    q = Coord(5_333_333, -11_350_000)
    assert NearestVertexIndex(points).nearest(q) == NearestVertexIndex(dict(points)).nearest(q)


def test_negative_ids_and_coordinates():
    pts = {-5: Coord(-100, -100), 2: Coord(100, 100)}
    assert nearest_vertex(Coord(-90, -80), pts) == -5


def test_empty_vertex_set_is_rejected():
    with pytest.raises(ValueError):
        NearestVertexIndex({})
