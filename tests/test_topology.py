import numpy as np
import pytest

from conftest import grid
from glyphholes.errors import ConfigError
from glyphholes.topology import border_coords, fill_exterior, fill_hole, fill_shape, neighbours

RING = grid([
    ".......",
    ".#####.",
    ".#...#.",
    ".#...#.",
    ".#####.",
    ".......",
])


def test_neighbours() -> None:
    assert len(neighbours(4)) == 4
    assert len(neighbours(8)) == 8
    assert set(neighbours(4)) < set(neighbours(8))
    with pytest.raises(ConfigError):
        neighbours(6)


def test_fill_hole_claims_only_its_region() -> None:
    visited = np.zeros(RING.shape, bool)
    n = fill_hole(RING, visited, (2, 2))
    assert n == 6
    assert visited[2:4, 2:5].all()
    assert visited.sum() == 6
    assert not np.any(visited & RING)


def test_fill_hole_is_idempotent() -> None:
    visited = np.zeros(RING.shape, bool)
    fill_hole(RING, visited, (0, 0))
    snapshot = visited.copy()
    assert fill_hole(RING, visited, (0, 0)) == 0
    assert fill_hole(RING, visited, (5, 6)) == 0
    assert np.array_equal(visited, snapshot)


def test_fill_hole_ignores_foreground_and_out_of_bounds_seeds() -> None:
    visited = np.zeros(RING.shape, bool)
    assert fill_hole(RING, visited, (1, 1)) == 0
    assert fill_hole(RING, visited, (-1, 0)) == 0
    assert fill_hole(RING, visited, (0, 7)) == 0
    assert not visited.any()


def test_fill_shape_counts_hole_when_exterior_claimed() -> None:
    vs = np.zeros(RING.shape, bool); vh = np.zeros(RING.shape, bool)
    fill_exterior(RING, vh)
    shape = fill_shape(RING, vs, vh, (1, 1))
    assert shape.holes == 1
    assert shape.area == RING.sum()
    assert np.array_equal(vs, RING)
    assert np.array_equal(vs | vh, np.ones(RING.shape, bool))


def test_unclaimed_exterior_is_miscounted_as_hole() -> None:
    vs = np.zeros(RING.shape, bool); vh = np.zeros(RING.shape, bool)
    assert fill_shape(RING, vs, vh, (1, 1)).holes == 2


def test_fill_shape_on_visited_seed_is_noop() -> None:
    vs = np.zeros(RING.shape, bool); vh = np.zeros(RING.shape, bool)
    fill_exterior(RING, vh)
    fill_shape(RING, vs, vh, (1, 1))
    vs0, vh0 = vs.copy(), vh.copy()
    again = fill_shape(RING, vs, vh, (2, 1))
    assert (again.area, again.holes) == (0, 0)
    assert fill_shape(RING, vs, vh, (0, 0)).area == 0
    assert np.array_equal(vs, vs0) and np.array_equal(vh, vh0)


def test_border_coords_visits_each_edge_pixel_once() -> None:
    for shape in [(1, 1), (1, 5), (5, 1), (2, 2), (4, 6)]:
        coords = list(border_coords(shape))
        h, w = shape
        expected = {(y, x) for y in range(h) for x in range(w) if y in (0, h-1) or x in (0, w-1)}
        assert len(coords) == len(expected)
        assert set(coords) == expected
    assert list(border_coords((0, 3))) == []


def test_exterior_reaches_background_split_by_a_bar() -> None:
    fg = grid([
        "..#..",
        "..#..",
        "..#..",
    ])
    vh = np.zeros(fg.shape, bool)
    assert fill_exterior(fg, vh) == 12
    assert np.array_equal(vh, ~fg)


def test_large_region_fills_without_recursion() -> None:
    fg = np.zeros((400, 400), bool)
    vh = np.zeros(fg.shape, bool)
    assert fill_hole(fg, vh, (200, 200), 8) == fg.size
