import numpy as np
import pytest

from conftest import grid
from glyphholes.classify import count_shapes
from glyphholes.features import holes_count, shape_hole_counts


def test_holes_count_on_simple_glyphs() -> None:
    assert holes_count(grid(["...", ".#.", "..."])) == 0
    assert holes_count(grid([".....", ".###.", ".#.#.", ".###.", "....."])) == 1
    assert holes_count(np.zeros((0, 0), bool)) == 0


def test_shared_hole_goes_to_first_shape() -> None:
    fg = grid([
        ".......",
        ".#####.",
        ".#...#.",
        ".#.#.#.",
        ".#...#.",
        ".#####.",
        ".......",
    ])
    assert shape_hole_counts(fg) == [1, 0]


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
@pytest.mark.parametrize("sc,hc", [(4, 4), (4, 8), (8, 4), (8, 8)])
def test_flood_fill_agrees_with_skimage_on_noise(seed, sc, hc) -> None:
    rng = np.random.default_rng(seed)
    fg = rng.random((24, 31)) < 0.45
    scan = count_shapes(fg, shape_connectivity=sc, hole_connectivity=hc, max_holes=fg.size)
    assert [s.holes for s in scan.shapes] == shape_hole_counts(fg, sc, hc)
    assert sum(s.holes for s in scan.shapes) == holes_count(fg, hc)
