import json

import numpy as np
import pytest

from conftest import grid
from glyphholes.config import Settings
from glyphholes.errors import DecodeError, InvalidShapeError
from glyphholes.pipeline import count_glob, count_image

RING = grid([
    ".......",
    ".#####.",
    ".#...#.",
    ".#####.",
    ".......",
])

THREE_HOLES = grid([
    ".........",
    ".#######.",
    ".#.#.#.#.",
    ".#######.",
    ".........",
])


def test_count_image(write_png) -> None:
    scan = count_image(write_png(RING))
    assert scan.tallies.counts == (0, 1, 0)
    assert scan.threshold == 128


def test_count_image_with_cross_check(write_png) -> None:
    scan = count_image(write_png(RING), Settings(threshold=None), check=True)
    assert scan.meta["cross_check"] == 1
    assert scan.tallies[1] == 1


def test_light_strokes_need_a_higher_threshold(write_png) -> None:
    path = write_png(RING, dark=200)
    assert count_image(path).tallies.total == 0
    assert count_image(path, Settings(threshold=250)).tallies[1] == 1


def test_count_image_errors(tmp_path, write_png) -> None:
    with pytest.raises(DecodeError):
        count_image(str(tmp_path / "missing.png"))
    with pytest.raises(InvalidShapeError):
        count_image(write_png(THREE_HOLES))


def test_count_glob_writes_summary(tmp_path, write_png) -> None:
    write_png(RING, "a_ring.png")
    write_png(np.pad(RING, 3), "b_padded.png")
    write_png(THREE_HOLES, "c_three.png")
    (tmp_path / "d_bad.png").write_bytes(b"junk")
    out = tmp_path / "out" / "summary.json"

    rows = count_glob(str(tmp_path / "*.png"), out_json=str(out))
    assert [r["file"] for r in rows] == ["a_ring.png", "b_padded.png", "c_three.png", "d_bad.png"]
    assert rows[0]["tallies"] == {"0": 0, "1": 1, "2": 0}
    assert rows[1]["labels"] == rows[0]["labels"]
    assert rows[2]["error"] == "InvalidShapeError"
    assert "tallies" not in rows[2]
    assert rows[3]["error"] == "DecodeError"

    saved = json.loads(out.read_text(encoding="utf-8"))
    assert saved["results"] == rows


def test_count_glob_without_matches(tmp_path) -> None:
    assert count_glob(str(tmp_path / "*.png"), out_json=None) == []
