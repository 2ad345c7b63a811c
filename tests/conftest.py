import numpy as np
import pytest
from PIL import Image


def grid(rows):
    """'#' = foreground, anything else = background."""
    return np.array([[c == '#' for c in r] for r in rows], dtype=bool)


def to_gray(fg, dark=0, light=255):
    return np.where(fg, dark, light).astype(np.uint8)


@pytest.fixture
def write_png(tmp_path):
    def _write(fg, name="glyph.png", dark=0, light=255):
        path = tmp_path / name
        Image.fromarray(to_gray(fg, dark, light)).save(path)
        return str(path)
    return _write
