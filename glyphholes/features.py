# features.py
# scikit-image reference hole counts, used to cross-check the flood fills

import numpy as np
from skimage.measure import label as sklabel
from skimage.morphology import dilation

from .topology import neighbours


def _sk_connectivity(connectivity: int) -> int:
    neighbours(connectivity)  # validates 4/8
    return 1 if connectivity == 4 else 2


def _footprint(connectivity: int) -> np.ndarray:
    fp = np.zeros((3,3), bool); fp[1,1] = True
    for dy, dx in neighbours(connectivity):
        fp[1+dy, 1+dx] = True
    return fp


def _border_labels(labels: np.ndarray) -> set:
    border = set(np.unique(np.r_[labels[0,:], labels[-1,:], labels[:,0], labels[:,-1]]))
    border.discard(0)
    return border


def holes_count(fg_mask, hole_connectivity: int = 4) -> int:
    """Number of background components not touching the image border."""
    fg = np.asarray(fg_mask, dtype=bool)
    if fg.size == 0: return 0
    labels = sklabel(~fg, connectivity=_sk_connectivity(hole_connectivity))
    all_ids = set(np.unique(labels)); all_ids.discard(0)
    return len(all_ids - _border_labels(labels))


def shape_hole_counts(fg_mask, shape_connectivity: int = 4, hole_connectivity: int = 4) -> list[int]:
    """
    Hole count of every shape, in row-major order of each shape's first pixel.
    A hole touching several shapes (e.g. a blob sitting inside a ring) is
    credited to the first of them in that order, as the scanning fill does.
    """
    fg = np.asarray(fg_mask, dtype=bool)
    if fg.size == 0: return []
    shapes = sklabel(fg, connectivity=_sk_connectivity(shape_connectivity))
    bg = sklabel(~fg, connectivity=_sk_connectivity(hole_connectivity))
    claimed = _border_labels(bg)
    fp = _footprint(shape_connectivity)

    flat = shapes.ravel()
    ids, first = np.unique(flat, return_index=True)
    order = [i for _, i in sorted(zip(first, ids)) if i != 0]

    counts = []
    for i in order:
        touched = set(np.unique(bg[dilation((shapes == i).astype(np.uint8), fp) > 0])); touched.discard(0)
        new = touched - claimed
        claimed |= new
        counts.append(len(new))
    return counts
