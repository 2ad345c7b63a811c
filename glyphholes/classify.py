# classify.py
# scan the grid, fill each shape, tally shapes by hole count

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, List, TYPE_CHECKING

import numpy as np

from .binarise import binarise
from .errors import ConfigError, InvalidShapeError
from .topology import Shape, fill_exterior, fill_shape, neighbours

if TYPE_CHECKING:
    from .config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tallies:
    """Shape counts indexed by hole count: counts[k] = shapes with k holes."""
    counts: tuple[int, ...]

    def __getitem__(self, holes: int) -> int:
        return self.counts[holes]

    def __len__(self) -> int:
        return len(self.counts)

    @property
    def total(self) -> int:
        return sum(self.counts)

    def as_dict(self) -> Dict[int, int]:
        return dict(enumerate(self.counts))


@dataclass
class ShapeScan:
    tallies: Tallies
    shapes: List[Shape]
    visited_shape: np.ndarray
    visited_hole: np.ndarray
    threshold: int | None = None
    meta: Dict[str, int] = field(default_factory=dict)


def count_shapes(
    fg: np.ndarray,
    *,
    shape_connectivity: int = 4,
    hole_connectivity: int = 4,
    max_holes: int = 2,
) -> ShapeScan:
    """
    Classify every shape of an occupancy grid by its number of holes.

    The exterior background (everything reachable from the border) is
    claimed first; then the grid is scanned row-major and each unvisited
    foreground pixel starts a shape fill. Raises InvalidShapeError as soon
    as a shape has more than max_holes holes; nothing is tallied then.
    """
    neighbours(shape_connectivity); neighbours(hole_connectivity)  # validate early
    if max_holes < 0:
        raise ConfigError(f"max_holes must be >= 0, got {max_holes}")
    grid = np.array(fg, dtype=bool)
    if grid.ndim != 2:
        raise ValueError(f"expected a 2D occupancy grid, got shape {grid.shape}")
    grid.flags.writeable = False
    h, w = grid.shape
    visited_shape = np.zeros((h,w), bool)
    visited_hole = np.zeros((h,w), bool)

    exterior = fill_exterior(grid, visited_hole, hole_connectivity)
    counts = [0] * (max_holes + 1)
    shapes: List[Shape] = []
    for y in range(h):
        for x in range(w):
            if not grid[y,x] or visited_shape[y,x]: continue
            shape = fill_shape(grid, visited_shape, visited_hole, (y,x),
                               shape_connectivity, hole_connectivity)
            logger.debug(f"shape at {shape.seed}: area={shape.area} holes={shape.holes}")
            if shape.holes > max_holes:
                raise InvalidShapeError(shape.holes, shape.seed, max_holes)
            counts[shape.holes] += 1
            shapes.append(shape)

    tallies = Tallies(tuple(counts))
    logger.info(f"{tallies.total} shapes in {w}x{h} grid, by hole count: {list(tallies.counts)}")
    return ShapeScan(
        tallies=tallies,
        shapes=shapes,
        visited_shape=visited_shape,
        visited_hole=visited_hole,
        meta={"exterior_pixels": int(exterior), "holes": sum(s.holes for s in shapes)},
    )


def classify(gray: np.ndarray, settings: "Settings") -> tuple[np.ndarray, ShapeScan]:
    """Binarise a luminance matrix and count its shapes with the given settings."""
    fg, thr = binarise(gray, settings.threshold)
    scan = count_shapes(
        fg,
        shape_connectivity=settings.shape_connectivity,
        hole_connectivity=settings.hole_connectivity,
        max_holes=settings.max_holes,
    )
    scan.threshold = thr
    return fg, scan
