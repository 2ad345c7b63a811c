# topology.py
# flood fills: background regions (holes) and shapes with their hole count

from __future__ import annotations
from collections import deque
from dataclasses import dataclass

import numpy as np

from .errors import ConfigError

Coord = tuple[int, int]

_NBRS4 = ((-1,0),(1,0),(0,-1),(0,1))
_NBRS8 = _NBRS4 + ((-1,-1),(-1,1),(1,-1),(1,1))


def neighbours(connectivity: int) -> tuple[Coord, ...]:
    """(dy,dx) offsets for 4- (N/S/W/E) or 8-neighbour adjacency."""
    if connectivity == 4:
        return _NBRS4
    if connectivity == 8:
        return _NBRS8
    raise ConfigError(f"connectivity must be 4 or 8, got {connectivity}")


@dataclass
class Shape:
    seed: Coord     # first pixel in row-major order
    area: int       # foreground pixels absorbed
    holes: int      # enclosed background regions claimed by this shape


def fill_hole(grid: np.ndarray, visited_hole: np.ndarray, seed: Coord, connectivity: int = 4) -> int:
    """
    Claim the background region containing seed in visited_hole.
    Returns the number of pixels newly claimed; 0 when seed is out of bounds,
    foreground, or already claimed.
    """
    nbrs = neighbours(connectivity)
    h, w = grid.shape
    y, x = seed
    if not (0 <= y < h and 0 <= x < w) or grid[y,x] or visited_hole[y,x]:
        return 0
    visited_hole[y,x] = True
    q = deque([(y,x)]); n = 0
    while q:
        cy, cx = q.popleft(); n += 1
        for dy, dx in nbrs:
            ny, nx = cy+dy, cx+dx
            if 0<=ny<h and 0<=nx<w and not grid[ny,nx] and not visited_hole[ny,nx]:
                visited_hole[ny,nx] = True; q.append((ny,nx))
    return n


def fill_shape(
    grid: np.ndarray,
    visited_shape: np.ndarray,
    visited_hole: np.ndarray,
    seed: Coord,
    shape_connectivity: int = 4,
    hole_connectivity: int = 4,
) -> Shape:
    """
    Absorb the foreground region containing seed into visited_shape.

    Every background neighbour met on the way is a candidate hole: if
    visited_hole does not claim it yet, its whole region is filled and the
    hole count goes up by one. The exterior background must already be
    claimed, otherwise it is counted as a hole of the first shape scanned.
    A seed that is background or already absorbed yields an empty Shape.
    """
    nbrs = neighbours(shape_connectivity)
    h, w = grid.shape
    y, x = seed
    if not (0 <= y < h and 0 <= x < w) or not grid[y,x] or visited_shape[y,x]:
        return Shape(seed=seed, area=0, holes=0)
    visited_shape[y,x] = True
    q = deque([(y,x)]); area = holes = 0
    while q:
        cy, cx = q.popleft(); area += 1
        for dy, dx in nbrs:
            ny, nx = cy+dy, cx+dx
            if not (0<=ny<h and 0<=nx<w):
                continue
            if grid[ny,nx]:
                if not visited_shape[ny,nx]:
                    visited_shape[ny,nx] = True; q.append((ny,nx))
            elif not visited_hole[ny,nx]:
                fill_hole(grid, visited_hole, (ny,nx), hole_connectivity)
                holes += 1
    return Shape(seed=seed, area=area, holes=holes)


def border_coords(shape: tuple[int, int]):
    """Every border coordinate of an (h, w) grid, each once, clockwise from (0,0)."""
    h, w = shape
    if h == 0 or w == 0:
        return
    for x in range(w): yield (0, x)
    for y in range(1, h): yield (y, w-1)
    if h > 1:
        for x in range(w-2, -1, -1): yield (h-1, x)
    if w > 1:
        for y in range(h-2, 0, -1): yield (y, 0)


def fill_exterior(grid: np.ndarray, visited_hole: np.ndarray, connectivity: int = 4) -> int:
    """Claim all background reachable from the image border. Returns pixels claimed."""
    return sum(fill_hole(grid, visited_hole, c, connectivity) for c in border_coords(grid.shape))
