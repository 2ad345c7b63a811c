# binarise.py
# thresholding

import numpy as np

from .errors import ConfigError


def otsu(gray: np.ndarray) -> int:
    hist = np.bincount(gray.ravel(), minlength=256).astype(np.float64)
    total = gray.size
    sum_total = np.dot(np.arange(256), hist)
    sumB = wB = 0.0; var_max = -1.0; thr = 0
    for t in range(256):
        wB += hist[t]
        if wB == 0: continue
        wF = total - wB
        if wF == 0: break
        sumB += t*hist[t]
        mB = sumB / wB;  mF = (sum_total - sumB) / wF
        var_between = wB * wF * (mB - mF) ** 2
        if var_between > var_max: var_max, thr = var_between, t
    return thr


def binarise(gray: np.ndarray, threshold: int|None=128) -> tuple[np.ndarray,int]:
    """
    Occupancy grid from an 8-bit luminance matrix.
    A pixel is foreground (True) iff its luminance is <= threshold, so dark
    strokes on a light page become shapes. threshold=None uses Otsu.
    Returns (grid, threshold actually used); the input is not modified.
    """
    gray = np.asarray(gray)
    if gray.ndim != 2:
        raise ValueError(f"expected a 2D luminance matrix, got shape {gray.shape}")
    if threshold is None:
        threshold = otsu(gray.astype(np.uint8)) if gray.size else 128
    if isinstance(threshold, bool) or not isinstance(threshold, (int, np.integer)):
        raise ConfigError(f"threshold must be an integer, got {threshold!r}")
    if not 0 <= threshold <= 255:
        raise ConfigError(f"threshold must be in 0..255, got {threshold}")
    fg = gray <= int(threshold)   # dark = foreground
    return fg, int(threshold)
