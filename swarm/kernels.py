"""Numba JIT-compiled helpers for the exhaustive neighbor scan."""

import math
import numpy as np
from numba import njit


@njit(cache=True)
def pairwise_distances(positions: np.ndarray) -> np.ndarray:
    """Symmetric (N, N) Euclidean distance matrix with a zero diagonal."""
    n = positions.shape[0]
    out = np.zeros((n, n), dtype=np.float64)

    for i in range(n):
        for j in range(i + 1, n):
            dx = positions[i, 0] - positions[j, 0]
            dy = positions[i, 1] - positions[j, 1]
            dz = positions[i, 2] - positions[j, 2]
            d = math.sqrt(dx * dx + dy * dy + dz * dz)
            out[i, j] = d
            out[j, i] = d

    return out


@njit(cache=True)
def distances_to(positions: np.ndarray, point: np.ndarray) -> np.ndarray:
    """Distance from every row of ``positions`` to ``point``."""
    n = positions.shape[0]
    out = np.empty(n, dtype=np.float64)

    for i in range(n):
        dx = positions[i, 0] - point[0]
        dy = positions[i, 1] - point[1]
        dz = positions[i, 2] - point[2]
        out[i] = math.sqrt(dx * dx + dy * dy + dz * dz)

    return out


@njit(cache=True)
def nearest_index(positions: np.ndarray, point: np.ndarray):
    """
    Linear scan for the row of ``positions`` closest to ``point``.

    Returns:
        (index, distance); (-1, inf) when ``positions`` is empty
    """
    best = -1
    best_dist = np.inf

    for i in range(positions.shape[0]):
        dx = positions[i, 0] - point[0]
        dy = positions[i, 1] - point[1]
        dz = positions[i, 2] - point[2]
        d = math.sqrt(dx * dx + dy * dy + dz * dz)
        if d < best_dist:
            best_dist = d
            best = i

    return best, best_dist


def warmup():
    """Pre-compile the kernels so the first frame does not stall."""
    pos = np.random.rand(8, 3).astype(np.float64)
    point = np.zeros(3, dtype=np.float64)

    pairwise_distances(pos)
    distances_to(pos, point)
    nearest_index(pos, point)
    nearest_index(np.zeros((0, 3), dtype=np.float64), point)
