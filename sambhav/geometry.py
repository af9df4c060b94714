"""
geometry.py – Distance primitives shared by the hand and face classifiers.

Landmarks are handled as ``(N, 3)`` float arrays of normalised ``(x, y, z)``
coordinates (MediaPipe convention: x/y in [0, 1], y grows downwards, z a
small signed depth).  Hand rules measure in the image plane, face rules in
3-D.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

import numpy as np


class Point3(NamedTuple):
    """A single tracked keypoint."""

    x: float
    y: float
    z: float = 0.0


def distance_2d(p1: Sequence[float] | np.ndarray, p2: Sequence[float] | np.ndarray) -> float:
    """Euclidean distance in the image plane (z ignored)."""
    a = np.asarray(p1, dtype=np.float64)[:2]
    b = np.asarray(p2, dtype=np.float64)[:2]
    return float(np.linalg.norm(a - b))


def distance_3d(p1: Sequence[float] | np.ndarray, p2: Sequence[float] | np.ndarray) -> float:
    """Euclidean distance including depth.

    Points carrying only ``(x, y)`` are measured in 2-D.
    """
    a = np.asarray(p1, dtype=np.float64)[:3]
    b = np.asarray(p2, dtype=np.float64)[:3]
    n = min(a.shape[0], b.shape[0])
    return float(np.linalg.norm(a[:n] - b[:n]))


def distance(p1, p2, use_z: bool = False) -> float:
    return distance_3d(p1, p2) if use_z else distance_2d(p1, p2)


def as_landmarks(points) -> np.ndarray | None:
    """Coerce a landmark sequence to a fresh ``(N, D)`` float array.

    Accepts an ``ndarray``, a list of :class:`Point3` or a list of
    ``(x, y[, z])`` tuples.  The input is never modified.  Returns ``None``
    when the data is not a 2-D table with at least ``x`` and ``y`` columns.
    """
    if points is None:
        return None
    try:
        arr = np.array(points, dtype=np.float64)
    except (TypeError, ValueError):
        return None
    if arr.ndim != 2 or arr.shape[1] < 2:
        return None
    return arr
