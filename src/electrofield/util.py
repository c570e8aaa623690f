# MIT License (see LICENSE)
"""
Utility functions for 2D vector math.

All functions operate on 2D vectors represented as numpy arrays of
shape (2,).
"""
from __future__ import annotations

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Lets callers pass tuples or lists for positions and velocities.
    """
    return np.array(x, dtype=np.float64)


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a 2D vector."""
    return float(v[0] * v[0] + v[1] * v[1])


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 2D vector."""
    return float(np.sqrt(norm2(v)))


def perp_left(v: np.ndarray) -> np.ndarray:
    """Rotate v by 90° counterclockwise: (x, y) -> (-y, x)."""
    return np.array([-v[1], v[0]], dtype=np.float64)


def cross2(a: np.ndarray, b: np.ndarray) -> float:
    """
    2D cross product (scalar result): a × b = ax*by - ay*bx.

    Positive result means b is counterclockwise from a.
    """
    return float(a[0] * b[1] - a[1] * b[0])


def axis(angle: float) -> np.ndarray:
    """Unit vector at `angle` radians counterclockwise from +x."""
    return np.array([np.cos(angle), np.sin(angle)], dtype=np.float64)
