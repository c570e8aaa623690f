# MIT License (see LICENSE)
"""
Utilities for calculating physical invariants of the dynamic bodies.

Used for verifying simulation correctness. With interaction enabled and
no static charges, the bodies form a closed system and their total
linear momentum should stay constant.
"""
from __future__ import annotations
import numpy as np

from ..types import Dipole, DynamicBody


def kinetic_energy(bodies: list[DynamicBody]) -> float:
    """
    Calculate the total kinetic energy of a system of bodies.

    T = Σ (0.5 * m * v² + 0.5 * I * ω²), the rotational term only
    applying to dipoles.

    Args:
        bodies: List of dynamic bodies.

    Returns:
        Total kinetic energy in Joules.
    """
    ke = 0.0
    for b in bodies:
        v_sq = float(np.dot(b.velocity, b.velocity))
        ke += 0.5 * b.mass * v_sq
        if isinstance(b, Dipole):
            ke += 0.5 * b.inertia * (b.omega * b.omega)
    return ke


def linear_momentum(bodies: list[DynamicBody]) -> np.ndarray:
    """
    Calculate the total linear momentum of a system.

    P = Σ (m * v)

    Returns:
        Total momentum vector [Px, Py] in kg·m/s.
    """
    p = np.zeros(2, dtype=np.float64)
    for b in bodies:
        p += b.mass * b.velocity
    return p
