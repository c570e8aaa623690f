# MIT License (see LICENSE)
"""
Electrostatic field evaluation.

Superposes the Coulomb field and potential of a set of point charges at
a query point:

    V = Σ k qᵢ / |rᵢ|
    E = Σ k qᵢ rᵢ / |rᵢ|³        with rᵢ = point − Pᵢ

Two kinds of sources are accepted:
- `sources` are always summed (static charges, or anything that must
  shape the field unconditionally).
- `others` are charges carried by *other* dynamic bodies. Those closer
  than `guard` are dropped from the sums, since their contribution is
  numerically meaningless at that range, but they still count toward
  `nearest` so the caller can stop integrating.

The querying body's own charges must never be passed in; self-exclusion
is done by the caller on body identity, not on distance.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Protocol

import numpy as np

from ..constants import K_COULOMB


class PointSource(Protocol):
    """Anything with a position and a charge."""
    position: np.ndarray
    charge: float


@dataclass(frozen=True)
class FieldSample:
    """
    Result of a field evaluation.

    Attributes:
        field: Net electric field [Ex, Ey] in N/C.
        potential: Net potential in volts.
        nearest: Distance to the closest source considered, inf if none.
    """
    field: np.ndarray
    potential: float
    nearest: float


def _stack(sources: Iterable[PointSource]) -> tuple[np.ndarray, np.ndarray]:
    items = list(sources)
    if not items:
        return np.zeros((0, 2), dtype=np.float64), np.zeros(0, dtype=np.float64)
    positions = np.array([s.position for s in items], dtype=np.float64)
    charges = np.array([s.charge for s in items], dtype=np.float64)
    return positions, charges


def evaluate(
    point: np.ndarray,
    sources: Iterable[PointSource],
    others: Iterable[PointSource] = (),
    guard: float = 0.0,
) -> FieldSample:
    """
    Evaluate net field, potential and nearest-source distance at a point.

    Args:
        point: Query position [x, y] in meters.
        sources: Charges that always contribute.
        others: Charges of other dynamic bodies; skipped when closer
                than `guard`.
        guard: Proximity guard radius in meters.

    Returns:
        FieldSample. With no sources at all the field and potential are
        zero and `nearest` is infinite.

    Note:
        A source sitting exactly on `point` contributes nothing (its
        field is undefined) but drives `nearest` to 0.
    """
    point = np.asarray(point, dtype=np.float64)
    field = np.zeros(2, dtype=np.float64)
    potential = 0.0
    nearest = np.inf

    for group, use_guard in ((sources, False), (others, True)):
        positions, charges = _stack(group)
        if len(charges) == 0:
            continue

        r = point - positions
        dist = np.hypot(r[:, 0], r[:, 1])
        nearest = min(nearest, float(dist.min()))

        keep = dist > 0.0
        if use_guard:
            keep &= dist >= guard
        if not keep.any():
            continue

        r, dist, q = r[keep], dist[keep], charges[keep]
        v = K_COULOMB * q / dist
        potential += float(v.sum())
        field += ((v / (dist * dist))[:, None] * r).sum(axis=0)

    return FieldSample(field=field, potential=potential, nearest=nearest)
