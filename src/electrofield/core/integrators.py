# MIT License (see LICENSE)
"""
Sub-step integrators for dynamic bodies.

Both body kinds are advanced with semi-implicit (symplectic) Euler:

    v ← v + a·dt        ω ← ω + α·dt
    x ← x + v·dt        θ ← θ + ω·dt

Velocity is updated first and the position uses the *updated* velocity.
Unlike explicit Euler this keeps bound orbits around a charge from
spiralling outward.

Every sub-step first checks the proximity guard. When a charge of the
body is closer than `guard` to any source the body is left untouched
and the function returns False; the caller is expected to remove it.

Reference:
    https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
"""
from __future__ import annotations
from typing import Sequence

import numpy as np

from ..types import ChargeLocation, Dipole, DynamicBody, PointParticle, StaticCharge
from ..util import axis, cross2
from .field import evaluate


def coulomb_force(charge: float, field: np.ndarray) -> np.ndarray:
    """Force on a point charge in an electric field: F = q·E."""
    return charge * field


def charge_torque(offset: float, angle: float, force: np.ndarray) -> float:
    """
    Torque about the body center from a force applied on the body axis.

    The 2D cross product r × F with r = offset·axis: the force component
    perpendicular to the axis (axis rotated 90° counterclockwise) scaled
    by the signed offset along the axis.
    """
    return cross2(offset * axis(angle), force)


def dipole_wrench(
    body: Dipole,
    fields: Sequence[np.ndarray],
) -> tuple[np.ndarray, float]:
    """
    Net force and torque on a dipole given the field at each of its charges.

    Args:
        body: The dipole.
        fields: Electric field at charge 1 and charge 2.

    Returns:
        Tuple (force, torque).
    """
    force = np.zeros(2, dtype=np.float64)
    torque = 0.0
    for q, offset, e in zip(body.charges, body.offsets, fields):
        f = coulomb_force(q, e)
        force += f
        torque += charge_torque(offset, body.angle, f)
    return force, torque


def point_substep(
    body: PointParticle,
    statics: Sequence[StaticCharge],
    others: Sequence[ChargeLocation],
    dt: float,
    guard: float,
) -> bool:
    """
    Advance a point particle by one sub-step.

    Returns:
        True if the body was integrated, False if the proximity guard
        tripped (state left untouched).
    """
    sample = evaluate(body.position, statics, others, guard)
    if sample.nearest < guard:
        return False

    accel = coulomb_force(body.charge, sample.field) / body.mass
    body.velocity = body.velocity + accel * dt
    body.position = body.position + body.velocity * dt
    return True


def dipole_substep(
    body: Dipole,
    statics: Sequence[StaticCharge],
    others: Sequence[ChargeLocation],
    dt: float,
    guard: float,
) -> bool:
    """
    Advance a dipole by one sub-step.

    Charge positions are re-derived from the current center and angle,
    and the field is evaluated separately at each of them.

    Returns:
        True if the body was integrated, False if the proximity guard
        tripped at either charge (state left untouched).
    """
    fields = []
    for loc in body.charge_locations():
        sample = evaluate(loc.position, statics, others, guard)
        if sample.nearest < guard:
            return False
        fields.append(sample.field)

    force, torque = dipole_wrench(body, fields)

    body.velocity = body.velocity + (force / body.mass) * dt
    # A zero-length rod (or one massless end) has no rotational freedom
    alpha = torque / body.inertia if body.inertia > 0 else 0.0
    body.omega = body.omega + alpha * dt
    body.position = body.position + body.velocity * dt
    body.angle = body.angle + body.omega * dt
    return True


def substep(
    body: DynamicBody,
    statics: Sequence[StaticCharge],
    others: Sequence[ChargeLocation],
    dt: float,
    guard: float,
) -> bool:
    """Dispatch one sub-step on the body kind."""
    if isinstance(body, PointParticle):
        return point_substep(body, statics, others, dt, guard)
    if isinstance(body, Dipole):
        return dipole_substep(body, statics, others, dt, guard)
    raise TypeError(f"Unknown body type: {type(body)}")
