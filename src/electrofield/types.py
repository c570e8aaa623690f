# MIT License (see LICENSE)
"""
Core type definitions for the electrostatic simulation.

Defines the fundamental data structures:
- StaticCharge: a fixed point source, never moved by the simulation.
- ChargeLocation: where a charge sits right now (derived, never stored).
- PointParticle, Dipole: the two dynamic body kinds.
- BodyPose: read-only per-frame view of a body for drawing.

Dynamic bodies follow Newtonian rigid body mechanics in 2D:
  - Linear:  F = m·a  →  a = F/m
  - Angular: τ = I·α  →  α = τ/I
"""
from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from .util import f64, axis


# =============================================================================
# Charges
# =============================================================================

@dataclass(frozen=True)
class StaticCharge:
    """
    Fixed point charge, effectively a particle with infinite mass.

    Attributes:
        position: Location [x, y] in meters.
        charge: Signed charge in coulombs.
    """
    position: np.ndarray
    charge: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", f64(self.position))


@dataclass(frozen=True)
class ChargeLocation:
    """
    Position and charge of one charge carried by a dynamic body.

    Attributes:
        position: World position [x, y] in meters.
        charge: Signed charge in coulombs.
        owner: Id of the body carrying the charge, None if unowned.
    """
    position: np.ndarray
    charge: float
    owner: int | None = None


# =============================================================================
# Dynamic bodies
# =============================================================================

@dataclass
class PointParticle:
    """
    A charged point mass.

    Attributes:
        mass: Mass in kg.
        charge: Electric charge in coulombs.
        position: Position [x, y] in meters.
        velocity: Velocity [vx, vy] in m/s.
        id: Unique identifier assigned by the simulation.
        alive: False once the proximity guard has removed the body.
    """
    mass: float
    charge: float
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    velocity: np.ndarray | tuple[float, float] = (0.0, 0.0)
    id: int = -1
    alive: bool = True

    def __post_init__(self) -> None:
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)

    @property
    def angle(self) -> float:
        return 0.0

    def charge_locations(self) -> list[ChargeLocation]:
        return [ChargeLocation(self.position.copy(), self.charge, self.id)]


@dataclass
class Dipole:
    """
    Two point charges joined by a massless rigid rod.

    The charges sit on the body axis at signed offsets chosen so the
    center of mass coincides with `position`, which is also the center
    of rotation:
        o1 = -d·m2/(m1 + m2),  o2 = d·m1/(m1 + m2)
    so that m1·o1 + m2·o2 = 0 and o2 - o1 = d.

    Attributes:
        charges: (q1, q2) in coulombs.
        masses: (m1, m2) in kg.
        spacing: Distance d between the two charges in meters.
        position: Center of mass [x, y] in meters.
        velocity: Center velocity [vx, vy] in m/s.
        angle: Axis orientation in radians (counterclockwise from +x).
        omega: Angular velocity in rad/s (counterclockwise positive).
        id: Unique identifier assigned by the simulation.
        alive: False once the proximity guard has removed the body.

    Note:
        offsets, mass and inertia are derived once on construction and
        never recomputed.
    """
    charges: tuple[float, float]
    masses: tuple[float, float]
    spacing: float
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    velocity: np.ndarray | tuple[float, float] = (0.0, 0.0)
    angle: float = 0.0
    omega: float = 0.0
    id: int = -1
    alive: bool = True

    offsets: tuple[float, float] = field(init=False)
    mass: float = field(init=False)
    inertia: float = field(init=False)

    def __post_init__(self) -> None:
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)
        m1, m2 = self.masses
        self.mass = m1 + m2
        self.offsets = (
            -self.spacing * m2 / self.mass,
            self.spacing * m1 / self.mass,
        )
        self.inertia = m1 * self.offsets[0] ** 2 + m2 * self.offsets[1] ** 2

    def charge_locations(self) -> list[ChargeLocation]:
        """World positions of both charges, derived from the current pose."""
        a = axis(self.angle)
        return [
            ChargeLocation(self.position + o * a, q, self.id)
            for q, o in zip(self.charges, self.offsets)
        ]


# Union type for body dispatch
DynamicBody = PointParticle | Dipole


@dataclass(frozen=True)
class BodyPose:
    """
    Snapshot of a dynamic body for drawing.

    Attributes:
        id: Body identifier.
        kind: "point" or "dipole".
        position: Center position [x, y].
        angle: Orientation in radians (0 for point particles).
        charges: Charge locations at snapshot time.
    """
    id: int
    kind: str
    position: np.ndarray
    angle: float
    charges: tuple[ChargeLocation, ...]


def body_kind(body: DynamicBody) -> str:
    if isinstance(body, PointParticle):
        return "point"
    if isinstance(body, Dipole):
        return "dipole"
    raise TypeError(f"Unknown body type: {type(body)}")


def body_pose(body: DynamicBody) -> BodyPose:
    """Capture the drawable state of a body."""
    return BodyPose(
        id=body.id,
        kind=body_kind(body),
        position=body.position.copy(),
        angle=float(body.angle),
        charges=tuple(body.charge_locations()),
    )
