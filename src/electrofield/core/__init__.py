# MIT License (see LICENSE)
"""
Core physics components.

This subpackage provides:
    - Field evaluation: superposed Coulomb field, potential and
      nearest-source distance.
    - Integrators: symplectic Euler sub-steps for point particles and
      dipoles, with the proximity guard.
    - Dynamics stepping: substep-major frame advance for all bodies.

Typical usage:
    from electrofield.core import evaluate, step_dynamics

    sample = evaluate(point, static_charges)
    removed = step_dynamics(bodies, static_charges, dt=1/30, substeps=25, guard=0.04)
"""
from .field import FieldSample, evaluate
from .integrators import (
    coulomb_force,
    charge_torque,
    dipole_wrench,
    point_substep,
    dipole_substep,
    substep,
)
from .dynamics import step_dynamics

__all__ = [
    # Field
    "FieldSample",
    "evaluate",
    # Integrators
    "coulomb_force",
    "charge_torque",
    "dipole_wrench",
    "point_substep",
    "dipole_substep",
    "substep",
    # Stepping
    "step_dynamics",
]
