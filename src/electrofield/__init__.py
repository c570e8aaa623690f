# MIT License (see LICENSE)
"""
electrofield - 2D electrostatic field and charged-body dynamics engine.

This package evaluates the field of fixed point charges, integrates
charged point particles and dipoles moving through it, and traces flow
lines of the field for visualization.

Main entry points:
    - Simulation: Commands, configuration and the frame loop.
    - StaticCharge: A fixed point source.
    - PointParticle, Dipole: The dynamic body kinds.
    - evaluate: Field, potential and nearest-source distance at a point.

Submodules:
    - core: Field evaluation, integrators and dynamics stepping.
    - tracer: Flow-line tracing and direction marks.
    - renderer: Optional snapshot consumers.

Example:
    from electrofield import Simulation

    sim = Simulation()
    sim.add_static_charge(-1.0, 0.0, +1)
    sim.add_static_charge(1.0, 0.0, -1)
    sim.add_dynamic_body("point", 0.0, 0.5)
    snapshot = sim.step_frame()
"""
from .simulation import Simulation, SimulationState, FrameSnapshot
from .types import StaticCharge, ChargeLocation, PointParticle, Dipole, BodyPose
from .core.field import FieldSample, evaluate
from .tracer import Tracer, TracerSettings, StreamlineFrame

__all__ = [
    # Simulation
    "Simulation",
    "SimulationState",
    "FrameSnapshot",
    # Entities
    "StaticCharge",
    "ChargeLocation",
    "PointParticle",
    "Dipole",
    "BodyPose",
    # Field
    "FieldSample",
    "evaluate",
    # Tracing
    "Tracer",
    "TracerSettings",
    "StreamlineFrame",
]
