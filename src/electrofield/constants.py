# MIT License (see LICENSE)
"""
Physical and engine constants used throughout the simulation.

Lengths are in meters, charges in coulombs, masses in kilograms and
times in seconds. Screen-derived sizes (guard radius, arrow size) are
expressed in meters through PIXELS_PER_METER so the engine never deals
with pixels directly.
"""
from __future__ import annotations

# Coulomb's constant k = 1/(4πε₀), rounded the way the field demos use it
K_COULOMB: float = 8.99e9

PIXELS_PER_METER: float = 100.0
METERS_PER_PIXEL: float = 1.0 / PIXELS_PER_METER

# Charge magnitude of a user-placed static charge
STATIC_CHARGE: float = 1e-9

# Default point particle
PARTICLE_CHARGE: float = 1e-9
PARTICLE_MASS: float = 3e-9

# Default dipole: two equal masses carrying opposite charges
DIPOLE_CHARGES: tuple[float, float] = (1e-9, -1e-9)
DIPOLE_MASSES: tuple[float, float] = (3e-9, 3e-9)
DIPOLE_SPACING: float = 0.2

# Integration
FRAME_DT: float = 1.0 / 30.0
DYNAMIC_SUBSTEPS: int = 25

# Proximity guard: integration halts once a body's charge gets closer
# than this to any source (4 px on screen).
PROXIMITY_GUARD: float = 4 * METERS_PER_PIXEL

# Flow-line tracers
TRACER_STEPS_PER_FRAME: int = 10
TRACER_STEP_DISTANCE: float = 0.025
TRACER_SEED_RADIUS: float = 0.01
TRACER_MAX_STEPS: int = 4000
TRACER_ARROW_SIZE: float = 3 * METERS_PER_PIXEL

TRACER_DENSITY: int = 20
TRACER_DENSITY_MIN: int = 4
TRACER_DENSITY_MAX: int = 64

# Arrow spacing is meters for the distance policy, volts for the potential one
ARROW_SPACING: float = 1.0
ARROW_SPACING_MIN: float = 0.2
ARROW_SPACING_MAX: float = 4.0

# Potential policy spacing must stay positive (volts)
POTENTIAL_SPACING_MIN: float = 0.1

# Potential policy: no marks where |V| exceeds this (volts)
POTENTIAL_CEILING: float = 100.0

# Field magnitudes below this have no usable direction
FIELD_EPS: float = 1e-12
