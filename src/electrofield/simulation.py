# MIT License (see LICENSE)
"""
The simulation state and frame loop.

SimulationState holds the three process-wide collections (static
charges, dynamic bodies, tracers). The Simulation class owns one state
plus the configuration, and is the only surface the rendering and input
layers talk to:

- Commands: add_static_charge, add_dynamic_body, clear_statics,
  clear_dynamics, clear_all and the set_* configuration mutators.
- Frame: step_frame(dt) advances dynamics and tracers and returns a
  FrameSnapshot to draw.

Tracers are regenerated from scratch whenever something that shapes
them changes (static charges, density, arrow settings). Dynamic bodies
never affect them.
"""
from __future__ import annotations
from contextlib import nullcontext
from dataclasses import dataclass, field
import logging

from .constants import (
    ARROW_SPACING,
    ARROW_SPACING_MAX,
    ARROW_SPACING_MIN,
    DIPOLE_CHARGES,
    DIPOLE_MASSES,
    DIPOLE_SPACING,
    DYNAMIC_SUBSTEPS,
    FRAME_DT,
    PARTICLE_CHARGE,
    PARTICLE_MASS,
    POTENTIAL_SPACING_MIN,
    PROXIMITY_GUARD,
    STATIC_CHARGE,
    TRACER_DENSITY,
    TRACER_DENSITY_MAX,
    TRACER_DENSITY_MIN,
    TRACER_MAX_STEPS,
    TRACER_STEP_DISTANCE,
    TRACER_STEPS_PER_FRAME,
)
from .core.dynamics import step_dynamics
from .profiler import Profiler
from .tracer import ARROW_POLICIES, StreamlineFrame, Tracer, TracerSettings, seed_tracers
from .types import BodyPose, Dipole, DynamicBody, PointParticle, StaticCharge, body_pose

logger = logging.getLogger(__name__)

BODY_KINDS = ("point", "dipole")


@dataclass
class SimulationState:
    """
    Mutable collections driven by user commands.

    Attributes:
        statics: Fixed charges, in placement order.
        bodies: Active dynamic bodies.
        tracers: Streamlines currently being traced.
    """
    statics: list[StaticCharge] = field(default_factory=list)
    bodies: list[DynamicBody] = field(default_factory=list)
    tracers: list[Tracer] = field(default_factory=list)


@dataclass(frozen=True)
class FrameSnapshot:
    """
    Everything the renderer needs for one frame.

    Attributes:
        time: Simulation time after the frame, in seconds.
        bodies: Pose of every body still active.
        streamlines: Geometry traced this frame, one entry per tracer
                     that moved or marked.
        removed: Ids of bodies removed by the proximity guard this frame.
    """
    time: float
    bodies: list[BodyPose]
    streamlines: list[StreamlineFrame]
    removed: list[int]


@dataclass
class Simulation:
    """
    Electrostatic field and dynamics engine.

    Attributes:
        dt: Default frame duration in seconds (default: 1/30).
        substeps: Dynamics sub-steps per frame. Higher = more stable near
                  charges but slower. Default: 25.
        guard: Proximity guard radius in meters.
        dynamic_interaction: Dynamic bodies also push each other.
        tracer_density: Streamlines seeded per static charge.
        arrows_enabled: Draw direction marks along streamlines.
        arrow_policy: "distance" or "potential" mark placement.
        arrow_spacing: Mark spacing, meters or volts depending on the policy.
        tracer_steps_per_frame: Tracer micro-steps per frame.
        tracer_step_distance: Tracer micro-step length in meters.
        tracer_max_steps: Micro-steps after which a tracer stops (None = never).
        profiler: Optional Profiler instance for timing statistics.
    """
    dt: float = FRAME_DT
    substeps: int = DYNAMIC_SUBSTEPS
    guard: float = PROXIMITY_GUARD
    dynamic_interaction: bool = False
    tracer_density: int = TRACER_DENSITY
    arrows_enabled: bool = True
    arrow_policy: str = "distance"
    arrow_spacing: float = ARROW_SPACING
    tracer_steps_per_frame: int = TRACER_STEPS_PER_FRAME
    tracer_step_distance: float = TRACER_STEP_DISTANCE
    tracer_max_steps: int | None = TRACER_MAX_STEPS
    profiler: Profiler | None = None

    # Internal state
    state: SimulationState = field(default_factory=SimulationState)
    time: float = 0.0

    def __post_init__(self) -> None:
        if self.arrow_policy not in ARROW_POLICIES:
            raise ValueError(f"Unknown arrow policy: {self.arrow_policy}")
        self.tracer_density = self._clamp_density(self.tracer_density)
        self.arrow_spacing = self._clamp_spacing(self.arrow_spacing)
        self._next_id = 1

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def add_static_charge(self, x: float, y: float, sign: float) -> StaticCharge:
        """
        Place a static charge of magnitude STATIC_CHARGE.

        Args:
            x, y: Position in meters.
            sign: Positive for a positive charge, anything else for negative.

        Regenerates tracers.
        """
        charge = STATIC_CHARGE if sign > 0 else -STATIC_CHARGE
        s = StaticCharge((x, y), charge)
        self.state.statics.append(s)
        self.regenerate_tracers()
        return s

    def add_dynamic_body(self, kind: str, x: float, y: float, **params) -> int:
        """
        Spawn a dynamic body at rest.

        Args:
            kind: "point" or "dipole".
            x, y: Position (dipole: center of mass) in meters.
            **params: Overrides for the body constructor, e.g. charge/mass
                      for a point, charges/masses/spacing/angle for a dipole.

        Returns:
            The assigned body id.
        """
        if kind == "point":
            params.setdefault("charge", PARTICLE_CHARGE)
            params.setdefault("mass", PARTICLE_MASS)
            body: DynamicBody = PointParticle(position=(x, y), **params)
        elif kind == "dipole":
            params.setdefault("charges", DIPOLE_CHARGES)
            params.setdefault("masses", DIPOLE_MASSES)
            params.setdefault("spacing", DIPOLE_SPACING)
            body = Dipole(position=(x, y), **params)
        else:
            raise ValueError(f"Unknown body kind: {kind}")

        body.id = self._next_id
        self._next_id += 1
        self.state.bodies.append(body)
        return body.id

    def clear_statics(self) -> None:
        """Remove every static charge (and with them every tracer)."""
        self.state.statics.clear()
        self.regenerate_tracers()

    def clear_dynamics(self) -> None:
        """Remove every dynamic body. Tracers are unaffected."""
        self.state.bodies.clear()

    def clear_all(self) -> None:
        """Remove charges, bodies and tracers."""
        self.state.statics.clear()
        self.state.bodies.clear()
        self.state.tracers.clear()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def _clamp_density(self, n: int) -> int:
        return max(TRACER_DENSITY_MIN, min(TRACER_DENSITY_MAX, int(n)))

    def _clamp_spacing(self, v: float) -> float:
        if self.arrow_policy == "distance":
            return float(max(ARROW_SPACING_MIN, min(ARROW_SPACING_MAX, v)))
        return float(max(POTENTIAL_SPACING_MIN, v))

    def set_tracer_density(self, n: int) -> None:
        """Set streamlines per charge, clamped to [4, 64]. Regenerates tracers."""
        self.tracer_density = self._clamp_density(n)
        self.regenerate_tracers()

    def set_arrow_spacing(self, v: float) -> None:
        """
        Set the spacing between direction marks.

        Distance spacing is clamped to [0.2, 4.0] meters, potential
        spacing to at least 0.1 volts. Regenerates tracers only while
        arrows are shown.
        """
        self.arrow_spacing = self._clamp_spacing(v)
        if self.arrows_enabled:
            self.regenerate_tracers()

    def set_arrow_policy(self, policy: str) -> None:
        """
        Switch between "distance" and "potential" marks.

        The spacing is re-clamped for the new policy. Regenerates tracers,
        since their mark progress means something else under each policy.
        """
        if policy not in ARROW_POLICIES:
            raise ValueError(f"Unknown arrow policy: {policy}")
        self.arrow_policy = policy
        self.arrow_spacing = self._clamp_spacing(self.arrow_spacing)
        self.regenerate_tracers()

    def set_arrows_enabled(self, enabled: bool) -> None:
        """Show or hide direction marks. Regenerates tracers."""
        self.arrows_enabled = bool(enabled)
        self.regenerate_tracers()

    def set_dynamic_interaction(self, enabled: bool) -> None:
        """Toggle body-to-body forces. Tracers are unaffected."""
        self.dynamic_interaction = bool(enabled)

    def regenerate_tracers(self) -> None:
        """Discard all tracers and reseed them around the current charges."""
        self.state.tracers = seed_tracers(self.state.statics, self.tracer_density)
        logger.debug(
            "regenerated %d tracers around %d charges",
            len(self.state.tracers), len(self.state.statics),
        )

    # ------------------------------------------------------------------
    # Frame
    # ------------------------------------------------------------------

    @property
    def tracer_settings(self) -> TracerSettings:
        return TracerSettings(
            steps_per_frame=self.tracer_steps_per_frame,
            step_distance=self.tracer_step_distance,
            max_steps=self.tracer_max_steps,
            arrows_enabled=self.arrows_enabled,
            arrow_policy=self.arrow_policy,
            arrow_spacing=self.arrow_spacing,
        )

    def _section(self, name: str):
        return self.profiler.section(name) if self.profiler else nullcontext()

    def step_frame(self, dt: float | None = None) -> FrameSnapshot:
        """
        Advance the simulation by one rendered frame.

        1. Dynamics: every body through all sub-steps (see core.dynamics).
        2. Tracers: every unfinished tracer by its per-frame micro-steps.

        Returns:
            FrameSnapshot of the state after the frame.
        """
        dt = float(self.dt if dt is None else dt)
        st = self.state

        with self._section("dynamics"):
            removed = step_dynamics(
                st.bodies, st.statics, dt, self.substeps, self.guard,
                interaction=self.dynamic_interaction,
            )

        streamlines = []
        with self._section("tracers"):
            settings = self.tracer_settings
            for i, t in enumerate(st.tracers):
                if t.finished(settings):
                    continue
                points, marks = t.advance(st.statics, settings)
                if len(points) > 1 or len(marks):
                    streamlines.append(StreamlineFrame(i, points, marks))

        self.time += dt
        return FrameSnapshot(
            time=self.time,
            bodies=[body_pose(b) for b in st.bodies],
            streamlines=streamlines,
            removed=[b.id for b in removed],
        )
