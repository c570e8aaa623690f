# MIT License (see LICENSE)
"""
Flow-line (streamline) tracing of the static field.

A tracer is a massless sample point walked along the normalized static
field with fixed-length steps:

    x ← x + h · E/|E| · s

where s = +1 for lines leaving a positive charge and s = -1 for lines
leaving a negative one, so both trace outward from their seed. Dynamic
bodies never shape the lines.

Direction indicator marks ("arrows") follow one of two policies:
- "distance": a mark every `spacing` meters of arclength. The remainder
  is carried over, so marks keep their phase across frames.
- "potential": a mark each time the potential crosses a multiple of
  `spacing` volts, suppressed where |V| exceeds a ceiling.

Tracers are disposable: whenever the static charges or the line
settings change they are thrown away and reseeded.
"""
from __future__ import annotations
from dataclasses import dataclass
import math
from typing import Sequence

import numpy as np

from .constants import (
    ARROW_SPACING,
    FIELD_EPS,
    POTENTIAL_CEILING,
    TRACER_ARROW_SIZE,
    TRACER_MAX_STEPS,
    TRACER_SEED_RADIUS,
    TRACER_STEP_DISTANCE,
    TRACER_STEPS_PER_FRAME,
)
from .core.field import evaluate
from .types import StaticCharge
from .util import f64, norm, perp_left

ARROW_POLICIES = ("distance", "potential")

# Relative slack so that n·h reaching the spacing is not lost to rounding
_SPACING_TOL = 1e-9


@dataclass(frozen=True)
class TracerSettings:
    """
    Parameters shared by every tracer for one frame.

    Attributes:
        steps_per_frame: Micro-steps per rendered frame.
        step_distance: Length h of one micro-step in meters.
        max_steps: Micro-steps after which a tracer stops, None for never.
        arrows_enabled: Whether to emit marks at all.
        arrow_policy: "distance" or "potential".
        arrow_spacing: Meters (distance) or volts (potential) between marks.
        arrow_size: Length scale of a mark's arms in meters.
        potential_ceiling: |V| above which potential marks are suppressed.
    """
    steps_per_frame: int = TRACER_STEPS_PER_FRAME
    step_distance: float = TRACER_STEP_DISTANCE
    max_steps: int | None = TRACER_MAX_STEPS
    arrows_enabled: bool = True
    arrow_policy: str = "distance"
    arrow_spacing: float = ARROW_SPACING
    arrow_size: float = TRACER_ARROW_SIZE
    potential_ceiling: float = POTENTIAL_CEILING

    def __post_init__(self) -> None:
        if self.arrow_policy not in ARROW_POLICIES:
            raise ValueError(f"Unknown arrow policy: {self.arrow_policy}")


@dataclass(frozen=True)
class StreamlineFrame:
    """
    Geometry emitted by one tracer during one frame.

    Attributes:
        tracer: Index of the tracer in the simulation's tracer list.
        points: Polyline vertices, shape (k + 1, 2).
        marks: Chevrons, shape (m, 2, 2, 2): m marks of two segments,
               each a (start, end) pair.
    """
    tracer: int
    points: np.ndarray
    marks: np.ndarray


def arrow_mark(tip: np.ndarray, direction: np.ndarray, size: float) -> np.ndarray:
    """
    Chevron pointing along `direction` with its tip at `tip`.

    Both arms start at the tip and lean back: one to the left of the
    direction, one to the right.
    """
    n = perp_left(direction)
    return np.array([
        [tip, tip + (n - direction) * size],
        [tip, tip + (-n - direction) * size],
    ], dtype=np.float64)


def _floor_ratio(v: float, spacing: float) -> int:
    return math.floor(v / spacing)


@dataclass
class Tracer:
    """
    One streamline in progress.

    Attributes:
        position: Current position [x, y] in meters.
        direction: +1 to trace along the field, -1 against it.
        progress: Arclength since the last mark (distance policy) or the
                  last sampled potential (potential policy). None until
                  the first sample.
        steps: Micro-steps taken so far, skipped ones included.
    """
    position: np.ndarray
    direction: int
    progress: float | None = None
    steps: int = 0

    def __post_init__(self) -> None:
        self.position = f64(self.position)

    def finished(self, settings: TracerSettings) -> bool:
        return settings.max_steps is not None and self.steps >= settings.max_steps

    def advance(
        self,
        statics: Sequence[StaticCharge],
        settings: TracerSettings,
        steps: int | None = None,
    ) -> tuple[np.ndarray, np.ndarray]:
        """
        Walk the tracer for a number of micro-steps.

        Args:
            statics: Static charges shaping the field.
            settings: Step and arrow parameters.
            steps: Micro-steps to take; defaults to settings.steps_per_frame.

        Returns:
            Tuple (points, marks) as described on StreamlineFrame.
        """
        steps = settings.steps_per_frame if steps is None else steps
        h = settings.step_distance
        points = [self.position.copy()]
        marks = []

        for _ in range(steps):
            if self.finished(settings):
                break
            self.steps += 1

            sample = evaluate(self.position, statics)
            magnitude = norm(sample.field)
            if magnitude < FIELD_EPS:
                continue
            d = sample.field / magnitude

            if settings.arrows_enabled and settings.arrow_policy == "potential":
                if self._crossed_level(sample.potential, settings):
                    marks.append(arrow_mark(self.position, d, settings.arrow_size))
                self.progress = sample.potential

            self.position = self.position + d * h * self.direction
            points.append(self.position.copy())

            if settings.arrows_enabled and settings.arrow_policy == "distance":
                self.progress = (self.progress or 0.0) + h
                spacing = settings.arrow_spacing
                if self.progress >= spacing * (1.0 - _SPACING_TOL):
                    self.progress -= spacing
                    marks.append(arrow_mark(self.position, d, settings.arrow_size))

        return (
            np.array(points, dtype=np.float64),
            np.array(marks, dtype=np.float64).reshape(-1, 2, 2, 2),
        )

    def _crossed_level(self, potential: float, settings: TracerSettings) -> bool:
        if self.progress is None or abs(potential) > settings.potential_ceiling:
            return False
        spacing = settings.arrow_spacing
        return _floor_ratio(self.progress, spacing) != _floor_ratio(potential, spacing)


def seed_tracers(
    statics: Sequence[StaticCharge],
    density: int,
    radius: float = TRACER_SEED_RADIUS,
) -> list[Tracer]:
    """
    Seed `density` tracers evenly around every static charge.

    Tracer i of a charge starts at angle 2πi/density on a circle of
    `radius` around it and inherits the charge's polarity.
    """
    tracers = []
    for s in statics:
        direction = 1 if s.charge > 0 else -1
        for i in range(density):
            angle = i / density * 2.0 * np.pi
            offset = radius * np.array([np.cos(angle), np.sin(angle)])
            tracers.append(Tracer(s.position + offset, direction))
    return tracers
