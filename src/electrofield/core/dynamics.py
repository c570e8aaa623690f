# MIT License (see LICENSE)
"""
Frame stepping for all dynamic bodies.

The Coulomb force diverges as 1/r², so a single explicit step of a full
frame overshoots badly near a charge. Each frame is split into a fixed
number of sub-steps instead.

Iteration order is substep-major:

    for each sub-step:
        capture the charge locations of every alive body
        for each alive body (in list order):
            integrate against statics + the *other* bodies' captured charges

so every body sees the others as they were at the end of the previous
sub-step, whatever their position in the list. This keeps results
deterministic and makes pairwise forces equal and opposite.

Bodies tripping the proximity guard are marked dead, skip the rest of
the frame and stop acting on the others from the next sub-step on.
They are compacted out of the list once the frame is done.
"""
from __future__ import annotations
import logging

from ..types import ChargeLocation, DynamicBody, StaticCharge
from .integrators import substep

logger = logging.getLogger(__name__)


def _charge_snapshot(bodies: list[DynamicBody]) -> list[ChargeLocation]:
    locations: list[ChargeLocation] = []
    for b in bodies:
        if b.alive:
            locations.extend(b.charge_locations())
    return locations


def step_dynamics(
    bodies: list[DynamicBody],
    statics: list[StaticCharge],
    dt: float,
    substeps: int,
    guard: float,
    interaction: bool = False,
) -> list[DynamicBody]:
    """
    Advance every dynamic body by one frame.

    Args:
        bodies: Active bodies. Compacted in place: removed bodies are
                dropped from the list before returning.
        statics: Static charges acting on the bodies.
        dt: Frame duration in seconds.
        substeps: Number of equal sub-steps the frame is split into.
        guard: Proximity guard radius in meters.
        interaction: If True, bodies also feel each other's charges.

    Returns:
        Bodies removed by the proximity guard during this frame.
    """
    h = dt / substeps
    removed: list[DynamicBody] = []

    for _ in range(substeps):
        shared = _charge_snapshot(bodies) if interaction else []
        for b in bodies:
            if not b.alive:
                continue
            others = [c for c in shared if c.owner != b.id]
            if not substep(b, statics, others, h, guard):
                b.alive = False
                removed.append(b)
                logger.debug("body %d hit the proximity guard at %s", b.id, b.position)

    if removed:
        bodies[:] = [b for b in bodies if b.alive]
    return removed
