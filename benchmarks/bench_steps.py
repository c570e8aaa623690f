"""
Microbenchmark: time per frame vs number of dynamic bodies.
Run:
  python benchmarks/bench_steps.py
"""
import time
import numpy as np
from electrofield.simulation import Simulation
from electrofield.profiler import Profiler

def run(n: int, frames: int = 60, interaction: bool = False):
    prof = Profiler()
    sim = Simulation(profiler=prof, dynamic_interaction=interaction, tracer_density=20)

    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)

    # A ring of alternating static charges
    for k in range(6):
        angle = k / 6 * 2 * np.pi
        sim.add_static_charge(2.0 * np.cos(angle), 2.0 * np.sin(angle), (-1) ** k)

    # Bodies scattered inside the ring, every fourth one a dipole
    for i in range(n):
        x, y = rng.uniform(-1.0, 1.0, size=2)
        kind = "dipole" if i % 4 == 0 else "point"
        sim.add_dynamic_body(kind, float(x), float(y))

    # warmup
    for _ in range(5):
        sim.step_frame()

    t0 = time.perf_counter()
    for _ in range(frames):
        sim.step_frame()
    t1 = time.perf_counter()

    per_frame = (t1 - t0) / frames
    return per_frame, prof.stats.summary(), len(sim.state.bodies)

if __name__ == "__main__":
    for interaction in (False, True):
        for n in [1, 5, 10, 25, 50]:
            per_frame, summary, alive = run(n, interaction=interaction)
            print(f"N={n:3d} interaction={interaction!s:5}  frame={1e3*per_frame:8.3f} ms  "
                  f"fps={1/per_frame:7.1f}  alive={alive}")
            for k in ["dynamics", "tracers"]:
                if k in summary:
                    print(" ", k, summary[k])
        print()
