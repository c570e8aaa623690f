from electrofield.simulation import Simulation
from electrofield.renderer import DebugRenderer

sim = Simulation(tracer_density=8)

# A positive and a negative charge; the field between them points left to right
sim.add_static_charge(-1.5, 0.0, +1)
sim.add_static_charge(+1.5, 0.0, -1)

# A vertical dipole swings to line up with the field while drifting
sim.add_dynamic_body("dipole", 0.0, 0.8, angle=1.57)
sim.add_dynamic_body("point", 0.0, -0.8)

renderer = DebugRenderer(verbose=False)
for i in range(90):
    snap = sim.step_frame()
    if i % 15 == 0:
        renderer.render_snapshot(snap)
    for bid in snap.removed:
        print("body", bid, "reached a charge at t =", round(snap.time, 3))
