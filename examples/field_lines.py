from electrofield.simulation import Simulation
from electrofield.renderer import BufferedRenderer

sim = Simulation(tracer_density=12, arrow_policy="potential", arrow_spacing=5.0)
sim.add_static_charge(-1.0, 0.0, +1)
sim.add_static_charge(1.0, 0.0, +1)
sim.add_static_charge(0.0, 1.5, -1)

renderer = BufferedRenderer()
for _ in range(120):
    renderer.render_snapshot(sim.step_frame())

for tracer, line in sorted(renderer.polylines.items())[:5]:
    print(f"line {tracer}: {len(line)} vertices, ends at ({line[-1][0]:.2f}, {line[-1][1]:.2f})")
print("marks:", len(renderer.marks))
