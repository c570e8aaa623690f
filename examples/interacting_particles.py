from electrofield.simulation import Simulation
from electrofield.core.invariants import linear_momentum, kinetic_energy

sim = Simulation()
sim.set_dynamic_interaction(True)

# Two like charges, no static field: they push each other apart
sim.add_dynamic_body("point", -0.3, 0.0)
sim.add_dynamic_body("point", +0.3, 0.05)

for _ in range(60):
    sim.step_frame()

bodies = sim.state.bodies
for b in bodies:
    print("body", b.id, "pos", b.position, "v", b.velocity)
print("momentum", linear_momentum(bodies), "kinetic energy", kinetic_energy(bodies))
