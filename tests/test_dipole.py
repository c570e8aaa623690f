import numpy as np
import pytest
from electrofield.core.dynamics import step_dynamics
from electrofield.core.integrators import charge_torque, dipole_wrench
from electrofield.core.invariants import kinetic_energy
from electrofield.simulation import Simulation
from electrofield.types import Dipole, StaticCharge
from electrofield.util import axis, cross2, perp_left


def make_dipole(**kw):
    kw.setdefault("charges", (1e-9, -1e-9))
    kw.setdefault("masses", (3e-9, 3e-9))
    kw.setdefault("spacing", 0.2)
    return Dipole(**kw)


def test_offsets_put_center_of_mass_at_center():
    """
    m1·o1 + m2·o2 = 0, o2 − o1 = d, I = Σ m·o².
    With m = (1, 3) and d = 0.4: o = (−0.3, 0.1), I = 0.09 + 0.03 = 0.12.
    """
    d = make_dipole(masses=(1.0, 3.0), spacing=0.4)
    o1, o2 = d.offsets
    assert np.isclose(o1, -0.3)
    assert np.isclose(o2, 0.1)
    assert np.isclose(1.0 * o1 + 3.0 * o2, 0.0)
    assert np.isclose(o2 - o1, 0.4)
    assert d.mass == 4.0
    assert np.isclose(d.inertia, 0.12)


def test_charge_locations_follow_pose():
    d = make_dipole(position=(1.0, 2.0), angle=np.pi / 2)
    a, b = d.charge_locations()
    assert np.allclose(a.position, (1.0, 1.9))
    assert np.allclose(b.position, (1.0, 2.1))
    assert (a.charge, b.charge) == (1e-9, -1e-9)
    assert a.owner == b.owner == d.id


@pytest.mark.parametrize("angle", [0.0, 0.4, 2.0, -2.7])
def test_charge_torque_is_cross_product(angle):
    """r × F equals the signed offset times F projected on the axis normal."""
    force = np.array([0.3, -1.1])
    offset = -0.25
    expected = offset * np.dot(force, perp_left(axis(angle)))
    assert np.isclose(charge_torque(offset, angle, force), expected)


def test_uniform_field_gives_p_cross_e():
    """In a uniform field: ΣF = 0 and τ = p × E with p = Σ qᵢ·oᵢ·axis."""
    d = make_dipole(angle=0.0)
    E = np.array([0.0, 100.0])
    force, torque = dipole_wrench(d, [E, E])

    p = sum(q * o for q, o in zip(d.charges, d.offsets)) * axis(d.angle)
    assert np.allclose(force, 0.0)
    assert np.isclose(torque, cross2(p, E))
    assert np.isclose(torque, -2e-8)


def test_zero_field_zero_wrench():
    d = make_dipole(angle=1.3)
    force, torque = dipole_wrench(d, [np.zeros(2), np.zeros(2)])
    assert np.array_equal(force, np.zeros(2))
    assert torque == 0.0


def test_isolated_dipole_stays_put():
    """No sources at all: no net force, no net torque."""
    sim = Simulation()
    sim.add_dynamic_body("dipole", 5.0, 5.0, angle=0.3)
    for _ in range(10):
        snap = sim.step_frame()

    d = sim.state.bodies[0]
    assert np.array_equal(d.velocity, (0.0, 0.0))
    assert d.omega == 0.0
    assert d.angle == 0.3
    assert np.array_equal(snap.bodies[0].position, (5.0, 5.0))


def test_dipole_turns_toward_field():
    """
    Field along +x at the origin (+q left, −q right). A vertical dipole
    with its positive charge below the center has p = (0, −|p|), so
    τ = p × E > 0 and it starts turning counterclockwise.
    """
    statics = [StaticCharge((-2.0, 0.0), 1e-9), StaticCharge((2.0, 0.0), -1e-9)]
    d = make_dipole(angle=np.pi / 2, id=1)
    bodies = [d]
    step_dynamics(bodies, statics, 1 / 30, substeps=25, guard=0.04)

    assert d.omega > 0.0
    assert d.angle > np.pi / 2
    assert np.allclose(d.velocity, 0.0, atol=1e-9)


def test_derived_quantities_fixed_while_moving():
    statics = [StaticCharge((-1.0, 0.5), 1e-9)]
    d = make_dipole(masses=(2e-9, 5e-9), id=1)
    before = (d.offsets, d.mass, d.inertia)
    bodies = [d]
    for _ in range(5):
        step_dynamics(bodies, statics, 1 / 30, substeps=25, guard=0.04)
    assert (d.offsets, d.mass, d.inertia) == before


def test_guard_on_either_charge_removes_dipole():
    # Charge 1 sits at (0, 0), 0.01 m from the static charge
    statics = [StaticCharge((-0.01, 0.0), 1e-9)]
    d = make_dipole(position=(0.1, 0.0), id=4)
    bodies = [d]
    removed = step_dynamics(bodies, statics, 1 / 30, substeps=25, guard=0.04)
    assert removed == [d]
    assert bodies == []
    assert np.array_equal(d.position, (0.1, 0.0))


def test_lone_dipole_ignores_own_charges():
    d = make_dipole(spacing=0.2, id=1)
    bodies = [d]
    step_dynamics(bodies, [], 1 / 30, substeps=25, guard=0.04, interaction=True)
    assert d.alive
    assert np.array_equal(d.velocity, (0.0, 0.0))
    assert d.omega == 0.0


def test_kinetic_energy_includes_rotation():
    d = make_dipole(masses=(1.0, 1.0), spacing=2.0, velocity=(3.0, 0.0), omega=2.0)
    # 0.5·2·9 + 0.5·(1 + 1)·4
    assert np.isclose(kinetic_energy([d]), 9.0 + 4.0)


def test_zero_length_dipole_translates_without_turning():
    """d = 0 gives I = 0: the rod has no rotational freedom, only a net force."""
    statics = [StaticCharge((-2.0, 0.0), 1e-9)]
    d = make_dipole(charges=(2e-9, -1e-9), spacing=0.0, angle=0.7, id=1)
    assert d.inertia == 0.0
    bodies = [d]
    for _ in range(3):
        step_dynamics(bodies, statics, 1 / 30, substeps=25, guard=0.04)

    assert bodies == [d]
    assert d.omega == 0.0
    assert d.angle == 0.7
    assert np.all(np.isfinite(d.position))
    # Net charge +1e-9 is pushed away from the positive static charge
    assert d.velocity[0] > 0.0
    assert d.position[0] > 0.0


def test_massless_end_dipole_in_simulation():
    """One massless end puts the center of mass on the other charge, so I = 0."""
    sim = Simulation()
    sim.add_static_charge(-1.0, 0.0, +1)
    sim.add_dynamic_body("point", 1.0, 1.0)
    did = sim.add_dynamic_body("dipole", 0.0, -1.0, masses=(3e-9, 0.0))
    d = sim.state.bodies[1]
    assert d.inertia == 0.0

    for _ in range(3):
        snap = sim.step_frame()

    assert np.isclose(snap.time, 3 / 30)
    assert [p.id for p in snap.bodies][-1] == did
    assert d.omega == 0.0
    assert np.all(np.isfinite(d.position))
    assert np.all(np.isfinite(d.velocity))
