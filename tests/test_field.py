import numpy as np
import pytest
from electrofield.core.field import evaluate
from electrofield.types import StaticCharge, ChargeLocation


@pytest.mark.parametrize("angle", [0.0, 0.7, np.pi / 2, 2.5, -1.2])
@pytest.mark.parametrize("q", [1e-9, -1e-9])
def test_single_charge_magnitude_and_direction(angle, q):
    """
    Point charge at the origin, sample at r = 1 m:
      |E| = k|q|/r² = 8.99 N/C for q = 1 nC
      E points away from a positive charge, toward a negative one.
    """
    direction = np.array([np.cos(angle), np.sin(angle)])
    s = evaluate(direction, [StaticCharge((0.0, 0.0), q)])

    assert np.isclose(np.linalg.norm(s.field), 8.99)
    assert np.allclose(s.field, np.sign(q) * 8.99 * direction)
    assert np.isclose(s.potential, 8.99 * np.sign(q))
    assert np.isclose(s.nearest, 1.0)


def test_inverse_square_falloff():
    c = [StaticCharge((1.0, -2.0), 2e-9)]
    near = evaluate((1.0, -1.5), c)
    far = evaluate((1.0, -1.0), c)
    assert np.isclose(np.linalg.norm(near.field), 4 * np.linalg.norm(far.field))
    assert np.isclose(near.potential, 2 * far.potential)


@pytest.mark.parametrize("point", [(0.3, 0.4), (-2.0, 1.0), (5.0, -3.0), (0.0, 0.01)])
def test_superposition(point):
    """Field and potential of two sources equal the sums of the individual ones."""
    a = StaticCharge((-1.0, 0.0), 1e-9)
    b = StaticCharge((1.0, 0.5), -3e-9)

    both = evaluate(point, [a, b])
    sa = evaluate(point, [a])
    sb = evaluate(point, [b])

    assert np.allclose(both.field, sa.field + sb.field)
    assert np.isclose(both.potential, sa.potential + sb.potential)
    assert both.nearest == min(sa.nearest, sb.nearest)


def test_empty_source_set():
    s = evaluate((1.0, 2.0), [])
    assert np.array_equal(s.field, np.zeros(2))
    assert s.potential == 0.0
    assert s.nearest == np.inf


def test_nearest_distance():
    charges = [StaticCharge((3.0, 4.0), 1e-9), StaticCharge((0.0, 2.0), -1e-9)]
    assert np.isclose(evaluate((0.0, 0.0), charges).nearest, 2.0)


def test_coincident_static_gives_no_nan():
    s = evaluate((0.0, 0.0), [StaticCharge((0.0, 0.0), 1e-9), StaticCharge((1.0, 0.0), 1e-9)])
    assert s.nearest == 0.0
    assert np.all(np.isfinite(s.field))
    assert np.isfinite(s.potential)
    # Only the second charge contributes
    assert np.allclose(s.field, (-8.99, 0.0))


def test_close_other_bodies_excluded_but_reported():
    """Charges of other bodies inside the guard drop out of the sum but set nearest."""
    static = [StaticCharge((-1.0, 0.0), 1e-9)]
    close = [ChargeLocation(np.array([0.01, 0.0]), 1e-9, owner=7)]

    with_close = evaluate((0.0, 0.0), static, close, guard=0.04)
    static_only = evaluate((0.0, 0.0), static)

    assert np.allclose(with_close.field, static_only.field)
    assert np.isclose(with_close.potential, static_only.potential)
    assert np.isclose(with_close.nearest, 0.01)


def test_far_other_bodies_contribute():
    other = [ChargeLocation(np.array([1.0, 0.0]), 1e-9, owner=3)]
    s = evaluate((0.0, 0.0), [], other, guard=0.04)
    assert np.allclose(s.field, (-8.99, 0.0))
    assert np.isclose(s.nearest, 1.0)


def test_statics_never_excluded_by_guard():
    static = [StaticCharge((0.01, 0.0), 1e-9)]
    s = evaluate((0.0, 0.0), static, guard=0.04)
    assert np.isclose(s.potential, 8.99 / 0.01)
    assert np.isclose(s.nearest, 0.01)
