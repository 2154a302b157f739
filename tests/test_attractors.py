import math

import numpy as np
import pytest

from attractors import (
    AVAILABLE_ATTRACTORS, ATTRACTORS_BY_NAME, create_attractor,
    TrigonometricMap, CliffordMap, QuadraticMap, PolarMap, SymmetricMap,
    DuffingOscillator, LorenzSystem, DoublePendulum,
)

ALL = list(AVAILABLE_ATTRACTORS.values())
CONTINUOUS = [DuffingOscillator, LorenzSystem, DoublePendulum]
DISCRETE = [TrigonometricMap, CliffordMap, QuadraticMap, PolarMap, SymmetricMap]


def orbit(attractor, steps):
    attractor.state.set_init()
    points = []
    for _ in range(steps):
        attractor.apply_map_func()
        points.append(attractor.state.get_xs().copy())
    return np.array(points), attractor.state.time


@pytest.mark.parametrize('cls', ALL)
def test_parallel_parameter_vectors(cls):
    attractor = cls()
    assert len(attractor.coefs()) == len(attractor.coef_ranges()) == len(attractor.speeds())
    assert attractor.state.x.shape == attractor.state.init_x.shape == (attractor.state.n,)


@pytest.mark.parametrize('cls', ALL)
def test_registry_names_match(cls):
    attractor = cls()
    assert ATTRACTORS_BY_NAME[attractor.name] is cls
    assert isinstance(create_attractor(attractor.name), cls)


def test_unknown_registry_key():
    with pytest.raises(ValueError):
        create_attractor('henon')


@pytest.mark.parametrize('cls', ALL)
def test_iteration_is_deterministic(cls):
    attractor = cls()
    first, t1 = orbit(attractor, 300)
    second, t2 = orbit(attractor, 300)
    np.testing.assert_array_equal(first, second)
    assert t1 == t2


@pytest.mark.parametrize('cls', ALL)
def test_evolve_point_matches_apply_map_func(cls):
    attractor = cls()
    attractor.state.set_init()
    xs, t = attractor.evolve_point(attractor.state.init_x, 0.0)
    # pure form leaves the instance alone
    np.testing.assert_array_equal(attractor.state.x, attractor.state.init_x)
    attractor.apply_map_func()
    np.testing.assert_array_equal(xs, attractor.state.x)
    assert t == attractor.state.time


@pytest.mark.parametrize('cls', CONTINUOUS)
def test_continuous_systems_advance_time(cls):
    attractor = cls()
    _, t = orbit(attractor, 1000)
    assert t == pytest.approx(1000 * attractor.state.dt)


@pytest.mark.parametrize('cls', DISCRETE)
def test_discrete_maps_keep_time(cls):
    attractor = cls()
    _, t = orbit(attractor, 10)
    assert t == 0.0


@pytest.mark.parametrize('cls', [c for c in ALL if c is not SymmetricMap])
def test_random_coefs_within_ranges(cls, rng):
    attractor = cls()
    for _ in range(25):
        attractor.change_random_coefs(rng)
        for value, (low, high) in zip(attractor.coefs(), attractor.coef_ranges()):
            assert low <= value <= high


@pytest.mark.parametrize('cls', ALL)
def test_random_init_within_range(cls, rng):
    attractor = cls()
    low, high = attractor.state.x_range
    for _ in range(25):
        attractor.set_random_init(rng)
        assert np.all((attractor.state.init_x >= low) & (attractor.state.init_x <= high))


def test_symmetric_correlated_sampling(rng):
    attractor = SymmetricMap()
    for _ in range(200):
        attractor.change_random_coefs(rng)
        c = attractor.coefs()
        assert c[0] == float(int(c[0]))
        assert 3.0 <= c[0] <= 25.0
        assert c[1] * c[2] < 0.0
        assert 1.0 <= abs(c[1]) <= 5.0
        assert 1.0 <= abs(c[2]) <= 5.0
        for value, (low, high) in zip(c[3:], attractor.coef_ranges()[3:]):
            assert low <= value <= high


def test_random_coefs_are_seedable():
    a, b = SymmetricMap(), SymmetricMap()
    a.change_random_coefs(np.random.default_rng(9))
    b.change_random_coefs(np.random.default_rng(9))
    np.testing.assert_array_equal(a.coefs(), b.coefs())
    c, d = PolarMap.random(np.random.default_rng(3)), PolarMap.random(np.random.default_rng(3))
    np.testing.assert_array_equal(c.coefs(), d.coefs())


def test_trigonometric_step():
    attractor = TrigonometricMap()
    attractor.state.set_init()
    attractor.apply_map_func()
    s = 0.25 + 0.25 + 0.25 + 1.0
    x, y = attractor.state.get_xy()
    assert x == pytest.approx(math.sin(s), rel=1e-12)
    assert y == pytest.approx(math.cos(s), rel=1e-12)


def test_clifford_step_follows_its_formula():
    attractor = CliffordMap()
    attractor.set_coefs([1.0, 2.0, 0.5, 1.5, -1.0, 0.5, 2.0, -1.5])
    attractor.state.set_init()
    attractor.apply_map_func()
    x, y = attractor.state.get_xy()
    assert x == pytest.approx(1.0 * math.sin(2.0 * 0.5) + 0.5 * math.cos(1.5 * 0.5), rel=1e-12)
    assert y == pytest.approx(-1.0 * math.sin(0.5 * 0.5) + 2.0 * math.cos(-1.5 * 0.5), rel=1e-12)


def test_quadratic_fixed_point():
    attractor = QuadraticMap()
    coefs = np.zeros(12)
    coefs[5] = 0.5
    coefs[11] = 0.5
    attractor.set_coefs(coefs)
    attractor.set_init_x([-0.3, 0.8])
    attractor.state.set_init()
    for _ in range(5):
        attractor.apply_map_func()
        assert attractor.state.get_xy() == (0.5, 0.5)


def test_polar_step():
    attractor = PolarMap()
    attractor.state.set_init()
    attractor.apply_map_func()
    u = math.sin(0.5) + math.tanh(0.75)
    v = (math.sin(2.25 / 1.75) - 0.5) + 0.5 / math.cosh(1.0)
    x, y = attractor.state.get_xy()
    assert x == pytest.approx(u * math.cos(v), rel=1e-12)
    assert y == pytest.approx(u * math.sin(v) + 1.0, rel=1e-12)


def test_symmetric_step_matches_complex_formula():
    attractor = SymmetricMap()
    attractor.set_coefs([5.0, -1.8, 1.2, 0.3, 0.2, -0.7])
    attractor.set_init_x([0.3, -0.4])
    attractor.state.set_init()
    attractor.apply_map_func()
    z = complex(0.3, -0.4)
    zp = z ** 4
    expected = (-1.8 + 1.2 * abs(z) ** 2 + 0.3 * (z * zp).real + 0.2 * z * 1j) * z - 0.7 * zp
    x, y = attractor.state.get_xy()
    assert x == pytest.approx(expected.real, rel=1e-9)
    assert y == pytest.approx(expected.imag, rel=1e-9)


def test_symmetric_default_is_a_fixed_point():
    attractor = SymmetricMap()
    attractor.state.set_init()
    attractor.apply_map_func()
    assert attractor.state.get_xy() == pytest.approx((0.5, 0.5))


def test_duffing_euler_step():
    attractor = DuffingOscillator()
    attractor.state.set_init()
    attractor.apply_map_func()
    dt = 0.0005
    x, y = attractor.state.get_xy()
    assert x == pytest.approx(0.5 + 0.5 * dt, rel=1e-12)
    assert y == pytest.approx(0.5 + (0.5 - 0.125 - 0.25 + 0.5) * dt, rel=1e-12)
    assert attractor.state.time == pytest.approx(dt)


def test_lorenz_euler_step():
    attractor = LorenzSystem()
    attractor.set_coefs([10.0, 28.0, 8.0 / 3.0])
    attractor.set_init_x([1.0, 2.0, 3.0])
    attractor.state.set_init()
    attractor.apply_map_func()
    dt = 0.0001
    x, y, z = attractor.state.get_xyz()
    assert x == pytest.approx(1.0 + 10.0 * (2.0 - 1.0) * dt, rel=1e-12)
    assert y == pytest.approx(2.0 + (1.0 * (28.0 - 3.0) - 2.0) * dt, rel=1e-12)
    assert z == pytest.approx(3.0 + (2.0 - 8.0) * dt, rel=1e-12)


def test_double_pendulum_rest_state():
    attractor = DoublePendulum()
    attractor.set_init_x([0.0, 0.0, 0.0, 0.0])
    attractor.state.set_init()
    for _ in range(100):
        attractor.apply_map_func()
    np.testing.assert_array_equal(attractor.state.x, np.zeros(4))


def test_double_pendulum_angles_wrapped():
    attractor = DoublePendulum()
    attractor.set_init_x([3.0, -3.0, 0.0, 0.0])
    attractor.state.set_xs([6.28, -6.28, 40.0, -40.0])
    for _ in range(2000):
        attractor.apply_map_func()
        th1, th2 = attractor.state.get_xy()
        assert abs(th1) < 2 * math.pi
        assert abs(th2) < 2 * math.pi


def test_double_pendulum_wrap_keeps_sign():
    # truncating remainder: an angle past +2pi wraps to a small positive value, past -2pi to a small negative one
    attractor = DoublePendulum()
    attractor.state.set_xs([6.283, -6.283, 40.0, -40.0])
    attractor.apply_map_func()
    th1, th2 = attractor.state.get_xy()
    assert 0.0 < th1 < 0.1
    assert -0.1 < th2 < 0.0


def test_double_pendulum_renders():
    attractor = DoublePendulum()
    attractor.set_init_x([2.0, 1.0, 0.0, 0.0])
    hist, max_count = attractor.histogram(60000, 32, 32)
    assert hist.sum() == 60000
    assert max_count > 0
    assert np.count_nonzero(hist) > 1


def test_double_pendulum_small_swing_is_bounded():
    # small oscillation: the angle never exceeds its starting amplitude by much
    attractor = DoublePendulum()
    attractor.set_init_x([0.05, 0.05, 0.0, 0.0])
    attractor.state.set_init()
    for _ in range(20000):
        attractor.apply_map_func()
        th1, th2 = attractor.state.get_xy()
        assert abs(th1) < 0.2
        assert abs(th2) < 0.2


def test_set_coef_clamps_to_range():
    attractor = TrigonometricMap()
    attractor.set_coef(0, 12.0)
    attractor.set_coef(1, -7.0)
    attractor.set_coef(2, 0.25)
    assert attractor.coefs()[:3].tolist() == [5.0, -5.0, 0.25]


def test_set_coefs_checks_length():
    with pytest.raises(ValueError):
        LorenzSystem().set_coefs([1.0, 2.0])


def test_dt_editing():
    attractor = DuffingOscillator()
    attractor.set_dt(0.001)
    assert attractor.state.get_dt() == 0.001
    with pytest.raises(ValueError):
        TrigonometricMap().set_dt(0.001)
