import math
import numpy as np

from concengine.models.exponential import concentration, decay_constant


def test_decay_constant_matches_half_life():
    """λ = ln 2 / t½, so λ * t½ is always ln 2."""
    for t_half in (0.5, 6.0, 24.0, 30.0, 1000.0):
        assert math.isclose(decay_constant(t_half) * t_half, math.log(2.0), rel_tol=1e-12)


def test_no_time_elapsed_returns_full_amount():
    for amount, t_half in [(20.0, 24.0), (0.1, 0.5), (500.0, 168.0)]:
        assert concentration(amount, t_half, 0.0) == amount


def test_one_half_life_halves_the_amount():
    """
    For pure first-order elimination:
      C(t) = A * exp(-ln2 * t / t½)
    so after exactly one half-life half the amount is left, after two a quarter.
    """
    for amount, t_half in [(20.0, 24.0), (10.0, 30.0), (3.0, 2.5)]:
        assert math.isclose(concentration(amount, t_half, t_half), amount / 2, rel_tol=1e-9)
        assert math.isclose(concentration(amount, t_half, 2 * t_half), amount / 4, rel_tol=1e-9)


def test_future_intake_contributes_zero():
    assert concentration(20.0, 24.0, -1.0) == 0.0
    assert concentration(20.0, 24.0, -1e6) == 0.0


def test_array_input_is_strictly_decreasing_after_intake():
    t = np.arange(0.0, 200.0, 0.5)
    C = concentration(50.0, 12.0, t)

    assert isinstance(C, np.ndarray) and C.shape == t.shape
    assert np.all(np.diff(C) < 0)
    assert np.all(C > 0)


def test_array_input_matches_analytical_curve():
    t = np.linspace(-10.0, 96.0, 107)
    C = concentration(20.0, 24.0, t)

    expected = np.where(t >= 0, 20.0 * np.exp(-math.log(2.0) / 24.0 * t), 0.0)
    assert np.allclose(C, expected, rtol=1e-12, atol=0.0)
