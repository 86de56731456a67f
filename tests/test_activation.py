import math

import numpy as np
import pytest

from mlp_backprop.core.activation import sigmoid, sigmoid_derivative


def test_sigmoid_at_zero_is_one_half() -> None:
    assert sigmoid(0.0) == 0.5


def test_sigmoid_matches_logistic_formula() -> None:
    xs = np.linspace(-8.0, 8.0, 33)
    expected = 1.0 / (1.0 + np.exp(-xs))
    assert np.allclose(sigmoid(xs), expected, rtol=0, atol=1e-12)


def test_sigmoid_is_monotonic_and_bounded() -> None:
    xs = np.linspace(-15.0, 15.0, 301)
    values = sigmoid(xs)
    assert np.all(values > 0.0)
    assert np.all(values < 1.0)
    assert np.all(np.diff(values) > 0.0)


def test_sigmoid_does_not_overflow_for_large_inputs() -> None:
    with np.errstate(over="raise", invalid="raise"):
        low, high = sigmoid(np.array([-1000.0, 1000.0]))
    assert low == pytest.approx(0.0)
    assert high == pytest.approx(1.0)


@pytest.mark.parametrize("x", [-6.0, -1.5, -0.1, 0.0, 0.3, 2.0, 7.5])
def test_derivative_is_sigmoid_times_complement(x: float) -> None:
    s = 1.0 / (1.0 + math.exp(-x))
    assert sigmoid_derivative(x) == pytest.approx(s * (1.0 - s), rel=1e-10)


def test_derivative_matches_finite_difference() -> None:
    xs = np.linspace(-4.0, 4.0, 17)
    h = 1e-6
    numeric = (sigmoid(xs + h) - sigmoid(xs - h)) / (2 * h)
    assert np.allclose(sigmoid_derivative(xs), numeric, atol=1e-9)
    assert sigmoid_derivative(0.0) == pytest.approx(0.25)


@pytest.mark.parametrize("x", [-40.0, -100.0, -700.0])
def test_sigmoid_stays_positive_far_below_zero(x: float) -> None:
    value = sigmoid(x)
    assert value > 0.0
    assert value == pytest.approx(math.exp(x), rel=1e-12)
    assert sigmoid_derivative(x) > 0.0


def test_derivative_is_symmetric_and_positive_for_large_inputs() -> None:
    xs = np.array([5.0, 40.0, 300.0])
    assert np.all(sigmoid_derivative(xs) > 0.0)
    assert np.allclose(sigmoid_derivative(xs), sigmoid_derivative(-xs), rtol=1e-15, atol=0)


def test_sigmoid_returns_scalar_for_scalar_input() -> None:
    assert np.ndim(sigmoid(1.0)) == 0
    assert sigmoid(np.array([0.0])).shape == (1,)
