import math

import numpy as np
import pytest

from mlp_backprop.core import ActivationBuffer, Topology, WeightStore, instrumented_propagate, propagate
from mlp_backprop.training import BackpropTrainer


def _sd(x: float) -> float:
    s = 1.0 / (1.0 + math.exp(-x))
    return s * (1.0 - s)


def _reference_update(before: WeightStore, activations, trace, lr: float) -> WeightStore:
    """Scalar replay of the update rule on explicit pre-update snapshots."""

    w0, w1, w2 = (m.copy() for m in before.matrices)
    a_in, a_h1, a_h2, _ = activations
    n_in, n_h1 = w0.shape
    n_h2, n_out = w2.shape

    psi_j = [0.0] * n_h2
    for j in range(n_h2):
        omega_j = sum(trace.psi_i[i] * before.hidden2_output[j, i] for i in range(n_out))
        for i in range(n_out):
            w2[j, i] += lr * trace.psi_i[i] * a_h2[j]
        psi_j[j] = omega_j * _sd(trace.theta_j[j])

    psi_k = [0.0] * n_h1
    for k in range(n_h1):
        omega_k = sum(psi_j[j] * before.hidden1_hidden2[k, j] for j in range(n_h2))
        for j in range(n_h2):
            w1[k, j] += lr * psi_j[j] * a_h1[k]
        psi_k[k] = omega_k * _sd(trace.theta_k[k])

    for m in range(n_in):
        for k in range(n_h1):
            w0[m, k] += lr * psi_k[k] * a_in[m]

    return WeightStore(before.topology, [w0, w1, w2])


def test_update_uses_pre_update_weights_for_error_sums() -> None:
    topology = Topology(n_input=3, n_hidden1=4, n_hidden2=3, n_output=2)
    weights = WeightStore.random(topology, -1.0, 1.0, rng=17)
    before = weights.copy()
    buffer = ActivationBuffer(topology)
    buffer.load_inputs([0.5, -1.0, 2.0])
    trace = instrumented_propagate(buffer, weights, [0.9, 0.1])
    activations = buffer.snapshot()
    lr = 0.7

    BackpropTrainer(lr).train_one_case(buffer, weights, trace)

    expected = _reference_update(before, activations, trace, lr)
    for got, want in zip(weights.matrices, expected.matrices):
        assert np.allclose(got, want, rtol=0, atol=1e-12)

    # Accumulating omega over already-updated weights gives a measurably different result.
    stale = before.copy()
    stale.matrices[2] = expected.hidden2_output.copy()
    stale.matrices[1] = expected.hidden1_hidden2.copy()
    wrong = _reference_update(stale, activations, trace, lr)
    assert not np.allclose(wrong.input_hidden1, weights.input_hidden1, rtol=0, atol=1e-9)


def test_returns_post_update_error_and_refreshes_buffer() -> None:
    topology = Topology(2, 2, 2, 1)
    weights = WeightStore.random(topology, -1.0, 1.0, rng=5)
    buffer = ActivationBuffer(topology)
    buffer.load_inputs([1.0, 0.0])
    trace = instrumented_propagate(buffer, weights, [1.0])

    error = BackpropTrainer(0.3).train_one_case(buffer, weights, trace)

    check = ActivationBuffer(topology)
    check.load_inputs([1.0, 0.0])
    outputs = propagate(check, weights)
    assert error == pytest.approx(0.5 * (1.0 - outputs[0]) ** 2)
    assert np.array_equal(buffer.outputs, outputs)
    assert np.array_equal(buffer.inputs, [1.0, 0.0])


def test_zero_inputs_leave_first_layer_unchanged() -> None:
    topology = Topology(2, 3, 2, 1)
    weights = WeightStore.random(topology, -1.0, 1.0, rng=9)
    before = weights.copy()
    buffer = ActivationBuffer(topology)
    buffer.load_inputs([0.0, 0.0])
    trace = instrumented_propagate(buffer, weights, [1.0])
    BackpropTrainer(0.5).train_one_case(buffer, weights, trace)
    assert np.array_equal(weights.input_hidden1, before.input_hidden1)
    assert not np.array_equal(weights.hidden2_output, before.hidden2_output)


def test_repeated_updates_strictly_decrease_error_on_one_case() -> None:
    topology = Topology(1, 1, 1, 1)
    weights = WeightStore.from_flat(topology, [0.5, -0.3, 0.8])
    trainer = BackpropTrainer(0.1)
    buffer = ActivationBuffer(topology)

    errors = []
    for _ in range(50):
        buffer.load_inputs([0.5])
        trace = instrumented_propagate(buffer, weights, [0.9])
        if not errors:
            errors.append(trace.error)
        errors.append(trainer.train_one_case(buffer, weights, trace))

    assert all(later < earlier for earlier, later in zip(errors, errors[1:]))


def test_learning_rate_must_be_positive() -> None:
    with pytest.raises(ValueError):
        BackpropTrainer(0.0)
