"""Forward passes through the four-layer network.

Two flavours exist:

* :func:`propagate` is the plain inference pass. It overwrites the hidden and
  output layers of the buffer and returns a copy of the outputs.
* :func:`instrumented_propagate` performs the same computation in three
  explicit stages and additionally keeps every pre-activation sum (``theta``)
  as well as the output error signal ``psi_i`` needed by backpropagation.

Both read the case input from layer 0 of the buffer; neither touches the
weights.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .activation import sigmoid, sigmoid_derivative
from .buffer import ActivationBuffer
from .weights import WeightStore


@dataclass(slots=True)
class PropagationTrace:
    """Per-case scratch values recorded by :func:`instrumented_propagate`.

    Attributes
    ----------
    theta_k:
        Pre-activation sums of the first hidden layer.
    theta_j:
        Pre-activation sums of the second hidden layer.
    theta_i:
        Pre-activation sums of the output layer.
    psi_i:
        Local error signal of every output unit,
        ``(expected - output) * sigmoid'(theta_i)``.
    outputs:
        Output activations before any weight update.
    expected:
        Target values the error signal was computed against.
    """

    theta_k: NDArray[np.float64]
    theta_j: NDArray[np.float64]
    theta_i: NDArray[np.float64]
    psi_i: NDArray[np.float64]
    outputs: NDArray[np.float64]
    expected: NDArray[np.float64]

    @property
    def error(self) -> float:
        """Squared error of the outputs before the update."""

        return squared_error(self.expected, self.outputs)


def squared_error(expected: ArrayLike, outputs: ArrayLike) -> float:
    """``sum(0.5 * (expected - outputs) ** 2)`` over the output units."""

    difference = np.asarray(expected, dtype=np.float64) - np.asarray(outputs, dtype=np.float64)
    return float(np.sum(0.5 * difference * difference))


def _check_compatible(buffer: ActivationBuffer, weights: WeightStore) -> None:
    if buffer.topology != weights.topology:
        raise ValueError("activation buffer and weights were built for different topologies")


def propagate(buffer: ActivationBuffer, weights: WeightStore) -> NDArray[np.float64]:
    """Run the plain forward pass and return the output activations."""

    _check_compatible(buffer, weights)
    for n, matrix in enumerate(weights.matrices):
        buffer.layers[n + 1][:] = sigmoid(buffer.layers[n] @ matrix)
    return buffer.outputs.copy()


def instrumented_propagate(
    buffer: ActivationBuffer,
    weights: WeightStore,
    expected: ArrayLike,
) -> PropagationTrace:
    """Forward pass that records everything :class:`BackpropTrainer` needs."""

    _check_compatible(buffer, weights)
    target = np.asarray(expected, dtype=np.float64).reshape(-1)
    if target.size != weights.topology.n_output:
        raise ValueError(f"expected {weights.topology.n_output} target values, got {target.size}")

    # input -> hidden1
    theta_k = buffer.inputs @ weights.input_hidden1
    buffer.hidden1[:] = sigmoid(theta_k)

    # hidden1 -> hidden2
    theta_j = buffer.hidden1 @ weights.hidden1_hidden2
    buffer.hidden2[:] = sigmoid(theta_j)

    # hidden2 -> output
    theta_i = buffer.hidden2 @ weights.hidden2_output
    buffer.outputs[:] = sigmoid(theta_i)
    psi_i = (target - buffer.outputs) * sigmoid_derivative(theta_i)

    return PropagationTrace(
        theta_k=theta_k,
        theta_j=theta_j,
        theta_i=theta_i,
        psi_i=psi_i,
        outputs=buffer.outputs.copy(),
        expected=target,
    )
