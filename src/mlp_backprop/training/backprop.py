"""Online backpropagation step for the two-hidden-layer network."""
from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from ..core.activation import sigmoid_derivative
from ..core.buffer import ActivationBuffer
from ..core.propagation import PropagationTrace, propagate, squared_error
from ..core.weights import WeightStore


class BackpropTrainer:
    """Apply one gradient descent update per training case.

    The trainer holds no per-case state. Everything it reads (activations,
    pre-activation sums, the output error signal) comes from the buffer and
    the :class:`PropagationTrace` of the case being trained, and the only
    thing it mutates is the :class:`WeightStore`, in place.
    """

    def __init__(self, learning_rate: float):
        if learning_rate <= 0:
            raise ValueError("learning_rate must be positive")
        self.learning_rate = learning_rate

    def __repr__(self) -> str:
        return f"<BackpropTrainer learning_rate={self.learning_rate!r}>"

    def train_one_case(
        self,
        buffer: ActivationBuffer,
        weights: WeightStore,
        trace: PropagationTrace,
    ) -> float:
        """Update all weights for the case last passed to ``instrumented_propagate``.

        The error sum feeding a layer's signal is always taken over the
        weights as they stood before this case touched them, so each layer
        accumulates ``omega`` first and only then updates its outgoing
        matrix. After the three updates the network is propagated again and
        the post-update squared error of the case is returned.
        """

        lr = self.learning_rate

        psi_j = self._update_layer(
            weights.hidden2_output, trace.psi_i, buffer.hidden2, trace.theta_j, lr
        )
        psi_k = self._update_layer(
            weights.hidden1_hidden2, psi_j, buffer.hidden1, trace.theta_k, lr
        )
        # Input layer: no error signal is needed below this point.
        w0 = weights.input_hidden1
        w0 += lr * np.outer(buffer.inputs, psi_k)

        outputs = propagate(buffer, weights)
        return squared_error(trace.expected, outputs)

    @staticmethod
    def _update_layer(
        matrix: NDArray[np.float64],
        psi_downstream: NDArray[np.float64],
        activations: NDArray[np.float64],
        theta: NDArray[np.float64],
        lr: float,
    ) -> NDArray[np.float64]:
        omega = matrix @ psi_downstream
        matrix += lr * np.outer(activations, psi_downstream)
        return omega * sigmoid_derivative(theta)
