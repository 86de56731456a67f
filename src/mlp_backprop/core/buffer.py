"""Per-layer activation scratch space."""
from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .config import Topology


class ActivationBuffer:
    """Current activation of every unit, one vector per layer.

    Layer 0 holds the raw case inputs and is only written by
    :meth:`load_inputs`. Layers 1 to 3 are overwritten by every propagation.
    """

    def __init__(self, topology: Topology):
        self.topology = topology
        self.layers: list[NDArray[np.float64]] = [np.zeros(width) for width in topology.widths]

    def load_inputs(self, values: ArrayLike) -> None:
        array = np.asarray(values, dtype=np.float64).reshape(-1)
        if array.size != self.topology.n_input:
            raise ValueError(f"expected {self.topology.n_input} inputs, got {array.size}")
        self.layers[0][:] = array

    @property
    def inputs(self) -> NDArray[np.float64]:
        return self.layers[0]

    @property
    def hidden1(self) -> NDArray[np.float64]:
        return self.layers[1]

    @property
    def hidden2(self) -> NDArray[np.float64]:
        return self.layers[2]

    @property
    def outputs(self) -> NDArray[np.float64]:
        return self.layers[3]

    def snapshot(self) -> Sequence[NDArray[np.float64]]:
        return tuple(layer.copy() for layer in self.layers)
