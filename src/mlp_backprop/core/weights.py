"""Weight matrices of the input -> hidden1 -> hidden2 -> output network."""
from __future__ import annotations

from typing import Iterable, Optional, Sequence, Union

import numpy as np
from numpy.typing import NDArray

from .config import Topology

SeedLike = Union[int, np.random.Generator, None]


def as_generator(rng: SeedLike) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


class WeightStore:
    """Owner of the three exactly sized weight matrices.

    ``matrices[n][k, j]`` is the weight from unit ``k`` of layer ``n`` to unit
    ``j`` of layer ``n + 1``. The matrices are mutated in place by training;
    use :meth:`copy` to take a snapshot.
    """

    def __init__(self, topology: Topology, matrices: Sequence[NDArray[np.float64]]):
        if len(matrices) != len(topology.transitions):
            raise ValueError("expected one matrix per layer transition")
        checked = []
        for index, (matrix, shape) in enumerate(zip(matrices, topology.transitions)):
            array = np.array(matrix, dtype=np.float64)
            if array.shape != shape:
                raise ValueError(f"matrix {index} has shape {array.shape}, expected {shape}")
            checked.append(array)
        self.topology = topology
        self.matrices: list[NDArray[np.float64]] = checked

    def __repr__(self) -> str:
        widths = "-".join(str(width) for width in self.topology.widths)
        return f"<WeightStore topology={widths}>"

    @classmethod
    def zeros(cls, topology: Topology) -> "WeightStore":
        return cls(topology, [np.zeros(shape) for shape in topology.transitions])

    @classmethod
    def random(
        cls,
        topology: Topology,
        min_rand: float,
        max_rand: float,
        rng: SeedLike = None,
    ) -> "WeightStore":
        """Draw every weight uniformly from ``[min_rand, max_rand]``.

        Draws happen layer by layer, source row by source row, so a given seed
        always yields the same weights for the same topology.
        """

        if min_rand > max_rand:
            raise ValueError("min_rand cannot exceed max_rand")
        generator = as_generator(rng)
        matrices = [generator.uniform(min_rand, max_rand, size=shape) for shape in topology.transitions]
        return cls(topology, matrices)

    @classmethod
    def from_flat(cls, topology: Topology, values: Iterable[float]) -> "WeightStore":
        """Rebuild a store from the sequence produced by :meth:`flatten`."""

        flat = np.asarray(list(values), dtype=np.float64).reshape(-1)
        if flat.size != topology.num_weights:
            raise ValueError(f"expected {topology.num_weights} weights, got {flat.size}")
        matrices = []
        offset = 0
        for src, dst in topology.transitions:
            matrices.append(flat[offset : offset + src * dst].reshape(src, dst))
            offset += src * dst
        return cls(topology, matrices)

    @property
    def input_hidden1(self) -> NDArray[np.float64]:
        return self.matrices[0]

    @property
    def hidden1_hidden2(self) -> NDArray[np.float64]:
        return self.matrices[1]

    @property
    def hidden2_output(self) -> NDArray[np.float64]:
        return self.matrices[2]

    def flatten(self) -> NDArray[np.float64]:
        """Return all weights grouped layer-major, source-major, destination-major."""

        return np.concatenate([matrix.reshape(-1) for matrix in self.matrices])

    def copy(self) -> "WeightStore":
        return WeightStore(self.topology, [matrix.copy() for matrix in self.matrices])

    def is_finite(self) -> bool:
        return all(bool(np.all(np.isfinite(matrix))) for matrix in self.matrices)

    def allclose(self, other: "WeightStore", *, atol: float = 0.0, rtol: float = 0.0) -> bool:
        if other.topology != self.topology:
            return False
        return all(
            np.allclose(mine, theirs, atol=atol, rtol=rtol)
            for mine, theirs in zip(self.matrices, other.matrices)
        )


def initial_weights(
    topology: Topology,
    min_rand: float,
    max_rand: float,
    *,
    rng: SeedLike = None,
    flat: Optional[Iterable[float]] = None,
) -> WeightStore:
    """Return pre-populated weights when ``flat`` is given, random ones otherwise."""

    if flat is not None:
        return WeightStore.from_flat(topology, flat)
    return WeightStore.random(topology, min_rand, max_rand, rng=rng)
