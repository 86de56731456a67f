"""Plain-text weight files: one value per line, flat order."""
from __future__ import annotations

from pathlib import Path

import numpy as np

from ..core.config import Topology
from ..core.weights import WeightStore


def save_weights(path: str | Path, weights: WeightStore) -> None:
    """Write the flattened weights with enough digits for an exact round trip."""

    np.savetxt(Path(path), weights.flatten(), fmt="%.17g")


def load_weights(path: str | Path, topology: Topology) -> WeightStore:
    """Read a file written by :func:`save_weights` for the given topology."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Weight file not found: {path}")
    values = np.loadtxt(path, dtype=np.float64, ndmin=1)
    try:
        return WeightStore.from_flat(topology, values)
    except ValueError as exc:
        raise ValueError(f"{path}: {exc}") from exc
