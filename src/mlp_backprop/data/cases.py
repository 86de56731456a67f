"""Training cases and the plain-text case file format."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..core.config import Topology


def _frozen_vector(values: ArrayLike) -> NDArray[np.float64]:
    array = np.array(values, dtype=np.float64).reshape(-1)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, slots=True, eq=False)
class TrainingCase:
    """One ``(inputs, expected)`` pair. Both vectors are read-only."""

    inputs: NDArray[np.float64]
    expected: NDArray[np.float64]

    def __post_init__(self) -> None:
        object.__setattr__(self, "inputs", _frozen_vector(self.inputs))
        object.__setattr__(self, "expected", _frozen_vector(self.expected))

    def check_shape(self, topology: Topology) -> None:
        if self.inputs.size != topology.n_input:
            raise ValueError(f"case has {self.inputs.size} inputs, topology expects {topology.n_input}")
        if self.expected.size != topology.n_output:
            raise ValueError(
                f"case has {self.expected.size} expected values, topology expects {topology.n_output}"
            )


def make_cases(pairs: Iterable[Tuple[ArrayLike, ArrayLike]]) -> Tuple[TrainingCase, ...]:
    return tuple(TrainingCase(inputs, expected) for inputs, expected in pairs)


def xor_cases() -> Tuple[TrainingCase, ...]:
    """The four exclusive-or cases in their canonical order."""

    return make_cases(
        [
            ((0.0, 0.0), (0.0,)),
            ((0.0, 1.0), (1.0,)),
            ((1.0, 0.0), (1.0,)),
            ((1.0, 1.0), (0.0,)),
        ]
    )


def parse_training_cases(
    lines: Iterable[str],
    topology: Topology,
    *,
    source: str = "<cases>",
) -> Tuple[TrainingCase, ...]:
    """Parse one case per line: inputs followed by expected outputs."""

    width = topology.n_input + topology.n_output
    cases = []
    for number, raw in enumerate(lines, start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        fields = line.replace(",", " ").split()
        if len(fields) != width:
            raise ValueError(f"{source}:{number}: expected {width} values, found {len(fields)}")
        try:
            values = [float(field) for field in fields]
        except ValueError as exc:
            raise ValueError(f"{source}:{number}: {exc}") from exc
        cases.append(TrainingCase(values[: topology.n_input], values[topology.n_input :]))
    return tuple(cases)


def load_training_cases(
    path: str | Path,
    topology: Topology,
    num_cases: Optional[int] = None,
) -> Tuple[TrainingCase, ...]:
    """Read a case file, keeping the file order exactly."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Training case file not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        cases = parse_training_cases(handle, topology, source=str(path))
    if not cases:
        raise ValueError(f"{path}: no training cases found")
    if num_cases is not None and len(cases) != num_cases:
        raise ValueError(f"{path}: expected {num_cases} training cases, found {len(cases)}")
    return cases


def format_training_cases(cases: Sequence[TrainingCase]) -> str:
    """Render cases in the format accepted by :func:`parse_training_cases`."""

    rows = []
    for case in cases:
        values = list(case.inputs) + list(case.expected)
        rows.append(" ".join(f"{value:.17g}" for value in values))
    return "\n".join(rows) + "\n"


__all__ = [
    "TrainingCase",
    "format_training_cases",
    "load_training_cases",
    "make_cases",
    "parse_training_cases",
    "xor_cases",
]
