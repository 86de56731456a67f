"""Epoch-level convergence loop for online backpropagation."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
import math
from typing import Callable, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from ..core.buffer import ActivationBuffer
from ..core.config import Hyperparameters, Topology
from ..core.propagation import instrumented_propagate, propagate, squared_error
from ..core.weights import SeedLike, WeightStore, initial_weights
from ..data.cases import TrainingCase
from .backprop import BackpropTrainer

logger = logging.getLogger(__name__)

EpochCallback = Callable[[int, float], None]


class TrainingState(str, Enum):
    UNTRAINED = "untrained"
    TRAINING = "training"
    CONVERGED = "converged"
    EXHAUSTED = "exhausted"
    DIVERGED = "diverged"


class TerminationReason(str, Enum):
    CONVERGED = "converged"
    EXHAUSTED = "exhausted"
    DIVERGED = "diverged"


@dataclass(frozen=True, slots=True)
class CaseResult:
    """Network response to a single case."""

    inputs: Tuple[float, ...]
    expected: Tuple[float, ...]
    computed: Tuple[float, ...]
    error: float


@dataclass
class TrainingResult:
    """Everything a caller needs to report on or persist a finished run."""

    termination_reason: TerminationReason
    iterations: int
    average_error: float
    weights: NDArray[np.float64]
    cases: list[CaseResult] = field(default_factory=list)
    error_history: list[float] = field(default_factory=list)

    @property
    def converged(self) -> bool:
        return self.termination_reason is TerminationReason.CONVERGED


def evaluate(
    cases: Sequence[TrainingCase],
    weights: WeightStore,
    buffer: Optional[ActivationBuffer] = None,
) -> list[CaseResult]:
    """Run the plain forward pass over ``cases`` without touching the weights."""

    if buffer is None:
        buffer = ActivationBuffer(weights.topology)
    results = []
    for case in cases:
        buffer.load_inputs(case.inputs)
        outputs = propagate(buffer, weights)
        results.append(
            CaseResult(
                inputs=tuple(float(v) for v in case.inputs),
                expected=tuple(float(v) for v in case.expected),
                computed=tuple(float(v) for v in outputs),
                error=squared_error(case.expected, outputs),
            )
        )
    return results


class TrainingLoop:
    """Online gradient descent over a fixed, ordered case set.

    Each epoch visits the cases in dataset order and updates the weights
    after every single case, so later cases see the updates made by earlier
    ones. Termination is only checked between epochs:

    * ``DIVERGED`` when the epoch's average error or any weight is not finite;
    * ``CONVERGED`` when the average error is strictly below the threshold;
    * ``EXHAUSTED`` when the epoch count exceeds ``max_iterations``. Because
      the comparison is strict, ``max_iterations + 1`` epochs run before this
      fires.

    A loop runs once. Calling :meth:`run` again raises :class:`RuntimeError`.
    """

    def __init__(
        self,
        topology: Topology,
        hyperparameters: Hyperparameters,
        cases: Sequence[TrainingCase],
        *,
        weights: Optional[WeightStore] = None,
        rng: SeedLike = None,
    ) -> None:
        if not cases:
            raise ValueError("at least one training case is required")
        for case in cases:
            case.check_shape(topology)
        if weights is None:
            weights = initial_weights(
                topology, hyperparameters.min_rand, hyperparameters.max_rand, rng=rng
            )
        elif weights.topology != topology:
            raise ValueError("weights were built for a different topology")

        self.topology = topology
        self.hyperparameters = hyperparameters
        self.cases = tuple(cases)
        self.weights = weights
        self.buffer = ActivationBuffer(topology)
        self.trainer = BackpropTrainer(hyperparameters.learning_rate)
        self.state = TrainingState.UNTRAINED
        self.iterations = 0
        self.error_history: list[float] = []

    def run_epoch(self) -> float:
        """Train on every case once and return the epoch's average error."""

        total_error = 0.0
        for case in self.cases:
            self.buffer.load_inputs(case.inputs)
            trace = instrumented_propagate(self.buffer, self.weights, case.expected)
            total_error += self.trainer.train_one_case(self.buffer, self.weights, trace)
        self.iterations += 1
        average_error = total_error / (self.topology.n_output * len(self.cases))
        self.error_history.append(average_error)
        return average_error

    def _termination(self, average_error: float) -> Optional[TerminationReason]:
        if not math.isfinite(average_error) or not self.weights.is_finite():
            return TerminationReason.DIVERGED
        if average_error < self.hyperparameters.error_threshold:
            return TerminationReason.CONVERGED
        if self.iterations > self.hyperparameters.max_iterations:
            return TerminationReason.EXHAUSTED
        return None

    def run(self, on_epoch: Optional[EpochCallback] = None) -> TrainingResult:
        """Train until converged, exhausted or diverged."""

        if self.state is not TrainingState.UNTRAINED:
            raise RuntimeError(f"training loop already ran (state: {self.state.value})")
        self.state = TrainingState.TRAINING
        hp = self.hyperparameters
        logger.info(
            "Training %s network on %d cases (learning_rate=%g, error_threshold=%g, max_iterations=%d)",
            "-".join(str(width) for width in self.topology.widths),
            len(self.cases),
            hp.learning_rate,
            hp.error_threshold,
            hp.max_iterations,
        )

        while True:
            average_error = self.run_epoch()
            logger.debug("Epoch %d: average error %.6g", self.iterations, average_error)
            if on_epoch is not None:
                on_epoch(self.iterations, average_error)
            reason = self._termination(average_error)
            if reason is not None:
                break

        self.state = TrainingState(reason.value)
        if reason is TerminationReason.DIVERGED:
            logger.warning(
                "Training diverged after %d epochs: non-finite error or weights", self.iterations
            )
        else:
            logger.info(
                "Training %s after %d epochs with average error %.6g",
                reason.value,
                self.iterations,
                average_error,
            )

        return TrainingResult(
            termination_reason=reason,
            iterations=self.iterations,
            average_error=average_error,
            weights=self.weights.flatten(),
            cases=evaluate(self.cases, self.weights, self.buffer),
            error_history=list(self.error_history),
        )


def train(
    topology: Topology,
    hyperparameters: Hyperparameters,
    cases: Sequence[TrainingCase],
    *,
    weights: Optional[WeightStore] = None,
    rng: SeedLike = None,
    on_epoch: Optional[EpochCallback] = None,
) -> Tuple[TrainingResult, WeightStore]:
    """Convenience wrapper building a :class:`TrainingLoop` and running it."""

    loop = TrainingLoop(topology, hyperparameters, cases, weights=weights, rng=rng)
    result = loop.run(on_epoch=on_epoch)
    return result, loop.weights
