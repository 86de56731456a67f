"""Configuration dataclasses for the two-hidden-layer perceptron."""
from __future__ import annotations

from dataclasses import dataclass
import math


@dataclass(frozen=True, slots=True)
class Topology:
    """Layer widths of the fixed-depth network.

    Parameters
    ----------
    n_input:
        Number of raw input values fed into layer 0.
    n_hidden1:
        Width of the first hidden layer.
    n_hidden2:
        Width of the second hidden layer.
    n_output:
        Number of output units. Each one is compared against an expected
        value during training.
    """

    n_input: int
    n_hidden1: int
    n_hidden2: int
    n_output: int

    def __post_init__(self) -> None:
        for name in ("n_input", "n_hidden1", "n_hidden2", "n_output"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer")
            if value <= 0:
                raise ValueError(f"{name} must be positive")

    @property
    def widths(self) -> tuple[int, int, int, int]:
        return (self.n_input, self.n_hidden1, self.n_hidden2, self.n_output)

    @property
    def transitions(self) -> tuple[tuple[int, int], ...]:
        """``(source, destination)`` widths of the three weight matrices."""

        widths = self.widths
        return tuple((widths[n], widths[n + 1]) for n in range(len(widths) - 1))

    @property
    def max_width(self) -> int:
        return max(self.widths)

    @property
    def num_weights(self) -> int:
        return sum(src * dst for src, dst in self.transitions)


@dataclass(frozen=True, slots=True)
class Hyperparameters:
    """Training constants fixed for the lifetime of a run.

    Parameters
    ----------
    learning_rate:
        Step size applied to every online weight update.
    error_threshold:
        Training stops as converged once the epoch's average error drops
        strictly below this value.
    max_iterations:
        Epoch budget. The loop exits as exhausted once the epoch counter
        exceeds this value, so ``max_iterations + 1`` epochs run at most.
    min_rand, max_rand:
        Bounds of the uniform distribution used for random initialisation.
    """

    learning_rate: float
    error_threshold: float
    max_iterations: int
    min_rand: float = -1.0
    max_rand: float = 1.0

    def __post_init__(self) -> None:
        if not math.isfinite(self.learning_rate) or self.learning_rate <= 0:
            raise ValueError("learning_rate must be positive")
        if not math.isfinite(self.error_threshold) or self.error_threshold < 0:
            raise ValueError("error_threshold must be non-negative")
        if isinstance(self.max_iterations, bool) or not isinstance(self.max_iterations, int):
            raise ValueError("max_iterations must be an integer")
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        if not (math.isfinite(self.min_rand) and math.isfinite(self.max_rand)):
            raise ValueError("min_rand and max_rand must be finite")
        if self.min_rand > self.max_rand:
            raise ValueError("min_rand cannot exceed max_rand")
