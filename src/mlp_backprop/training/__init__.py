"""Training utilities for the two-hidden-layer perceptron."""

from .backprop import BackpropTrainer
from .loop import (
    CaseResult,
    TerminationReason,
    TrainingLoop,
    TrainingResult,
    TrainingState,
    evaluate,
    train,
)

__all__ = [
    "BackpropTrainer",
    "CaseResult",
    "TerminationReason",
    "TrainingLoop",
    "TrainingResult",
    "TrainingState",
    "evaluate",
    "train",
]
