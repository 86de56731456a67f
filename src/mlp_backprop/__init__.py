"""Two-hidden-layer sigmoid perceptron trained by online backpropagation.

The package is split into a numeric core that never performs I/O and a thin
layer of adapters:

- ``core``: topology, hyperparameters, weights, activations, forward passes,
- ``training``: the per-case backpropagation step and the epoch loop,
- ``data``: training cases and the case file format,
- ``io``: configuration, weight files and reports,
- ``utils``: plotting.
"""

import logging

from .core import ActivationBuffer, Hyperparameters, Topology, WeightStore, propagate
from .data import TrainingCase, load_training_cases, xor_cases
from .training import TerminationReason, TrainingLoop, TrainingResult, train

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ActivationBuffer",
    "Hyperparameters",
    "TerminationReason",
    "Topology",
    "TrainingCase",
    "TrainingLoop",
    "TrainingResult",
    "WeightStore",
    "load_training_cases",
    "propagate",
    "train",
    "xor_cases",
]
