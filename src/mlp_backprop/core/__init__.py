"""Numeric core: topology, weights, activations and forward passes."""

from .activation import sigmoid, sigmoid_derivative
from .buffer import ActivationBuffer
from .config import Hyperparameters, Topology
from .propagation import PropagationTrace, instrumented_propagate, propagate, squared_error
from .weights import WeightStore, initial_weights

__all__ = [
    "ActivationBuffer",
    "Hyperparameters",
    "PropagationTrace",
    "Topology",
    "WeightStore",
    "initial_weights",
    "instrumented_propagate",
    "propagate",
    "sigmoid",
    "sigmoid_derivative",
    "squared_error",
]
