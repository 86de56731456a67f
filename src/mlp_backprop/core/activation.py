"""Sigmoid activation and its derivative."""
from __future__ import annotations

from typing import Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

FloatOrArray = Union[float, NDArray[np.float64]]


def sigmoid(x: ArrayLike) -> FloatOrArray:
    """Logistic function ``1 / (1 + exp(-x))``.

    Negative inputs use the equivalent ``exp(x) / (1 + exp(x))`` so that
    ``exp`` is only ever evaluated at non-positive arguments. Results stay
    strictly positive down to roughly ``x = -745``.
    """

    values = np.asarray(x, dtype=np.float64)
    e = np.exp(-np.abs(values))
    result = np.where(values >= 0, 1.0 / (1.0 + e), e / (1.0 + e))
    return result[()]


def sigmoid_derivative(x: ArrayLike) -> FloatOrArray:
    """Derivative ``sigmoid(x) * (1 - sigmoid(x))`` at the pre-activation sum ``x``.

    Evaluated as ``exp(-|x|) / (1 + exp(-|x|)) ** 2``, which is the same
    quantity without the cancellation in ``1 - sigmoid(x)`` for large ``x``.
    """

    values = np.asarray(x, dtype=np.float64)
    e = np.exp(-np.abs(values))
    result = e / ((1.0 + e) * (1.0 + e))
    return result[()]
