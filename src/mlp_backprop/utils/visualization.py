"""Plotting utilities for training convergence."""

from __future__ import annotations

from typing import Optional, Sequence

import matplotlib.pyplot as plt
from matplotlib.figure import Figure


def plot_error_history(errors: Sequence[float], *, threshold: Optional[float] = None) -> Figure:
    """Plot the average error of every epoch on a log scale."""

    fig = plt.figure()
    ax = fig.add_subplot(1, 1, 1)
    ax.plot(range(1, len(errors) + 1), errors)
    if threshold is not None and threshold > 0:
        ax.axhline(threshold, linestyle="--", color="gray", label="threshold")
        ax.legend()
    ax.set_yscale("log")
    ax.set_xlabel("Epoch")
    ax.set_ylabel("Average error")
    ax.set_title("Training Error")
    fig.tight_layout()
    return fig
