"""Human-readable and JSON renderings of a :class:`TrainingResult`."""
from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Optional

from ..training.loop import TrainingResult
from .config import TrainingConfig


def _fmt(values) -> str:
    return " ".join(f"{value:.6f}" for value in values)


def format_report(result: TrainingResult, config: Optional[TrainingConfig] = None) -> str:
    lines = []
    if config is not None:
        topo = config.topology
        hp = config.hyperparameters
        lines.append(
            f"Topology: {topo.n_input}-{topo.n_hidden1}-{topo.n_hidden2}-{topo.n_output}"
        )
        lines.append(
            f"Learning rate: {hp.learning_rate:g}  Error threshold: {hp.error_threshold:g}  "
            f"Max iterations: {hp.max_iterations}"
        )
        lines.append(f"Random range: [{hp.min_rand:g}, {hp.max_rand:g}]")
        lines.append("")

    lines.append(f"Termination: {result.termination_reason.value}")
    lines.append(f"Iterations: {result.iterations}")
    lines.append(f"Average error: {result.average_error:.6g}")
    lines.append("")

    for index, case in enumerate(result.cases):
        lines.append(f"Case {index}")
        lines.append(f"  inputs:   {_fmt(case.inputs)}")
        lines.append(f"  expected: {_fmt(case.expected)}")
        lines.append(f"  computed: {_fmt(case.computed)}")
        lines.append(f"  error:    {case.error:.6g}")
    return "\n".join(lines) + "\n"


def _number(value: float) -> Optional[float]:
    value = float(value)
    return value if math.isfinite(value) else None


def _numbers(values) -> list[Optional[float]]:
    return [_number(value) for value in values]


def result_to_dict(result: TrainingResult, config: Optional[TrainingConfig] = None) -> dict[str, Any]:
    """Plain JSON-compatible view of ``result``. Non-finite numbers become ``None``."""

    data: dict[str, Any] = {
        "termination_reason": result.termination_reason.value,
        "iterations": result.iterations,
        "average_error": _number(result.average_error),
        "error_history": _numbers(result.error_history),
        "cases": [
            {
                "inputs": _numbers(case.inputs),
                "expected": _numbers(case.expected),
                "computed": _numbers(case.computed),
                "error": _number(case.error),
            }
            for case in result.cases
        ],
        "weights": _numbers(result.weights),
    }
    if config is not None:
        data["config"] = config.to_dict()
    return data


def write_report(path: str | Path, result: TrainingResult, config: Optional[TrainingConfig] = None) -> None:
    Path(path).write_text(format_report(result, config), encoding="utf-8")


def write_result_json(path: str | Path, result: TrainingResult, config: Optional[TrainingConfig] = None) -> None:
    """Write :func:`result_to_dict` as strict JSON; a diverged run writes ``null`` for NaN or Inf."""

    Path(path).write_text(json.dumps(result_to_dict(result, config), indent=2, allow_nan=False), encoding="utf-8")
