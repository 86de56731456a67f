"""JSON configuration files for training runs."""
from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
from typing import Any, Mapping, Optional

from ..core.config import Hyperparameters, Topology

_TOPOLOGY_KEYS = ("n_input", "n_hidden1", "n_hidden2", "n_output")


@dataclass(frozen=True, slots=True)
class TrainingConfig:
    """Topology, hyperparameters and dataset size of one training run."""

    topology: Topology
    hyperparameters: Hyperparameters
    num_training_cases: int
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if isinstance(self.num_training_cases, bool) or not isinstance(self.num_training_cases, int):
            raise ValueError("num_training_cases must be an integer")
        if self.num_training_cases <= 0:
            raise ValueError("num_training_cases must be positive")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise ValueError("seed must be an integer")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TrainingConfig":
        topology_data = _require(data, "topology")
        if not isinstance(topology_data, Mapping):
            raise ValueError("topology must be an object")
        topology = Topology(**{key: _require(topology_data, key, prefix="topology.") for key in _TOPOLOGY_KEYS})
        hyperparameters = Hyperparameters(
            learning_rate=_require_float(data, "learning_rate"),
            error_threshold=_require_float(data, "error_threshold"),
            max_iterations=_require(data, "max_iterations"),
            min_rand=_optional_float(data, "min_rand", -1.0),
            max_rand=_optional_float(data, "max_rand", 1.0),
        )
        return cls(
            topology=topology,
            hyperparameters=hyperparameters,
            num_training_cases=_require(data, "num_training_cases"),
            seed=data.get("seed"),
        )

    def to_dict(self) -> dict[str, Any]:
        hp = self.hyperparameters
        data: dict[str, Any] = {
            "topology": {key: getattr(self.topology, key) for key in _TOPOLOGY_KEYS},
            "num_training_cases": self.num_training_cases,
            "learning_rate": hp.learning_rate,
            "max_iterations": hp.max_iterations,
            "error_threshold": hp.error_threshold,
            "min_rand": hp.min_rand,
            "max_rand": hp.max_rand,
        }
        if self.seed is not None:
            data["seed"] = self.seed
        return data


def _require(data: Mapping[str, Any], key: str, *, prefix: str = "") -> Any:
    if key not in data:
        raise ValueError(f"missing configuration key: {prefix}{key}")
    return data[key]


def _as_float(value: Any, key: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be a number")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{key} must be a number") from exc


def _require_float(data: Mapping[str, Any], key: str) -> float:
    return _as_float(_require(data, key), key)


def _optional_float(data: Mapping[str, Any], key: str, default: float) -> float:
    return _as_float(data.get(key, default), key)


def load_config(path: str | Path) -> TrainingConfig:
    """Read and validate a JSON training configuration."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path}: invalid JSON ({exc})") from exc
    if not isinstance(data, Mapping):
        raise ValueError(f"{path}: configuration must be a JSON object")
    return TrainingConfig.from_dict(data)


def save_config(path: str | Path, config: TrainingConfig) -> None:
    Path(path).write_text(json.dumps(config.to_dict(), indent=2), encoding="utf-8")
