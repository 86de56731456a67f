import dataclasses

import pytest

from mlp_backprop.core.config import Hyperparameters, Topology


def test_topology_exposes_widths_and_exact_transitions() -> None:
    topology = Topology(n_input=3, n_hidden1=5, n_hidden2=4, n_output=2)
    assert topology.widths == (3, 5, 4, 2)
    assert topology.transitions == ((3, 5), (5, 4), (4, 2))
    assert topology.max_width == 5
    assert topology.num_weights == 3 * 5 + 5 * 4 + 4 * 2


@pytest.mark.parametrize(
    "widths",
    [(0, 2, 2, 1), (2, -1, 2, 1), (2, 2, 0, 1), (2, 2, 2, 0), (2.0, 2, 2, 1), (True, 2, 2, 1)],
)
def test_topology_rejects_invalid_widths(widths) -> None:
    with pytest.raises(ValueError):
        Topology(*widths)


def test_topology_is_immutable() -> None:
    topology = Topology(2, 2, 2, 1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        topology.n_input = 3  # type: ignore[misc]


def test_hyperparameters_defaults_and_immutability() -> None:
    hp = Hyperparameters(learning_rate=0.3, error_threshold=0.001, max_iterations=10)
    assert hp.min_rand == -1.0
    assert hp.max_rand == 1.0
    with pytest.raises(dataclasses.FrozenInstanceError):
        hp.learning_rate = 1.0  # type: ignore[misc]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"learning_rate": 0.0},
        {"learning_rate": -0.1},
        {"learning_rate": float("nan")},
        {"error_threshold": -1e-9},
        {"max_iterations": 0},
        {"max_iterations": 2.5},
        {"min_rand": 1.0, "max_rand": -1.0},
        {"max_rand": float("inf")},
    ],
)
def test_hyperparameters_validation(kwargs) -> None:
    params = {"learning_rate": 0.3, "error_threshold": 0.001, "max_iterations": 10}
    params.update(kwargs)
    with pytest.raises(ValueError):
        Hyperparameters(**params)


def test_hyperparameters_accept_boundary_values() -> None:
    hp = Hyperparameters(learning_rate=1e-6, error_threshold=0.0, max_iterations=1, min_rand=0.5, max_rand=0.5)
    assert hp.error_threshold == 0.0
    assert hp.min_rand == hp.max_rand
