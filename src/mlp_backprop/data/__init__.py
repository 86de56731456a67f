"""Training case containers and loaders."""

from .cases import (
    TrainingCase,
    format_training_cases,
    load_training_cases,
    make_cases,
    parse_training_cases,
    xor_cases,
)

__all__ = [
    "TrainingCase",
    "format_training_cases",
    "load_training_cases",
    "make_cases",
    "parse_training_cases",
    "xor_cases",
]
