#!/usr/bin/env python3
"""Run saved weights over a case file and print the network outputs."""
from __future__ import annotations

import argparse
from pathlib import Path
import sys

from mlp_backprop.data import load_training_cases
from mlp_backprop.io import load_config, load_weights
from mlp_backprop.training import evaluate


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument("--config", type=Path, required=True, help="JSON training configuration")
    p.add_argument("--weights", type=Path, required=True, help="Weight file from train_mlp.py")
    p.add_argument("--cases", type=Path, required=True, help="Case file with expected values")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    config = load_config(args.config)
    weights = load_weights(args.weights, config.topology)
    cases = load_training_cases(args.cases, config.topology)
    for result in evaluate(cases, weights):
        inputs = " ".join(f"{value:g}" for value in result.inputs)
        computed = " ".join(f"{value:.6f}" for value in result.computed)
        print(f"{inputs} -> {computed} (error {result.error:.6g})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
