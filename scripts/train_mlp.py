#!/usr/bin/env python3
"""Train the two-hidden-layer perceptron from a config and a case file."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from tqdm.auto import tqdm

from mlp_backprop.core import initial_weights
from mlp_backprop.data import load_training_cases
from mlp_backprop.io import (
    format_report,
    load_config,
    load_weights,
    save_weights,
    write_report,
    write_result_json,
)
from mlp_backprop.training import TerminationReason, TrainingLoop


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument("--config", type=Path, required=True, help="JSON training configuration")
    p.add_argument("--cases", type=Path, required=True, help="Training case file")
    p.add_argument("--weights-in", type=Path, default=None, help="Start from saved weights")
    p.add_argument("--weights-out", type=Path, default=None, help="Where to save final weights")
    p.add_argument("--report", type=Path, default=None, help="Text report path")
    p.add_argument("--json-out", type=Path, default=None, help="JSON result path")
    p.add_argument("--plot", type=Path, default=None, help="Save the error curve as an image")
    p.add_argument("--seed", type=int, default=None, help="Overrides the config seed")
    p.add_argument("--quiet", action="store_true", help="Hide the progress bar and report")
    p.add_argument("--log-level", default="WARNING")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    config = load_config(args.config)
    cases = load_training_cases(args.cases, config.topology, config.num_training_cases)
    seed = args.seed if args.seed is not None else config.seed
    hp = config.hyperparameters
    saved = load_weights(args.weights_in, config.topology).flatten() if args.weights_in else None
    weights = initial_weights(config.topology, hp.min_rand, hp.max_rand, rng=seed, flat=saved)

    loop = TrainingLoop(config.topology, hp, cases, weights=weights)
    progress = tqdm(
        total=hp.max_iterations + 1,
        desc="Epochs",
        disable=args.quiet,
    )

    def on_epoch(iteration: int, average_error: float) -> None:
        progress.update(1)
        if iteration % 100 == 0:
            progress.set_postfix(error=f"{average_error:.6f}")

    try:
        result = loop.run(on_epoch=on_epoch)
    finally:
        progress.close()

    if args.weights_out:
        save_weights(args.weights_out, loop.weights)
        print(f"Saved weights to {args.weights_out}")
    if args.report:
        write_report(args.report, result, config)
        print(f"Wrote report to {args.report}")
    if args.json_out:
        write_result_json(args.json_out, result, config)
        print(f"Wrote results to {args.json_out}")
    if args.plot:
        from mlp_backprop.utils.visualization import plot_error_history

        fig = plot_error_history(result.error_history, threshold=hp.error_threshold)
        fig.savefig(args.plot)
        print(f"Saved error plot to {args.plot}")
    if not args.quiet:
        print(format_report(result, config), end="")

    if result.termination_reason is TerminationReason.DIVERGED:
        print("Training diverged: weights or error became non-finite.", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
