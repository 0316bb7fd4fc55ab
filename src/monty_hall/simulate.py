#!/usr/bin/env python3
import threading
import time
from argparse import ArgumentParser, Namespace
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

import torch
import yaml
from beartype import beartype
from coolname import generate_slug
from tqdm import tqdm

from monty_hall.common.aggregate import (
    AggregateResult,
    OutcomeCounts,
    count_outcomes,
    exact_win_rates,
    expected_rate_interval,
)
from monty_hall.common.game import (
    DEFAULT_DOORS,
    enumerate_resolutions,
    format_enumeration_table,
    validate_door_set,
)
from monty_hall.common.trials import (
    TrialGenerator,
    spawn_batch_seeds,
    validate_trial_count,
)
from monty_hall.plot_win_rates import plot_win_rates
from monty_hall.timeprint import timeprint


@beartype
def simulate_batch(
    batch_size: int,
    seed: int,
    doors: tuple[int, ...],
    stop_event: threading.Event | None = None,
) -> OutcomeCounts:
    if stop_event is not None and stop_event.is_set():
        return OutcomeCounts()
    prize_idx, guess_idx = TrialGenerator(doors, seed).generate(batch_size)
    return count_outcomes(prize_idx, guess_idx)


def run_simulation(
    n_trials,
    seed: int | None = None,
    *,
    doors: Iterable[int] = DEFAULT_DOORS,
    batch_size: int = 100_000,
    num_workers: int = 1,
    stop_event: threading.Event | None = None,
    progress: bool = False,
) -> AggregateResult:
    """
    Simulate n_trials games and return the stick and switch win rates.

    Trials are split into batches of batch_size, each with its own seed
    derived from seed, so the result depends on (seed, n_trials, batch_size)
    but not on num_workers. If stop_event gets set, batches that have not
    started yet are skipped and the result covers the completed ones only.

    Raises:
        InvalidTrialCount: n_trials is negative or not an integer
        EmptyAggregationInput: no trials were simulated
        InvalidDoorSet: doors is not exactly three distinct ids
    """
    n_trials = validate_trial_count(n_trials)
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    if num_workers < 1:
        raise ValueError(f"num_workers must be positive, got {num_workers}")
    door_set = validate_door_set(doors)
    if seed is None:
        seed = torch.Generator().seed()

    batch_sizes = [
        min(batch_size, n_trials - start) for start in range(0, n_trials, batch_size)
    ]
    batch_seeds = spawn_batch_seeds(seed, len(batch_sizes))

    total = OutcomeCounts()
    executor = ThreadPoolExecutor(max_workers=num_workers)
    try:
        futures = [
            executor.submit(simulate_batch, size, batch_seed, door_set, stop_event)
            for size, batch_seed in zip(batch_sizes, batch_seeds, strict=True)
        ]
        for future in tqdm(
            as_completed(futures), total=len(futures), disable=not progress
        ):
            total = total + future.result()
    finally:
        executor.shutdown(wait=True, cancel_futures=True)
    return total.to_result()


@beartype
def make_parser() -> ArgumentParser:
    parser = ArgumentParser(
        description="Simulate the Monty Hall game and compare sticking vs switching"
    )
    parser.add_argument("--n-trials", type=int, default=1_000_000)
    parser.add_argument("--seed", type=int, default=1)
    parser.add_argument("--batch-size", type=int, default=100_000)
    parser.add_argument("--num-workers", type=int, default=1)
    parser.add_argument(
        "--confidence",
        type=float,
        default=0.95,
        help="Confidence level for the expected win rate ranges",
    )
    parser.add_argument("--output-dir", default="results")
    parser.add_argument("--no-plot", action="store_true")
    return parser


@beartype
def main(args: Namespace) -> None:
    output_dir = Path(args.output_dir) / (
        f"{time.strftime('%Y%m%d-%H%M%S')}{generate_slug()}"
    )
    output_dir.mkdir(parents=True)
    timeprint(f"Writing to {output_dir}")

    with open(output_dir / "args.yaml", "w") as f:
        yaml.dump(vars(args), f, default_flow_style=False)

    timeprint("Every possible game:")
    print(format_enumeration_table(enumerate_resolutions()))
    exact = exact_win_rates()

    timeprint(f"Simulating {args.n_trials:,} games...")
    # Ctrl-C cancels the batches that have not started yet
    result = run_simulation(
        args.n_trials,
        args.seed,
        batch_size=args.batch_size,
        num_workers=args.num_workers,
        progress=True,
    )

    timeprint("Win rates:")
    for name, simulated, expected in [
        ("Stick", result.stick_win_rate, exact.stick_win_rate),
        ("Switch", result.switch_win_rate, exact.switch_win_rate),
    ]:
        low, high = expected_rate_interval(expected, result.n_trials, args.confidence)
        print(
            f"  {name}: {simulated:.4f} "
            f"(exact {expected:.4f}, {args.confidence:.0%} range [{low:.4f}, {high:.4f}])"
        )

    if not args.no_plot:
        plot_path = output_dir / "win_rates.png"
        plot_win_rates(result, str(plot_path))
        timeprint(f"Plot saved to {plot_path}")


def cli() -> None:
    main(make_parser().parse_args())


if __name__ == "__main__":
    cli()
