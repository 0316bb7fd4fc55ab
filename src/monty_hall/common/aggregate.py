from collections.abc import Iterable
from dataclasses import dataclass

import torch
from beartype import beartype
from einops import reduce
from jaxtyping import Int, jaxtyped
from scipy.stats import binom

from monty_hall.common.errors import EmptyAggregationInput
from monty_hall.common.game import DEFAULT_DOORS, enumerate_resolutions, resolve_indices


@dataclass(frozen=True)
class AggregateResult:
    stick_win_rate: float
    switch_win_rate: float
    n_trials: int


@dataclass(frozen=True)
class OutcomeCounts:
    """Partial sums over some trials. Adding two of these is order-independent."""

    n_trials: int = 0
    stick_wins: int = 0
    switch_wins: int = 0

    def __add__(self, other: "OutcomeCounts") -> "OutcomeCounts":
        return OutcomeCounts(
            n_trials=self.n_trials + other.n_trials,
            stick_wins=self.stick_wins + other.stick_wins,
            switch_wins=self.switch_wins + other.switch_wins,
        )

    def to_result(self) -> AggregateResult:
        if self.n_trials == 0:
            raise EmptyAggregationInput("Cannot compute win rates over zero trials")
        return AggregateResult(
            stick_win_rate=self.stick_wins / self.n_trials,
            switch_win_rate=self.switch_wins / self.n_trials,
            n_trials=self.n_trials,
        )


@jaxtyped(typechecker=beartype)
def count_outcomes(
    prize_idx: Int[torch.Tensor, "n_trials"],
    guess_idx: Int[torch.Tensor, "n_trials"],
) -> OutcomeCounts:
    _, switch_idx = resolve_indices(prize_idx, guess_idx)
    wins = torch.stack([guess_idx == prize_idx, switch_idx == prize_idx]).long()
    stick_wins, switch_wins = reduce(wins, "strategy n_trials -> strategy", "sum")
    return OutcomeCounts(
        n_trials=prize_idx.shape[0],
        stick_wins=stick_wins.item(),
        switch_wins=switch_wins.item(),
    )


@beartype
def aggregate(outcomes: Iterable[tuple[bool, bool]]) -> AggregateResult:
    """
    Win rates from per-trial (stick_wins, switch_wins) pairs.
    Raises EmptyAggregationInput if there are no pairs.
    """
    counts = OutcomeCounts()
    for stick_wins, switch_wins in outcomes:
        counts = counts + OutcomeCounts(1, int(stick_wins), int(switch_wins))
    return counts.to_result()


@beartype
def exact_win_rates(doors: Iterable[int] = DEFAULT_DOORS) -> AggregateResult:
    return aggregate(
        (r.stick_wins, r.switch_wins) for r in enumerate_resolutions(doors)
    )


@beartype
def expected_rate_interval(
    probability: float, n_trials: int, confidence: float = 0.95
) -> tuple[float, float]:
    """
    Range the simulated win rate should land in, with the given confidence,
    if each of n_trials games is won with the given probability.
    """
    if not 0.0 <= probability <= 1.0:
        raise ValueError(f"probability must be in [0, 1], got {probability}")
    if n_trials < 0:
        raise ValueError(f"n_trials must be non-negative, got {n_trials}")
    if n_trials == 0:
        raise EmptyAggregationInput("Cannot compute an interval over zero trials")
    low, high = binom.interval(confidence, n_trials, probability)
    return float(low) / n_trials, float(high) / n_trials
