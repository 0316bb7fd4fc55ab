#!/usr/bin/env python3
from fractions import Fraction

import pytest
import torch

from monty_hall.common.aggregate import (
    OutcomeCounts,
    aggregate,
    count_outcomes,
    exact_win_rates,
    expected_rate_interval,
)
from monty_hall.common.errors import EmptyAggregationInput
from monty_hall.common.game import Trial, resolve_trial


def test_aggregate():
    result = aggregate([(True, False), (False, True), (False, True), (False, True)])
    assert result.stick_win_rate == 0.25
    assert result.switch_win_rate == 0.75
    assert result.n_trials == 4


def test_aggregate_empty():
    with pytest.raises(EmptyAggregationInput):
        aggregate([])


def test_exact_win_rates():
    exact = exact_win_rates()
    assert Fraction(exact.stick_win_rate).limit_denominator(10) == Fraction(1, 3)
    assert Fraction(exact.switch_win_rate).limit_denominator(10) == Fraction(2, 3)
    assert exact.n_trials == 9


def test_counts_combine_in_any_order():
    a = OutcomeCounts(10, 3, 7)
    b = OutcomeCounts(5, 2, 3)
    c = OutcomeCounts(1, 0, 1)
    assert (a + b) + c == c + (b + a)
    assert a + OutcomeCounts() == a
    assert (a + b + c).to_result().n_trials == 16


def test_count_outcomes_matches_resolve_trial():
    torch.manual_seed(42)
    prize_idx = torch.randint(0, 3, (500,))
    guess_idx = torch.randint(0, 3, (500,))
    doors = (1, 2, 3)

    counts = count_outcomes(prize_idx, guess_idx)

    reference = OutcomeCounts()
    for p, g in zip(prize_idx.tolist(), guess_idx.tolist(), strict=True):
        r = resolve_trial(Trial(doors[p], doors[g]), doors)
        reference = reference + OutcomeCounts(1, int(r.stick_wins), int(r.switch_wins))
    assert counts == reference
    assert counts.stick_wins + counts.switch_wins == 500


def test_count_outcomes_empty_batch():
    empty = torch.zeros(0, dtype=torch.long)
    counts = count_outcomes(empty, empty)
    assert counts == OutcomeCounts()
    with pytest.raises(EmptyAggregationInput):
        counts.to_result()


def test_expected_rate_interval():
    low, high = expected_rate_interval(1 / 3, 1_000_000)
    assert low < 1 / 3 < high
    assert high - low < 0.005
    with pytest.raises(EmptyAggregationInput):
        expected_rate_interval(1 / 3, 0)


@pytest.mark.parametrize("probability, n_trials", [(1.5, 100), (-0.1, 100), (0.5, -5)])
def test_expected_rate_interval_rejects_bad_input(probability, n_trials):
    with pytest.raises(ValueError):
        expected_rate_interval(probability, n_trials)
