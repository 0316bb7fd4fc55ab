#!/usr/bin/env python3
import matplotlib.pyplot as plt
from beartype import beartype

from monty_hall.common.aggregate import AggregateResult, exact_win_rates


@beartype
def plot_win_rates(
    result: AggregateResult,
    output_path: str,
    figsize: tuple[int, int] = (6, 5),
) -> None:
    """
    Save a two-bar chart comparing the simulated stick and switch win rates,
    with dashed lines at the exact values for reference.
    """
    exact = exact_win_rates()
    rates = [result.stick_win_rate, result.switch_win_rate]

    plt.figure(figsize=figsize)
    bars = plt.bar(
        ["Stick", "Switch"], rates, color=["tab:red", "tab:green"], edgecolor="black"
    )
    for bar, rate in zip(bars, rates, strict=True):
        plt.text(
            bar.get_x() + bar.get_width() / 2,
            rate + 0.01,
            f"{rate:.1%}",
            ha="center",
            va="bottom",
        )

    plt.axhline(
        exact.stick_win_rate, color="gray", linestyle="dashed", label="Exact: 1/3"
    )
    plt.axhline(
        exact.switch_win_rate, color="black", linestyle="dashed", label="Exact: 2/3"
    )
    plt.ylim(0, 1)
    plt.ylabel("Win rate")
    plt.title(f"Monty Hall: {result.n_trials:,} simulated games")
    plt.legend()

    plt.grid(True, axis="y", alpha=0.3)
    plt.tight_layout()
    plt.savefig(output_path)
    plt.close()
