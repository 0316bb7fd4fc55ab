from collections.abc import Iterable
from dataclasses import dataclass

import torch
from beartype import beartype
from jaxtyping import Int, jaxtyped

from monty_hall.common.errors import InvalidDoor, InvalidDoorSet

DEFAULT_DOORS = (1, 2, 3)
N_DOORS = 3


@dataclass(frozen=True)
class Trial:
    prize_door: int
    guess_door: int


@dataclass(frozen=True)
class Resolution:
    trial: Trial
    host_opened_door: int
    stick_pick: int
    switch_pick: int
    stick_wins: bool
    switch_wins: bool


def validate_door_set(doors) -> tuple[int, ...]:
    """
    Check that doors holds exactly three distinct integer ids.

    Returns:
        The door ids sorted ascending. Positions in this tuple are the
        door indices used by the tensor code.
    """
    door_list = list(doors)
    if any(isinstance(d, bool) or not isinstance(d, int) for d in door_list):
        raise InvalidDoorSet(f"Door ids must be integers, got {door_list}")
    if len(door_list) != N_DOORS or len(set(door_list)) != N_DOORS:
        raise InvalidDoorSet(
            f"Need exactly {N_DOORS} distinct doors, got {door_list}"
        )
    return tuple(sorted(door_list))


@beartype
def resolve_trial(trial: Trial, doors: Iterable[int] = DEFAULT_DOORS) -> Resolution:
    """
    Play out one game. If the guess is already the prize, the host has two
    goats to choose from and always opens the one with the lowest id.
    """
    door_set = validate_door_set(doors)
    for door in (trial.prize_door, trial.guess_door):
        if door not in door_set:
            raise InvalidDoor(f"Door {door} is not one of {door_set}")

    host_opened_door = min(
        d for d in door_set if d != trial.prize_door and d != trial.guess_door
    )
    remaining = [d for d in door_set if d not in (trial.guess_door, host_opened_door)]
    assert len(remaining) == 1
    switch_pick = remaining[0]

    assert host_opened_door != trial.prize_door
    return Resolution(
        trial=trial,
        host_opened_door=host_opened_door,
        stick_pick=trial.guess_door,
        switch_pick=switch_pick,
        stick_wins=trial.guess_door == trial.prize_door,
        switch_wins=switch_pick == trial.prize_door,
    )


@jaxtyped(typechecker=beartype)
def resolve_indices(
    prize_idx: Int[torch.Tensor, "n_trials"],
    guess_idx: Int[torch.Tensor, "n_trials"],
) -> tuple[Int[torch.Tensor, "n_trials"], Int[torch.Tensor, "n_trials"]]:
    """
    Vectorized resolve_trial over door indices 0, 1, 2.
    Returns (host_idx, switch_idx).
    """
    # The indices sum to 3, so the one missing from a distinct pair is 3 - a - b
    lowest_goat_idx = (prize_idx == 0).long()
    host_idx = torch.where(
        prize_idx == guess_idx, lowest_goat_idx, 3 - prize_idx - guess_idx
    )
    switch_idx = 3 - guess_idx - host_idx
    return host_idx, switch_idx


@beartype
def enumerate_resolutions(doors: Iterable[int] = DEFAULT_DOORS) -> list[Resolution]:
    door_set = validate_door_set(doors)
    return [
        resolve_trial(Trial(prize_door=prize, guess_door=guess), door_set)
        for prize in door_set
        for guess in door_set
    ]


@beartype
def format_enumeration_table(resolutions: list[Resolution]) -> str:
    headers = [
        "Prize",
        "Guess",
        "Host opens",
        "Stick pick",
        "Switch pick",
        "Stick wins",
        "Switch wins",
    ]
    rows = [
        [
            r.trial.prize_door,
            r.trial.guess_door,
            r.host_opened_door,
            r.stick_pick,
            r.switch_pick,
            "yes" if r.stick_wins else "no",
            "yes" if r.switch_wins else "no",
        ]
        for r in resolutions
    ]
    widths = [len(h) for h in headers]
    lines = [" | ".join(h.ljust(w) for h, w in zip(headers, widths, strict=True))]
    lines.append("-+-".join("-" * w for w in widths))
    for row in rows:
        lines.append(
            " | ".join(str(v).ljust(w) for v, w in zip(row, widths, strict=True))
        )
    return "\n".join(lines)
