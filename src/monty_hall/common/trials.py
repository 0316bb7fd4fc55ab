import numbers
from collections.abc import Iterable, Iterator

import torch
from beartype import beartype
from jaxtyping import Int, jaxtyped

from monty_hall.common.errors import InvalidTrialCount
from monty_hall.common.game import DEFAULT_DOORS, Trial, validate_door_set

# Upper bound for seeds handed out to batches; comfortably inside manual_seed's range
MAX_BATCH_SEED = 2**62
# manual_seed only takes 64-bit values, so larger seeds are folded into that range
SEED_MODULUS = 2**64


def validate_trial_count(n_trials) -> int:
    if isinstance(n_trials, bool) or not isinstance(n_trials, numbers.Integral):
        raise InvalidTrialCount(f"Trial count must be an integer, got {n_trials!r}")
    if n_trials < 0:
        raise InvalidTrialCount(f"Trial count must be non-negative, got {n_trials}")
    return int(n_trials)


class TrialGenerator:
    """
    Draws (prize, guess) pairs uniformly and independently from a 3-door set.
    Each instance owns its own torch.Generator, so separate instances can be
    used from separate threads.
    """

    doors: tuple[int, ...]
    seed: int

    @beartype
    def __init__(
        self, doors: Iterable[int] = DEFAULT_DOORS, seed: int | None = None
    ) -> None:
        self.doors = validate_door_set(doors)
        self.generator = torch.Generator()
        if seed is None:
            self.seed = self.generator.seed()
        else:
            self.seed = seed % SEED_MODULUS
            self.generator.manual_seed(self.seed)

    @jaxtyped(typechecker=beartype)
    def generate(
        self, batch_size: int
    ) -> tuple[Int[torch.Tensor, "batch_size"], Int[torch.Tensor, "batch_size"]]:
        """Returns (prize_idx, guess_idx) as positions in self.doors"""
        assert batch_size >= 0
        prize_idx = torch.randint(
            0, len(self.doors), (batch_size,), generator=self.generator
        )
        guess_idx = torch.randint(
            0, len(self.doors), (batch_size,), generator=self.generator
        )
        return prize_idx, guess_idx

    def trials(self, n_trials: int) -> Iterator[Trial]:
        n_trials = validate_trial_count(n_trials)
        prize_idx, guess_idx = self.generate(n_trials)
        return (
            Trial(prize_door=self.doors[p], guess_door=self.doors[g])
            for p, g in zip(prize_idx.tolist(), guess_idx.tolist(), strict=True)
        )


@beartype
def spawn_batch_seeds(seed: int, n_batches: int) -> list[int]:
    """
    Derive one seed per batch from a single run seed, so that batch i sees
    the same random stream no matter which worker runs it.
    """
    generator = torch.Generator().manual_seed(seed % SEED_MODULUS)
    return torch.randint(0, MAX_BATCH_SEED, (n_batches,), generator=generator).tolist()
