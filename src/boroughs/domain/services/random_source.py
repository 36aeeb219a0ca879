from __future__ import annotations

import random
from typing import Sequence, TypeVar


T = TypeVar("T")


def clamp(value: int, minimum: int, maximum: int) -> int:
    return max(minimum, min(maximum, value))


class RandomSource:
    """Seedable source of every roll the engine makes.

    One instance is threaded through the session so a fixed seed reproduces
    the whole run.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def percentile(self) -> float:
        return self._rng.random() * 100

    def roll(self, chance: float) -> bool:
        return self.percentile() <= chance

    def pick(self, options: Sequence[T]) -> T:
        if not options:
            raise ValueError("Cannot pick from an empty sequence")
        return options[self._rng.randrange(len(options))]

    def shuffled(self, options: Sequence[T]) -> list[T]:
        items = list(options)
        self._rng.shuffle(items)
        return items

    clamp = staticmethod(clamp)
