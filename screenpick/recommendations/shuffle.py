from __future__ import annotations

import math
import random
from typing import Sequence, TypeVar

T = TypeVar("T")


class RandomSource:
    """Produces floats in [0, 1) for the Fisher-Yates shuffle."""

    def random(self) -> float:
        raise NotImplementedError


class SeededSource(RandomSource):
    """
    Reproducible sine-based generator.

    Each draw uses the current seed and then advances it by one, so two
    sources built with the same seed yield the same sequence.
    """

    def __init__(self, seed: int) -> None:
        self.seed = seed

    def random(self) -> float:
        x = math.sin(self.seed) * 10000
        self.seed += 1
        return x - math.floor(x)


class AmbientSource(RandomSource):
    """Non-reproducible draws from the interpreter's global generator."""

    def random(self) -> float:
        return random.random()


def shuffle(items: Sequence[T], source: RandomSource) -> list[T]:
    """Return a shuffled copy of ``items``; the input is left untouched."""
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        # min() guards against a draw that rounds up to exactly 1.0
        j = min(math.floor(source.random() * (i + 1)), i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
