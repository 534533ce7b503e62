"""
Random sources for scheduling.

Two flavours are used across the engine:

* **Seeded**: tied to a calendar key (``year * 100 + month``) so that
  regenerating a month's sprint days always yields the same dates.
* **Fresh**: OS entropy, used for rescheduling, target reveals and
  exercise shuffling, where results are meant to differ run-to-run.

Every public function that draws randomness accepts an optional
``rng: random.Random``; passing a seeded instance makes the outcome exactly
reproducible in tests.
"""

from __future__ import annotations

import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


def month_seed(year: int, month: int) -> int:
    """Deterministic seed for a (year, month) pair."""
    return year * 100 + month


def seeded_for_month(year: int, month: int) -> random.Random:
    return random.Random(month_seed(year, month))


def fresh_random() -> random.Random:
    return random.Random()


def resolve(rng: Optional[random.Random]) -> random.Random:
    """Return *rng*, or a fresh-entropy source when ``None``."""
    return rng if rng is not None else fresh_random()


def random_int_inclusive(rng: random.Random, low: int, high: int) -> int:
    """Uniform integer in ``[low, high]``."""
    return rng.randint(low, high)


def shuffled(items: Sequence[T], rng: random.Random) -> list[T]:
    """Uniform random permutation of *items*, leaving the input untouched."""
    result = list(items)
    rng.shuffle(result)
    return result


def take_cyclic(pool: Sequence[T], count: int, start: int = 0) -> list[T]:
    """Take *count* items from *pool* with modulo wraparound.

    An empty pool yields nothing rather than dividing by zero.
    """
    if not pool or count <= 0:
        return []
    return [pool[(start + i) % len(pool)] for i in range(count)]
