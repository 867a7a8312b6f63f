"""Seeded shuffle of the session list."""

from __future__ import annotations

import random
from typing import List, Sequence, TypeVar


T = TypeVar("T")


def make_seed(alphabet: str = "abcdefghijklmnopqrstuvwxyz", length: int = 5) -> str:
    """Generate a short seed that can be passed back to reproduce a run."""
    return "".join(random.choice(alphabet) for _ in range(length))


def shuffle_sessions(items: Sequence[T], seed: str) -> List[T]:
    """
    Return a permutation of `items` that only depends on `seed`.

    Fisher-Yates from the last index down to 1, swapping with a random
    index in [0, i]. The input sequence is left untouched.
    """
    rng = random.Random(seed)
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        result[i], result[j] = result[j], result[i]
    return result
