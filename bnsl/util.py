"""Helpers shared by the search."""

from __future__ import annotations

import random

from .results import SearchResult

OPT_EPSILON = 0.005


def is_opt(result: SearchResult, opt: int) -> bool:
    """Whether ``result`` is within 0.005 percent of the known optimum ``opt``."""
    diff = result.score - opt
    return 100 * (diff / opt) < OPT_EPSILON


def unique_pair(n: int, rng: random.Random | None = None) -> tuple[int, int]:
    """Two distinct random indices in ``range(n)``."""
    if n < 2:
        raise ValueError("need at least two elements for a distinct pair")
    rng = rng if rng is not None else random
    i = rng.randrange(n)
    j = rng.randrange(n - 1)
    if j >= i:
        j += 1
    return i, j