"""A population of scored orderings evolved by crossover and mutation."""

from __future__ import annotations

import random
from collections import defaultdict
from collections.abc import Iterable, Iterator
from enum import Enum
from typing import TYPE_CHECKING

from .ordering import Ordering
from .results import SearchResult
from .util import unique_pair

if TYPE_CHECKING:
    from .instance import Instance
    from .search import LocalSearch


class CrossoverType(Enum):
    """How two parent orderings are combined."""

    CX = "CX"
    OB = "OB"
    RK = "RK"


def _check_lengths(o1: Ordering, o2: Ordering) -> int:
    if len(o1) != len(o2):
        raise ValueError(f"orderings differ in length: {len(o1)} and {len(o2)}")
    return len(o1)


def _inverse(ordering: Ordering) -> dict[int, int]:
    return {var: pos for pos, var in enumerate(ordering)}


def crossover_ob(
    o1: Ordering, o2: Ordering, rng: random.Random | None = None
) -> Ordering:
    """Order-based crossover.

    Each position keeps the entry of ``o1`` with probability one half; the
    remaining positions take the missing variables in the order of ``o2``.
    """
    rng = rng if rng is not None else random
    n = _check_lengths(o1, o2)
    crossed: list[int | None] = [None] * n
    used: set[int] = set()
    for i in range(n):
        if rng.randrange(2):
            crossed[i] = o1[i]
            used.add(o1[i])
    fill = iter([v for v in o2 if v not in used])
    return Ordering(v if v is not None else next(fill) for v in crossed)


def crossover_cx(
    o1: Ordering, o2: Ordering, rng: random.Random | None = None
) -> Ordering:
    """Cycle crossover: every position takes its entry from ``o1`` or ``o2``."""
    rng = rng if rng is not None else random
    n = _check_lengths(o1, o2)
    inv1 = _inverse(o1)
    inv2 = _inverse(o2)
    crossed: list[int | None] = [a if a == b else None for a, b in zip(o1, o2)]
    pending = [i for i in range(n) if crossed[i] is None]
    while pending:
        idx = rng.choice(pending)
        if rng.randrange(2):
            p1, p1_inv, p2 = o1, inv1, o2
        else:
            p1, p1_inv, p2 = o2, inv2, o1
        start = idx
        while True:
            crossed[idx] = p1[idx]
            pending.remove(idx)
            idx = p1_inv[p2[idx]]
            if idx == start:
                break
    return Ordering(v for v in crossed if v is not None)


def crossover_rk(
    o1: Ordering, o2: Ordering, rng: random.Random | None = None
) -> Ordering:
    """Rank crossover: sort variables by the sum of their positions, ties shuffled."""
    rng = rng if rng is not None else random
    n = _check_lengths(o1, o2)
    inv1 = _inverse(o1)
    inv2 = _inverse(o2)
    buckets: dict[int, list[int]] = defaultdict(list)
    for var in range(n):
        buckets[inv1[var] + inv2[var]].append(var)
    result: list[int] = []
    for rank in sorted(buckets):
        bucket = buckets[rank]
        if len(bucket) > 1:
            rng.shuffle(bucket)
        result.extend(bucket)
    return Ordering(result)


_CROSSOVERS = {
    CrossoverType.OB: crossover_ob,
    CrossoverType.CX: crossover_cx,
    CrossoverType.RK: crossover_rk,
}


def _trunc_div(total: int, count: int) -> int:
    quotient = abs(total) // count
    return quotient if total >= 0 else -quotient


class Population:
    """Search results improved by local search after crossover or mutation."""

    def __init__(
        self, local_search: LocalSearch, rng: random.Random | None = None
    ) -> None:
        self.local_search = local_search
        self.rng = rng if rng is not None else random
        self.specimens: list[SearchResult] = []

    def __len__(self) -> int:
        return len(self.specimens)

    def __getitem__(self, i: int) -> SearchResult:
        return self.specimens[i]

    def __iter__(self) -> Iterator[SearchResult]:
        return iter(self.specimens)

    def __str__(self) -> str:
        return "\n".join(str(s) for s in self.specimens)

    def add_specimen(self, result: SearchResult) -> None:
        """Add one search result."""
        self.specimens.append(result)

    def add_crossovers(
        self, count: int, crossover_type: CrossoverType
    ) -> list[SearchResult]:
        """Cross ``count`` random pairs of distinct specimens and hill-climb each child."""
        crossover = _CROSSOVERS[crossover_type]
        offspring = []
        for _ in range(count):
            a, b = unique_pair(len(self.specimens), self.rng)
            crossed = crossover(
                self.specimens[a].ordering, self.specimens[b].ordering, self.rng
            )
            offspring.append(self.local_search.hill_climb(crossed))
        return offspring

    def mutate(self, num_mutations: int, mutation_power: int) -> list[SearchResult]:
        """Perturb ``num_mutations`` random specimens and hill-climb the results."""
        if not self.specimens:
            raise ValueError("cannot mutate an empty population")
        offspring = []
        for _ in range(num_mutations):
            mutated = self.rng.choice(self.specimens).ordering.copy()
            mutated.perturb(mutation_power, self.rng)
            offspring.append(self.local_search.hill_climb(mutated))
        return offspring

    def append(self, offspring: Iterable[SearchResult]) -> None:
        """Add all of ``offspring``."""
        self.specimens.extend(offspring)

    def filter_best(self, n: int) -> None:
        """Keep the ``n`` best specimens, dropping duplicate scores first."""
        specimens = self.specimens
        specimens.sort(key=lambda s: s.score)
        i = 0
        while i + 1 < len(specimens) and len(specimens) > n:
            if specimens[i + 1].score == specimens[i].score:
                del specimens[i]
            else:
                i += 1
        del specimens[max(n, 0):]

    def average_fitness(self) -> int:
        """Mean score, truncated towards zero."""
        if not self.specimens:
            raise ValueError("empty population has no average fitness")
        return _trunc_div(sum(s.score for s in self.specimens), len(self.specimens))

    def diversify(self, num_keep: int, instance: Instance) -> None:
        """Keep the first ``num_keep`` specimens and replace the rest with fresh greedy ones."""
        size = len(self.specimens)
        num_keep = min(num_keep, size)
        kept = self.specimens[:num_keep]
        fresh = [
            self.local_search.hill_climb(Ordering.greedy(instance, rng=self.rng))
            for _ in range(size - num_keep)
        ]
        self.specimens = kept + fresh