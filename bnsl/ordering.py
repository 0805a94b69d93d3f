"""Variable orderings and ways of generating them."""

from __future__ import annotations

import heapq
import random
from collections.abc import Iterable, Iterator
from operator import attrgetter
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .instance import Instance

DEFAULT_GREEDINESS = 10


class Ordering:
    """A permutation of variable indices."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[int] = ()) -> None:
        self._items = list(items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> int:
        return self._items[index]

    def __setitem__(self, index: int, value: int) -> None:
        self._items[index] = value

    def __iter__(self) -> Iterator[int]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ordering):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Ordering({self._items!r})"

    def __str__(self) -> str:
        return "".join(f"{v} " for v in self._items)

    def copy(self) -> Ordering:
        return Ordering(self._items)

    def swap(self, i: int, j: int) -> None:
        """Exchange the entries at positions ``i`` and ``j``."""
        items = self._items
        items[i], items[j] = items[j], items[i]

    def insert(self, i: int, j: int) -> None:
        """Move the entry at position ``i`` to position ``j``, shifting the rest."""
        self._items.insert(j, self._items.pop(i))

    def perturb(self, times: int, rng: random.Random | None = None) -> None:
        """Apply ``times`` random swaps."""
        rng = rng if rng is not None else random
        n = len(self._items)
        for _ in range(times):
            self.swap(rng.randrange(n), rng.randrange(n))

    @classmethod
    def random(cls, instance: Instance, rng: random.Random | None = None) -> Ordering:
        """A uniformly shuffled ordering of the instance's variables."""
        rng = rng if rng is not None else random
        items = list(range(instance.n))
        rng.shuffle(items)
        return cls(items)

    @classmethod
    def greedy(
        cls,
        instance: Instance,
        greediness: int = DEFAULT_GREEDINESS,
        rng: random.Random | None = None,
    ) -> Ordering:
        """Build an ordering by repeatedly picking among the cheapest placeable variables."""
        ordering = cls([0] * instance.n)
        for i in range(instance.n):
            ordering[i] = ordering.smallest_consistent_random(i, instance, greediness, rng)
        return ordering

    def _prefix_mask(self, m: int) -> int:
        mask = 0
        for v in self._items[:m]:
            mask |= 1 << v
        return mask

    def smallest_consistent(self, m: int, instance: Instance) -> int | None:
        """The unplaced variable with the cheapest parent set drawn from the first ``m`` entries.

        Returns None when no variable can be placed.
        """
        seen = self._prefix_mask(m)
        best_var = None
        best_score = None
        for i in range(instance.n):
            if seen >> i & 1:
                continue
            for p in instance.var(i).parents:
                if p.subset_of(seen) and (best_score is None or p.score < best_score):
                    best_var = i
                    best_score = p.score
        return best_var

    def smallest_consistent_random(
        self,
        m: int,
        instance: Instance,
        greediness: int,
        rng: random.Random | None = None,
    ) -> int:
        """Pick at random among the ``greediness`` cheapest placeable unplaced variables."""
        rng = rng if rng is not None else random
        seen = self._prefix_mask(m)
        candidates = []
        for i in range(instance.n):
            if seen >> i & 1:
                continue
            best = next((p for p in instance.var(i).parents if p.subset_of(seen)), None)
            if best is not None:
                candidates.append(best)
        pool = heapq.nsmallest(greediness, candidates, key=attrgetter("score"))
        if not pool:
            raise ValueError("no variable can be placed at this position")
        return rng.choice(pool).var