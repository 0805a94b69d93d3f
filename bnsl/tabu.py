"""Bounded tabu lists of orderings, moves and swaps."""

from __future__ import annotations

from collections import deque

from .ordering import Ordering


class TabuList:
    """The most recent ``max_size`` orderings."""

    def __init__(self, max_size: int) -> None:
        self.max_size = max_size
        self._list: deque[Ordering] = deque(maxlen=max_size)

    def add(self, ordering: Ordering) -> None:
        self._list.append(ordering.copy())

    def contains(self, ordering: Ordering) -> bool:
        return ordering in self._list

    def __len__(self) -> int:
        return len(self._list)


class MoveTabuList:
    """The most recent ``max_size`` (variable, position) placements."""

    def __init__(self, max_size: int, n: int) -> None:
        self.max_size = max_size
        self._list: deque[tuple[int, int]] = deque()
        self._bucket_sizes = [0] * n

    def add(self, var_id: int, index: int) -> None:
        self._list.append((var_id, index))
        if len(self._list) > self.max_size:
            popped, _ = self._list.popleft()
            self._bucket_sizes[popped] -= 1
        self._bucket_sizes[var_id] += 1

    def contains(self, ordering: Ordering) -> bool:
        """Whether any variable sits at a position that is tabu for it."""
        return any(
            self._bucket_sizes[var] > 0 and (var, i) in self._list
            for i, var in enumerate(ordering)
        )

    def contains_var(self, var_id: int) -> bool:
        """Whether ``var_id`` appears in any tabu move."""
        return self._bucket_sizes[var_id] > 0

    def __len__(self) -> int:
        return len(self._list)


class SwapTabuList:
    """The most recent ``max_size`` unordered swap pairs."""

    def __init__(self, max_size: int) -> None:
        self.max_size = max_size
        self._list: deque[tuple[int, int]] = deque(maxlen=max_size)

    def add(self, a: int, b: int) -> None:
        self._list.append((min(a, b), max(a, b)))

    def contains(self, a: int, b: int) -> bool:
        return (min(a, b), max(a, b)) in self._list

    def __len__(self) -> int:
        return len(self._list)