"""Dynamic-programming scores of orderings under arc and root limits.

For an ordering, ``d[i][j][l]`` is the cheapest way to give parents to the
first ``i`` variables using at most ``j`` arcs and exactly ``l`` roots, and
``e[i][j][l]`` is the same for the variables from position ``i`` onwards.
Predecessor sets are integer bitmasks over variable indices.
"""

from __future__ import annotations

from itertools import islice
from typing import NamedTuple, Optional

from .instance import Instance
from .ordering import Ordering
from .parentset import ParentSet
from .variable import Variable

UNREACHABLE = 223372036854775807
"""Table entry for a state that cannot be reached."""

Table = list[list[list[int]]]
_Choices = list[list[Optional[ParentSet]]]


class BestParents(NamedTuple):
    """Optimal score of an ordering and, per variable, the chosen parent set."""

    score: int
    parent_ids: list[int]
    scores: list[int]


class OrderingScorer:
    """Scores orderings of an instance and evaluates adjacent swaps incrementally."""

    def __init__(self, instance: Instance) -> None:
        self.instance = instance

    def _dims(self) -> tuple[int, int, int]:
        inst = self.instance
        return inst.n, inst.num_arcs, inst.num_roots

    def best_parent(self, ordering: Ordering, pred: int, idx: int) -> ParentSet:
        """Cheapest parent set of the variable at ``idx`` drawn from ``pred``."""
        return self.best_parent_for(pred, self.instance.var(ordering[idx]))

    def best_parent_for(self, pred: int, variable: Variable) -> ParentSet:
        """Cheapest parent set of ``variable`` within ``pred``; the first one if none fits."""
        return next(
            (p for p in variable.parents if p.subset_of(pred)), variable.parent(0)
        )

    def best_parent_with(
        self, pred: int, a: Variable, b: Variable, orig: int
    ) -> ParentSet | None:
        """Cheapest parent set of ``a`` containing ``b`` within ``pred`` scoring below ``orig``."""
        for parent_id in a.parents_with(b.var_id):
            p = a.parent(parent_id)
            if p.score >= orig:
                break
            if p.subset_of(pred):
                return p
        return None

    def predecessors(self, ordering: Ordering, idx: int) -> int:
        """Bitmask of the variables in the first ``idx`` positions."""
        mask = 0
        for v in islice(ordering, idx):
            mask |= 1 << v
        return mask

    def new_table(self) -> Table:
        """A fresh ``(n+1) x (arcs+1) x (roots+1)`` table filled with UNREACHABLE."""
        n, k1, k2 = self._dims()
        return [[[UNREACHABLE] * (k2 + 1) for _ in range(k1 + 1)] for _ in range(n + 1)]

    @staticmethod
    def _reset(row: list[list[int]]) -> None:
        for cells in row:
            cells[:] = [UNREACHABLE] * len(cells)

    def _fill_forward(
        self,
        d: Table,
        i: int,
        variable: Variable,
        pred: int,
        chosen: _Choices | None = None,
    ) -> None:
        """Compute ``d[i]`` from ``d[i-1]`` with ``variable`` at position ``i-1``."""
        n, k1, k2 = self._dims()
        prev, row = d[i - 1], d[i]
        for j in range(k1 + 1):
            for l in range(1, min(i, k2) + 1):
                if l + n - i < k2:
                    continue
                if l == i:
                    # Every variable so far must be a root.
                    empty = variable.empty_parent()
                    row[j][l] = min(row[j][l], prev[j][l - 1] + empty.score)
                    if chosen is not None:
                        chosen[j][l] = empty
                    continue
                best = row[j][l]
                pick = None
                for p in variable.parents:
                    size = p.size()
                    w = 1 if size == 0 else 0
                    if j >= size and l >= w:
                        candidate = prev[j - size][l - w] + p.score
                        if candidate < best and p.subset_of(pred):
                            best = candidate
                            pick = p
                row[j][l] = best
                if chosen is not None and pick is not None:
                    chosen[j][l] = pick

    def _fill_backward(
        self, e: Table, i: int, variable: Variable, pred: int, all_roots: int
    ) -> None:
        """Compute ``e[i]`` from ``e[i+1]`` with ``variable`` at position ``i``."""
        n, k1, k2 = self._dims()
        nxt, row = e[i + 1], e[i]
        for j in range(k1 + 1):
            for l in range(min(n - i, k2) + 1):
                if l + i < k2:
                    continue
                if l == all_roots:
                    empty = variable.empty_parent()
                    row[j][l] = min(row[j][l], nxt[j][l - 1] + empty.score)
                    continue
                best = row[j][l]
                for p in variable.parents:
                    size = p.size()
                    w = 1 if size == 0 else 0
                    if j >= size and l >= w:
                        candidate = nxt[j - size][l - w] + p.score
                        if candidate < best and p.subset_of(pred):
                            best = candidate
                row[j][l] = best

    def _combine(self, d_row: list[list[int]], e_row: list[list[int]]) -> int:
        _, k1, k2 = self._dims()
        return min(
            d_row[a][l] + e_row[k1 - a][k2 - l]
            for a in range(k1 + 1)
            for l in range(k2 + 1)
        )

    def score_with_memo(self, ordering: Ordering, d: Table, e: Table) -> int:
        """Fill both tables for ``ordering`` and return its optimal score."""
        n, k1, k2 = self._dims()
        for table in (d, e):
            for row in table:
                self._reset(row)
        for cells in d[0]:
            cells[0] = 0
        for cells in e[n]:
            cells[0] = 0

        pred = 0
        for i in range(1, n + 1):
            var = ordering[i - 1]
            self._fill_forward(d, i, self.instance.var(var), pred)
            pred |= 1 << var

        for i in reversed(range(n)):
            var = ordering[i]
            pred &= ~(1 << var)
            self._fill_backward(e, i, self.instance.var(var), pred, n - i)

        return d[n][k1][k2]

    def score_with_parents(self, ordering: Ordering) -> BestParents:
        """Optimal score of ``ordering`` with the parent set chosen for each variable.

        When the ordering cannot meet the limits the score is UNREACHABLE and
        the per-variable lists are all zero.
        """
        n, k1, k2 = self._dims()
        d = self.new_table()
        for cells in d[0]:
            cells[0] = 0
        chosen: list[_Choices] = [
            [[None] * (k2 + 1) for _ in range(k1 + 1)] for _ in range(n + 1)
        ]

        pred = 0
        for i in range(1, n + 1):
            var = ordering[i - 1]
            self._fill_forward(d, i, self.instance.var(var), pred, chosen[i])
            pred |= 1 << var

        score = d[n][k1][k2]
        parent_ids = [0] * n
        scores = [0] * n
        if score != UNREACHABLE:
            j, l = k1, k2
            for i in range(n, 0, -1):
                p = chosen[i][j][l]
                if p is None:
                    raise RuntimeError("inconsistent score table")
                var = ordering[i - 1]
                parent_ids[var] = p.id
                scores[var] = p.score
                size = p.size()
                j -= size
                if size == 0:
                    l -= 1
        return BestParents(score, parent_ids, scores)

    def swapped_score_forward(
        self, ordering: Ordering, i: int, pred: int, d: Table, e: Table
    ) -> tuple[int, int]:
        """Score of ``ordering`` with positions ``i`` and ``i+1`` exchanged.

        Rewrites ``d[i+1]`` and ``d[i+2]`` for the swapped ordering. ``pred``
        holds the variables before position ``i``; the returned mask also
        holds the variable moved to position ``i``.
        """
        for row in (d[i + 1], d[i + 2]):
            self._reset(row)

        moved_up = ordering[i + 1]
        self._fill_forward(d, i + 1, self.instance.var(moved_up), pred)
        pred |= 1 << moved_up
        self._fill_forward(d, i + 2, self.instance.var(ordering[i]), pred)

        return self._combine(d[i + 2], e[i + 2]), pred

    def swapped_score_back(
        self, ordering: Ordering, i: int, pred: int, d: Table, e: Table
    ) -> tuple[int, int]:
        """Score of ``ordering`` with positions ``i-1`` and ``i`` exchanged.

        Rewrites ``e[i]`` and ``e[i-1]`` for the swapped ordering; ``d`` is
        left as it is. Returns the score and ``pred`` without the variable
        that moved to position ``i``, but with the one now at ``i-1``.
        """
        n, _, _ = self._dims()
        moved_down = ordering[i - 1]
        moved_up = ordering[i]

        pred &= ~(1 << moved_down)
        for row in (e[i], e[i - 1]):
            self._reset(row)

        self._fill_backward(e, i, self.instance.var(moved_down), pred, n - i)
        pred &= ~(1 << moved_up)
        self._fill_backward(e, i - 1, self.instance.var(moved_up), pred, n - i)

        best = self._combine(d[i - 1], e[i - 1])
        pred |= 1 << moved_up
        return best, pred

    def best_insert(
        self, ordering: Ordering, pivot: int, init_score: int, d: Table, e: Table
    ) -> Ordering:
        """Best ordering obtained by moving the variable at ``pivot`` elsewhere.

        ``d`` and ``e`` must hold the tables of ``ordering``; they are changed
        in the process. Returns a copy of ``ordering`` when no move scores
        below ``init_score``.
        """
        n, _, _ = self._dims()
        best_score = init_score
        best = ordering.copy()

        forward_pred = self.predecessors(ordering, pivot)
        backward_pred = forward_pred
        forward = ordering.copy()
        backward = ordering.copy()

        for i in range(pivot - 1, -1, -1):
            score, backward_pred = self.swapped_score_back(
                backward, i + 1, backward_pred, d, e
            )
            backward.swap(i, i + 1)
            if score < best_score:
                best_score = score
                best = backward.copy()

        for i in range(pivot, n - 1):
            score, forward_pred = self.swapped_score_forward(
                forward, i, forward_pred, d, e
            )
            forward.swap(i, i + 1)
            if score < best_score:
                best_score = score
                best = forward.copy()

        return best