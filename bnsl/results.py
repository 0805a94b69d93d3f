"""Small result records produced by the search."""

from __future__ import annotations

from dataclasses import dataclass

from .ordering import Ordering


@dataclass
class SearchResult:
    """A score together with the ordering that reached it."""

    score: int
    ordering: Ordering

    def __str__(self) -> str:
        return f"SearchResult(score={self.score}, ordering={self.ordering})"


@dataclass
class PivotResult:
    """A score, the index of the swap that produced it, and the ordering."""

    score: int
    swap_idx: int
    ordering: Ordering

    def __str__(self) -> str:
        return (
            f"PivotResult(score={self.score}, swapIdx={self.swap_idx}, "
            f"ordering={self.ordering})"
        )


@dataclass(frozen=True)
class SwapResult:
    """Scores of two swapped variables and the parent sets they take."""

    score_b: int
    score_a: int
    parent_i: int
    parent_j: int

    def score(self) -> int:
        """Combined score of both variables."""
        return self.score_a + self.score_b

    def scores(self) -> tuple[int, int]:
        """The two scores, ``(score_b, score_a)``."""
        return (self.score_b, self.score_a)

    @property
    def parent_sets(self) -> tuple[int, int]:
        return (self.parent_i, self.parent_j)

    def __str__(self) -> str:
        return (
            f"SwapResult(scoreB={self.score_b}, scoreA={self.score_a}, "
            f"first={self.parent_i}, second={self.parent_j})"
        )