"""Candidate parent sets of a single variable."""

from __future__ import annotations

from dataclasses import dataclass, field

SCORE_MAX = 2**63 - 1
"""Largest representable score; used as "infinity" by the search."""


@dataclass
class ParentSet:
    """A scored set of parents for the variable ``var``.

    Scores are integers where lower is better. ``mask`` is the parent set as a
    bitmask over variable indices, so predecessor sets are plain ``int`` masks.
    """

    score: int
    parents: tuple[int, ...]
    var: int
    id: int = 0
    mask: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.parents = tuple(self.parents)
        mask = 0
        for parent in self.parents:
            if parent < 0:
                raise ValueError(f"negative parent index {parent}")
            mask |= 1 << parent
        self.mask = mask

    def has_element(self, k: int) -> bool:
        """Return whether variable ``k`` is one of the parents."""
        return bool(self.mask >> k & 1)

    def subset_of(self, pred: int) -> bool:
        """Return whether every parent is in the bitmask ``pred``."""
        return pred & self.mask == self.mask

    def size(self) -> int:
        """Number of distinct parents."""
        return self.mask.bit_count()

    def __str__(self) -> str:
        members = " ".join(str(p) for p in sorted(set(self.parents)))
        return f"Score : {self.score} ParentSet: {{{members}}} Child: {self.var} Id: {self.id}"