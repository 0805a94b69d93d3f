"""A variable together with its candidate parent sets."""

from __future__ import annotations

from dataclasses import dataclass, field

from .parentset import ParentSet


@dataclass
class Variable:
    """A variable and its candidate parent sets, best (lowest score) first once sorted."""

    var_id: int
    parents: list[ParentSet] = field(default_factory=list)
    parents_with_var: dict[int, list[int]] = field(default_factory=dict)
    _empty_idx: int | None = field(default=None, init=False, repr=False)

    def add_parent_set(self, parent_set: ParentSet) -> None:
        """Append a candidate parent set."""
        self.parents.append(parent_set)
        if parent_set.size() == 0:
            self._empty_idx = len(self.parents) - 1

    def num_parents(self) -> int:
        """Number of candidate parent sets."""
        return len(self.parents)

    def parent(self, i: int) -> ParentSet:
        """Return the ``i``-th candidate parent set."""
        return self.parents[i]

    def empty_parent(self) -> ParentSet:
        """Return the candidate with no parents."""
        if self._empty_idx is None:
            raise ValueError(f"variable {self.var_id} has no empty parent set")
        return self.parents[self._empty_idx]

    def sort_parents(self) -> None:
        """Sort candidates by ascending score."""
        self.parents.sort(key=lambda p: p.score)
        self._empty_idx = next(
            (i for i, p in enumerate(self.parents) if p.size() == 0), None
        )

    def reset_parent_ids(self) -> None:
        """Number the candidates by their current position."""
        for i, p in enumerate(self.parents):
            p.id = i

    def init_parents_with_var(self) -> None:
        """Index, for every parent variable, the ids of candidates that contain it."""
        index: dict[int, list[int]] = {}
        for p in self.parents:
            for parent_var in p.parents:
                index.setdefault(parent_var, []).append(p.id)
        self.parents_with_var = index

    def parents_with(self, var_id: int) -> tuple[int, ...]:
        """Ids of candidates containing ``var_id``, in score order; empty if none."""
        return tuple(self.parents_with_var.get(var_id, ()))

    def __str__(self) -> str:
        lines = [f"Parents of Variable {self.var_id}:"]
        lines.extend(f"Id: {i} {p}" for i, p in enumerate(self.parents))
        return "\n".join(lines) + "\n"