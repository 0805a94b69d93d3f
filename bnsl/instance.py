"""Problem instances: every variable with its scored candidate parent sets."""

from __future__ import annotations

from collections.abc import Iterator
from os import PathLike

from .parentset import ParentSet
from .variable import Variable

SCORE_SCALE = -1000000
DEFAULT_NUM_ARCS = 80
DEFAULT_NUM_ROOTS = 1


class _Tokens:
    def __init__(self, text: str) -> None:
        self._it: Iterator[str] = iter(text.split())

    def _next(self) -> str:
        try:
            return next(self._it)
        except StopIteration:
            raise ValueError("unexpected end of instance data") from None

    def int(self) -> int:
        token = self._next()
        try:
            return int(token)
        except ValueError:
            raise ValueError(f"expected an integer, got {token!r}") from None

    def float(self) -> float:
        token = self._next()
        try:
            return float(token)
        except ValueError:
            raise ValueError(f"expected a number, got {token!r}") from None


class Instance:
    """A structure-learning instance with arc and root limits."""

    def __init__(
        self,
        variables: list[Variable],
        num_arcs: int = DEFAULT_NUM_ARCS,
        num_roots: int = DEFAULT_NUM_ROOTS,
    ) -> None:
        self.variables = variables
        self.num_arcs = num_arcs
        self.num_roots = num_roots

    @property
    def n(self) -> int:
        """Number of variables."""
        return len(self.variables)

    @classmethod
    def from_text(cls, text: str) -> Instance:
        """Parse an instance from its whitespace-separated text form.

        Scores are read as reals and stored as integers scaled by -1,000,000,
        so that lower is better.
        """
        tokens = _Tokens(text)
        n = tokens.int()
        if n < 0:
            raise ValueError(f"negative variable count {n}")
        slots: list[Variable | None] = [None] * n
        for _ in range(n):
            var_id = tokens.int()
            if not 0 <= var_id < n:
                raise ValueError(f"variable id {var_id} out of range")
            count = tokens.int()
            variable = Variable(var_id=var_id)
            for j in range(count):
                score = int(tokens.float() * SCORE_SCALE)
                size = tokens.int()
                members = tuple(tokens.int() for _ in range(size))
                for member in members:
                    if not 0 <= member < n:
                        raise ValueError(f"parent {member} out of range")
                variable.add_parent_set(ParentSet(score, members, var_id, j))
            variable.sort_parents()
            variable.reset_parent_ids()
            variable.init_parents_with_var()
            slots[var_id] = variable
        missing = [i for i, v in enumerate(slots) if v is None]
        if missing:
            raise ValueError(f"no entry for variable {missing[0]}")
        return cls([v for v in slots if v is not None])

    @classmethod
    def load(cls, path: str | PathLike[str]) -> Instance:
        """Read an instance file."""
        with open(path, encoding="utf-8") as handle:
            return cls.from_text(handle.read())

    def var(self, i: int) -> Variable:
        """Return variable ``i``."""
        return self.variables[i]

    def __str__(self) -> str:
        return "Printing Instance: \n" + "".join(f"{v}\n" for v in self.variables)