"""Timestamped record of improving solutions found during a search."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from os import PathLike
from typing import TextIO

from .ordering import Ordering
from .parentset import SCORE_MAX


class ResultRegister:
    """Keeps every improvement with the milliseconds elapsed since ``set``.

    ``check`` measures seconds since ``set_origin``. Both origins start at
    zero; ``set`` is applied on construction.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self.origin = 0
        self.check_origin = 0
        self.best_score = SCORE_MAX
        self.best_scores: list[tuple[int, int]] = []
        self.best_orderings: list[str] = []
        self.set()

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def record(self, score: int, ordering: Ordering) -> None:
        """Remember ``score`` and ``ordering`` if the score is a new best."""
        now = self._now_ms()
        if score < self.best_score:
            self.best_score = score
            self.best_scores.append((now - self.origin, score))
            self.best_orderings.append(str(ordering))

    def check(self) -> float:
        """Seconds elapsed since ``set_origin``."""
        return (self._now_ms() - self.check_origin) / 1000

    def set(self) -> None:
        """Start the clock that timestamps recorded results."""
        self.origin = self._now_ms()

    def set_origin(self) -> None:
        """Start the clock read by ``check``."""
        self.check_origin = self._now_ms()

    def best(self) -> int:
        """Best recorded score, or SCORE_MAX before anything is recorded."""
        return self.best_score

    def write(self, stream: TextIO) -> None:
        """Write the improvement history to ``stream``."""
        stream.write("BEST\n")
        stream.write("Time (ms)\tScore, followed by ordering next line\n")
        for (elapsed, score), ordering in zip(self.best_scores, self.best_orderings):
            stream.write(f"{elapsed}\t{score}\n")
            stream.write(f"{ordering}\n")

    def dump(
        self,
        out_file: str | PathLike[str],
        instance_title: str | None = None,
        args: Iterable[str] = (),
    ) -> None:
        """Write an optional title, one line per argument, then the history."""
        with open(out_file, "w", encoding="utf-8") as handle:
            if instance_title is not None:
                handle.write(f"{instance_title}\n")
            for arg in args:
                handle.write(f"{arg}\n")
            self.write(handle)