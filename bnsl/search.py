"""Hill climbing over orderings and the genetic search built on it."""

from __future__ import annotations

import random
import sys
from collections import deque
from typing import TYPE_CHECKING, TextIO

from .instance import Instance
from .ordering import Ordering
from .parentset import SCORE_MAX, ParentSet
from .population import CrossoverType, Population
from .results import SearchResult
from .scoring import OrderingScorer

if TYPE_CHECKING:
    from .register import ResultRegister


class LocalSearch(OrderingScorer):
    """Local and population-based search for low-scoring orderings."""

    def __init__(
        self,
        instance: Instance,
        rng: random.Random | None = None,
        out: TextIO | None = None,
    ) -> None:
        super().__init__(instance)
        self.rng = rng if rng is not None else random
        self.out = out

    def _say(self, line: str) -> None:
        print(line, file=self.out if self.out is not None else sys.stdout)

    def hill_climb(self, ordering: Ordering) -> SearchResult:
        """Apply improving insert moves, pivots in random order, until none helps."""
        n = self.instance.n
        current = ordering.copy()
        d = self.new_table()
        e = self.new_table()
        current_score = self.score_with_memo(current, d, e)
        positions = list(range(n))
        improving = True
        while improving:
            improving = False
            self.rng.shuffle(positions)
            for pivot in positions:
                candidate = self.best_insert(current, pivot, current_score, d, e)
                score = self.score_with_memo(candidate, d, e)
                if score < current_score:
                    current = candidate
                    current_score = score
                    improving = True
                    break
        return SearchResult(current_score, current)

    def _best_parents(self, ordering: Ordering) -> list[ParentSet]:
        pred = 0
        chosen = []
        for i, var in enumerate(ordering):
            chosen.append(self.best_parent(ordering, pred, i))
            pred |= 1 << var
        return chosen

    def best_parent_ids(self, ordering: Ordering) -> list[int]:
        """Id of the unconstrained best parent set of each position's variable."""
        return [p.id for p in self._best_parents(ordering)]

    def make_result(self, ordering: Ordering) -> SearchResult:
        """Score ``ordering`` by best parent sets, ignoring arc and root limits."""
        score = sum(p.score for p in self._best_parents(ordering))
        return SearchResult(score, ordering.copy())

    def depth_sort(self, ordering: Ordering) -> Ordering:
        """Reorder variables by their depth in the best-parent graph of ``ordering``."""
        parent_ids = self.best_parent_ids(ordering)
        depths: list[int] = []
        for i, var in enumerate(ordering):
            parent = self.instance.var(var).parent(parent_ids[i])
            depths.append(self.depth(i, depths, ordering, parent))
        ranked = sorted(zip(depths, ordering))
        return Ordering(var for _, var in ranked)

    def depth(
        self, m: int, depths: list[int], ordering: Ordering, parent: ParentSet
    ) -> int:
        """Depth of a node with ``parent`` given depths of the first ``m`` positions.

        Parents outside the first ``m`` positions count as depth ``n - 1``.
        """
        n = self.instance.n
        in_depth = [n - 1] * n
        for i in range(m):
            in_depth[ordering[i]] = depths[i]
        return max((in_depth[k] + 1 for k in range(n) if parent.has_element(k)), default=0)

    def genetic(
        self,
        cutoff_time: float,
        init_population_size: int,
        num_crossovers: int,
        num_mutations: int,
        mutation_power: int,
        div_lookahead: int,
        num_keep: int,
        div_tolerance: float,
        crossover_type: CrossoverType,
        greediness: int,
        register: ResultRegister,
    ) -> SearchResult:
        """Evolve a population until ``register.check()`` reaches ``cutoff_time``.

        A ``greediness`` of -1 seeds the population with random orderings,
        otherwise with greedy ones. A ``div_tolerance`` of -1 disables
        diversification.
        """
        instance = self.instance
        best = SearchResult(SCORE_MAX, Ordering([0] * instance.n))
        fitnesses: deque[int] = deque()
        population = Population(self, self.rng)
        generations = 1

        self._say(f"Time: {register.check():g} Generating initial population")
        for i in range(init_population_size):
            if greediness == -1:
                start = Ordering.random(instance, self.rng)
            else:
                start = Ordering.greedy(instance, greediness, self.rng)
            result = self.hill_climb(start)
            self._say(f"Time: {register.check():g} i = {i} The score is: {result.score}")
            register.record(result.score, result.ordering)
            population.add_specimen(result)
        self._say("Done generating initial population")

        while True:
            offspring = population.add_crossovers(num_crossovers, crossover_type)
            offspring.extend(population.mutate(num_mutations, mutation_power))
            population.append(offspring)
            population.filter_best(init_population_size)

            fitness = population.average_fitness()
            fitnesses.append(fitness)
            if len(fitnesses) > div_lookahead:
                old = fitnesses.popleft()
                if old != 0 and div_tolerance != -1:
                    change = abs((fitness - old) / old)
                    if change < div_tolerance:
                        population.diversify(num_keep, instance)
                        fitnesses.clear()

            current = population[0]
            if current.score < best.score:
                self._say(
                    f"Time: {register.check():g} The best score at this iteration is: "
                    f"{current.score}"
                )
                register.record(current.score, current.ordering)
                best = current
            generations += 1
            if register.check() >= cutoff_time:
                break

        self._say(f"Generations: {generations}")
        return best

    def check_solution(self, ordering: Ordering) -> bool:
        """Print the parent set chosen for every variable; return whether all are valid."""
        chosen = self.score_with_parents(ordering)
        position = {var: i for i, var in enumerate(ordering)}
        valid = True
        from_scores = 0
        from_parents = 0
        for i, var in enumerate(ordering):
            parent = self.instance.var(var).parent(chosen.parent_ids[var])
            members = "".join(f"{p} " for p in parent.parents)
            before = all(position[p] < i for p in parent.parents)
            valid = valid and before
            from_parents += parent.score
            from_scores += chosen.scores[var]
            self._say(
                f"Ordering[{i}]\t= {var}\tScore:\t{chosen.scores[var]}"
                f"\tParents:\t{{ {members}}}\tValid: {int(before)}"
            )
        self._say(f"Total Score: {from_scores} {from_parents}")
        self._say(f"Validity Check: {'Good' if valid else 'Bad'}")
        return valid