import random

import pytest

from bnsl.instance import Instance
from bnsl.ordering import Ordering
from bnsl.population import (
    CrossoverType,
    Population,
    crossover_cx,
    crossover_ob,
    crossover_rk,
)
from bnsl.results import SearchResult
from bnsl.search import LocalSearch

TEXT = """3
0 3
-10 0
-4 1 1
-6 1 2
1 3
-10 0
-3 1 0
-7 1 2
2 3
-10 0
-5 1 0
-8 1 1
"""


@pytest.fixture
def instance():
    return Instance.from_text(TEXT)


@pytest.fixture
def search(instance):
    return LocalSearch(instance, rng=random.Random(7))


def _result(score):
    return SearchResult(score, Ordering([0, 1, 2]))


@pytest.mark.parametrize("crossover", [crossover_ob, crossover_cx, crossover_rk])
@pytest.mark.parametrize("seed", range(5))
def test_crossover_gives_permutation(crossover, seed):
    rng = random.Random(seed)
    o1 = Ordering([3, 0, 5, 1, 4, 2])
    o2 = Ordering([5, 4, 3, 2, 1, 0])
    crossed = crossover(o1, o2, rng)
    assert sorted(crossed) == list(range(6))


@pytest.mark.parametrize("crossover", [crossover_ob, crossover_cx, crossover_rk])
def test_crossover_of_identical_parents(crossover):
    o = Ordering([2, 0, 3, 1])
    assert crossover(o, o.copy(), random.Random(1)) == o


@pytest.mark.parametrize("crossover", [crossover_ob, crossover_cx, crossover_rk])
def test_crossover_length_mismatch(crossover):
    with pytest.raises(ValueError):
        crossover(Ordering([0, 1]), Ordering([0, 1, 2]), random.Random(0))


@pytest.mark.parametrize("seed", range(8))
def test_cx_takes_each_position_from_a_parent(seed):
    o1 = Ordering([0, 1, 2, 3, 4, 5, 6])
    o2 = Ordering([3, 6, 0, 1, 5, 4, 2])
    crossed = crossover_cx(o1, o2, random.Random(seed))
    assert all(c in (a, b) for c, a, b in zip(crossed, o1, o2))
    assert sorted(crossed) == list(range(7))


def test_rk_puts_lowest_rank_first():
    crossed = crossover_rk(Ordering([0, 1, 2]), Ordering([0, 2, 1]), random.Random(3))
    assert crossed[0] == 0
    assert sorted(crossed) == [0, 1, 2]


def test_filter_best_removes_duplicates_then_truncates(search):
    population = Population(search)
    population.append(_result(s) for s in [5, 3, 3, 1, 5, 7])
    population.filter_best(3)
    assert [s.score for s in population] == [1, 3, 5]


def test_filter_best_keeps_duplicates_when_small(search):
    population = Population(search)
    population.append(_result(s) for s in [2, 1, 1, 1])
    population.filter_best(5)
    assert [s.score for s in population] == [1, 1, 1, 2]


def test_average_fitness_truncates(search):
    population = Population(search)
    population.append([_result(3), _result(4)])
    assert population.average_fitness() == 3
    negative = Population(search)
    negative.append([_result(-3), _result(-4)])
    assert negative.average_fitness() == -3


def test_average_fitness_empty(search):
    with pytest.raises(ValueError):
        Population(search).average_fitness()


def test_add_crossovers_needs_two(search):
    population = Population(search, random.Random(0))
    population.add_specimen(_result(1))
    with pytest.raises(ValueError):
        population.add_crossovers(1, CrossoverType.OB)


@pytest.mark.parametrize("kind", list(CrossoverType))
def test_add_crossovers_returns_climbed_children(search, kind):
    population = Population(search, random.Random(2))
    population.add_specimen(search.hill_climb(Ordering([2, 1, 0])))
    population.add_specimen(search.hill_climb(Ordering([1, 2, 0])))
    children = population.add_crossovers(3, kind)
    assert len(children) == 3
    assert len(population) == 2
    for child in children:
        assert sorted(child.ordering) == [0, 1, 2]
        assert child.score == search.score_with_parents(child.ordering).score


def test_mutate_empty(search):
    with pytest.raises(ValueError):
        Population(search).mutate(1, 1)


def test_mutate_returns_offspring(search):
    population = Population(search, random.Random(4))
    population.add_specimen(search.hill_climb(Ordering([0, 1, 2])))
    children = population.mutate(2, 1)
    assert len(children) == 2
    assert len(population) == 1
    for child in children:
        assert child.score == search.score_with_parents(child.ordering).score


def test_diversify_keeps_first(search, instance):
    population = Population(search, random.Random(5))
    specimens = [search.hill_climb(Ordering(o)) for o in ([0, 1, 2], [1, 2, 0], [2, 0, 1], [2, 1, 0])]
    population.append(specimens)
    population.diversify(2, instance)
    assert len(population) == 4
    assert population[0] is specimens[0]
    assert population[1] is specimens[1]
    for s in list(population)[2:]:
        assert sorted(s.ordering) == [0, 1, 2]


def test_str_lists_specimens(search):
    population = Population(search)
    population.append([_result(1), _result(2)])
    lines = str(population).split("\n")
    assert lines == [str(_result(1)), str(_result(2))]