import io
import itertools
import random

import pytest

from bnsl.instance import Instance
from bnsl.ordering import Ordering
from bnsl.parentset import ParentSet
from bnsl.population import CrossoverType
from bnsl.register import ResultRegister
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
    return LocalSearch(instance, rng=random.Random(11), out=io.StringIO())


def _brute_min(search):
    return min(
        search.score_with_parents(Ordering(p)).score
        for p in itertools.permutations(range(3))
    )


@pytest.mark.parametrize("start", list(itertools.permutations(range(3))))
def test_hill_climb_consistent_and_not_worse(search, start):
    ordering = Ordering(start)
    result = search.hill_climb(ordering)
    assert ordering == Ordering(start)
    assert result.score == search.score_with_parents(result.ordering).score
    assert result.score <= search.score_with_parents(ordering).score
    assert result.score >= _brute_min(search)


def test_hill_climb_is_local_optimum(search):
    result = search.hill_climb(Ordering([1, 2, 0]))
    d, e = search.new_table(), search.new_table()
    for pivot in range(3):
        search.score_with_memo(result.ordering, d, e)
        moved = search.best_insert(result.ordering, pivot, result.score, d, e)
        assert moved == result.ordering


def test_best_parent_ids(search, instance):
    ordering = Ordering([0, 1, 2])
    ids = search.best_parent_ids(ordering)
    chosen = [instance.var(v).parent(i).parents for v, i in zip(ordering, ids)]
    assert chosen == [(), (0,), (0,)]


def test_make_result(search):
    result = search.make_result(Ordering([0, 1, 2]))
    assert result.score == 18_000_000
    assert result.ordering == Ordering([0, 1, 2])


def test_make_result_not_above_constrained(search):
    for p in itertools.permutations(range(3)):
        o = Ordering(p)
        assert search.make_result(o).score <= search.score_with_parents(o).score


def test_depth_of_unplaced_parent_is_n(search):
    parent = ParentSet(0, (1,), 2)
    assert search.depth(0, [], Ordering([0, 1, 2]), parent) == 3


def test_depth_of_empty_parent(search):
    assert search.depth(0, [], Ordering([0, 1, 2]), ParentSet(0, (), 0)) == 0


def test_depth_sort(search):
    assert search.depth_sort(Ordering([1, 2, 0])) == Ordering([1, 0, 2])


@pytest.mark.parametrize("start", list(itertools.permutations(range(3))))
def test_depth_sort_keeps_parents_first(search, instance, start):
    ordering = Ordering(start)
    ids = search.best_parent_ids(ordering)
    sorted_ordering = search.depth_sort(ordering)
    position = {v: i for i, v in enumerate(sorted_ordering)}
    assert sorted(sorted_ordering) == [0, 1, 2]
    for var, pid in zip(ordering, ids):
        for p in instance.var(var).parent(pid).parents:
            assert position[p] < position[var]


def test_check_solution(instance):
    out = io.StringIO()
    search = LocalSearch(instance, rng=random.Random(1), out=out)
    ordering = Ordering([0, 1, 2])
    assert search.check_solution(ordering) is True
    score = search.score_with_parents(ordering).score
    text = out.getvalue()
    assert f"Total Score: {score} {score}" in text
    assert "Validity Check: Good" in text
    assert text.count("Valid: 1") == 3


@pytest.mark.parametrize("greediness", [-1, 2])
@pytest.mark.parametrize("kind", list(CrossoverType))
def test_genetic_single_generation(instance, greediness, kind):
    out = io.StringIO()
    search = LocalSearch(instance, rng=random.Random(3), out=out)
    register = ResultRegister()
    result = search.genetic(0.0, 4, 2, 1, 1, 32, 2, 0.001, kind, greediness, register)
    assert sorted(result.ordering) == [0, 1, 2]
    assert result.score == search.score_with_parents(result.ordering).score
    assert register.best() == result.score
    text = out.getvalue()
    assert "Done generating initial population" in text
    assert "Generations: 2" in text
    assert text.count("The score is:") == 4