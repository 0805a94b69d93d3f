import random

import pytest

from bnsl.ordering import Ordering
from bnsl.results import SearchResult
from bnsl.util import is_opt, unique_pair


def test_is_opt_exact():
    assert is_opt(SearchResult(1000000, Ordering([0])), 1000000)


def test_is_opt_far_off():
    assert not is_opt(SearchResult(2000000, Ordering([0])), 1000000)


def test_unique_pair_distinct_and_in_range():
    rng = random.Random(7)
    for _ in range(200):
        i, j = unique_pair(5, rng)
        assert i != j
        assert 0 <= i < 5 and 0 <= j < 5


def test_unique_pair_of_two_covers_both():
    rng = random.Random(1)
    for _ in range(20):
        assert sorted(unique_pair(2, rng)) == [0, 1]


@pytest.mark.parametrize("n", [0, 1])
def test_unique_pair_too_small(n):
    with pytest.raises(ValueError):
        unique_pair(n)