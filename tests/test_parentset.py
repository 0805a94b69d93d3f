import pytest

from bnsl.parentset import SCORE_MAX, ParentSet


def test_mask_and_membership():
    p = ParentSet(score=10, parents=(0, 2), var=3)
    assert p.has_element(0)
    assert p.has_element(2)
    assert not p.has_element(1)
    assert not p.has_element(3)


def test_size_counts_distinct_parents():
    assert ParentSet(1, (1, 4, 4), 0).size() == 2
    assert ParentSet(1, (), 0).size() == 0


def test_subset_of():
    p = ParentSet(5, (0, 2), 1)
    assert p.subset_of(0b101)
    assert p.subset_of(0b1111)
    assert not p.subset_of(0b001)
    assert not p.subset_of(0)


def test_empty_set_is_subset_of_anything():
    p = ParentSet(5, (), 1)
    assert p.subset_of(0)
    assert p.subset_of(0b1010)


def test_parents_become_tuple():
    p = ParentSet(5, [3, 1], 0)
    assert p.parents == (3, 1)


def test_negative_parent_rejected():
    with pytest.raises(ValueError):
        ParentSet(5, (-1,), 0)


def test_score_max_is_int64_max_and_holds_in_parent_set():
    p = ParentSet(SCORE_MAX, (), 0)
    assert p.score == 9223372036854775807
    assert p.score == SCORE_MAX


def test_str_mentions_fields():
    text = str(ParentSet(42, (2, 0), 7, id=3))
    assert text == "Score : 42 ParentSet: {0 2} Child: 7 Id: 3"