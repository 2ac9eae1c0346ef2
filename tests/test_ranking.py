import numpy as np
import pytest

from rank_aggregation_fdr.exceptions import InvalidInputError
from rank_aggregation_fdr.methods.ranking import (
    check_sorted,
    mid_rank,
    rank_below_or_equal,
    sort_ascending,
)


def test_sort_ascending_is_in_place():
    values = np.array([3.0, 1.0, 2.0, 1.0])
    out = sort_ascending(values)
    assert out is values
    assert values.tolist() == [1.0, 1.0, 2.0, 3.0]


def test_rank_below_or_equal_counts_ties():
    sorted_values = np.array([1.0, 2.0, 2.0, 3.0])
    assert rank_below_or_equal(2.0, sorted_values) == 3
    assert rank_below_or_equal(0.5, sorted_values) == 0
    assert rank_below_or_equal(3.0, sorted_values) == 4
    assert rank_below_or_equal(10.0, sorted_values) == 4
    assert isinstance(rank_below_or_equal(2.5, sorted_values), int)


def test_rank_below_or_equal_vectorized():
    sorted_values = np.array([1.0, 2.0, 2.0, 3.0])
    counts = rank_below_or_equal(np.array([0.0, 1.0, 2.0, 2.5, 3.0]), sorted_values)
    assert counts.tolist() == [0, 1, 3, 3, 4]


def test_mid_rank_distinct_values():
    sorted_values = np.array([10.0, 20.0, 30.0, 40.0])
    assert mid_rank(10.0, sorted_values) == pytest.approx(1 / 8)
    assert mid_rank(20.0, sorted_values) == pytest.approx(3 / 8)
    assert mid_rank(40.0, sorted_values) == pytest.approx(7 / 8)


def test_mid_rank_ties_share_one_value():
    sorted_values = np.array([1.0, 2.0, 2.0, 3.0])
    cdf = mid_rank(np.array([2.0, 2.0 + 1e-12]), sorted_values)
    assert cdf[0] == cdf[1]
    # Average of tied positions 1 and 2
    assert cdf[0] == pytest.approx(0.5)


def test_mid_rank_rejects_unsorted_reference():
    with pytest.raises(InvalidInputError):
        mid_rank(1.0, np.array([3.0, 1.0, 2.0]))


def test_mid_rank_rejects_empty_reference():
    with pytest.raises(InvalidInputError):
        mid_rank(1.0, np.array([]))


def test_check_sorted_accepts_ties():
    values = check_sorted([1, 1, 2], 'pool')
    assert values.dtype == float


def test_mid_rank_is_built_on_rank_below_or_equal():
    sorted_values = np.array([0.5, 1.0, 1.0, 1.0, 2.5, 4.0])
    queries = np.array([0.5, 1.0, 2.0, 4.0, 5.0])
    eps = 1e-9

    expected = [
        (rank_below_or_equal(q - eps, sorted_values)
         + rank_below_or_equal(q + eps, sorted_values) - 1 + 1) / (2 * len(sorted_values))
        for q in queries
    ]
    assert np.allclose(mid_rank(queries, sorted_values, epsilon=eps), expected)

    scalar = mid_rank(1.0, sorted_values, epsilon=eps)
    assert isinstance(scalar, float)
    assert scalar == pytest.approx(expected[1])
