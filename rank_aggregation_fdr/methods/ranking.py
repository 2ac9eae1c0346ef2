"""
Sort and rank-search primitives.

Both the percentile mapper and the FDR estimator locate a value inside an
ascending reference array. Ties are handled by searching just below and
just above the value and averaging the two positions (mid-rank).
"""

import numpy as np
from typing import Union

from ..exceptions import InvalidInputError

EPSILON = 1e-9


def sort_ascending(values: np.ndarray) -> np.ndarray:
    """
    Sort a numeric array in place, ascending.

    Parameters
    ----------
    values : np.ndarray
        Array to sort. Lists are sorted in place as well.

    Returns
    -------
    values : np.ndarray
        The same object, now sorted
    """
    values.sort()
    return values


def is_sorted(values: np.ndarray) -> bool:
    """True if ``values`` is non-decreasing."""
    values = np.asarray(values)
    return bool(np.all(values[1:] >= values[:-1]))


def check_sorted(values: np.ndarray, name: str = 'values') -> np.ndarray:
    """Return ``values`` as a float array, raising if it is empty or unsorted."""
    values = np.asarray(values, dtype=float)
    if values.ndim != 1 or values.size == 0:
        raise InvalidInputError(f"{name} must be a non-empty 1-d array")
    if not is_sorted(values):
        raise InvalidInputError(f"{name} must be sorted ascending before rank search")
    return values


def rank_below_or_equal(
    query: Union[float, np.ndarray],
    sorted_values: np.ndarray
) -> Union[int, np.ndarray]:
    """
    Count elements of ``sorted_values`` that are <= ``query``.

    Binary search, O(log n) per query. ``sorted_values`` must already be
    ascending; this is not checked here (see ``check_sorted``).

    Parameters
    ----------
    query : float or np.ndarray
        Value(s) to locate
    sorted_values : np.ndarray
        Ascending reference array

    Returns
    -------
    count : int or np.ndarray of int
        Number of reference elements <= each query
    """
    counts = np.searchsorted(sorted_values, query, side='right')
    if np.ndim(counts) == 0:
        return int(counts)
    return counts


def mid_rank(
    values: Union[float, np.ndarray],
    sorted_values: np.ndarray,
    epsilon: float = EPSILON,
    check: bool = True
) -> Union[float, np.ndarray]:
    """
    Tie-averaged empirical CDF of ``values`` within ``sorted_values``.

    low  = #{L <= v - eps}          (elements strictly below v)
    high = #{L <= v + eps} - 1      (position of the last element equal to v)
    mid_rank(v) = (low + high + 1) / (2 n)

    The i-th smallest of n distinct values maps to (2i + 1) / (2n); exact
    ties all receive the average of their tied positions. For a value that
    is itself an element of ``sorted_values`` the result lies in (0, 1).

    Parameters
    ----------
    values : float or np.ndarray
        Value(s) to evaluate
    sorted_values : np.ndarray
        Ascending reference array, size n >= 1
    epsilon : float, default=1e-9
        Floating-point equality tolerance
    check : bool, default=True
        Validate that ``sorted_values`` is non-empty and ascending

    Returns
    -------
    cdf : float or np.ndarray
    """
    if check:
        sorted_values = check_sorted(sorted_values, 'sorted_values')
    n = len(sorted_values)

    values = np.asarray(values, dtype=float)
    low = rank_below_or_equal(values - epsilon, sorted_values)
    high = rank_below_or_equal(values + epsilon, sorted_values) - 1

    cdf = np.asarray((low + high + 1) / (2.0 * n))
    if cdf.ndim == 0:
        return float(cdf)
    return cdf
