"""
Percentile mapping of item values within their reference lists.
"""

import numpy as np

from .ranking import EPSILON, mid_rank
from ..data.model import RRADataset


def compute_percentiles(
    values: np.ndarray,
    sorted_values: np.ndarray,
    epsilon: float = EPSILON
) -> np.ndarray:
    """
    Mid-rank percentile of each value within one list.

    For n distinct reference values the i-th smallest (0-based) maps to
    (2i + 1) / (2n); tied values share the average of their positions.

    Parameters
    ----------
    values : np.ndarray
        Raw measurements of the items to map
    sorted_values : np.ndarray
        Ascending values of every item in the list
    epsilon : float, default=1e-9
        Tie tolerance

    Returns
    -------
    percentiles : np.ndarray
        Percentiles in (0, 1]
    """
    return np.atleast_1d(mid_rank(values, sorted_values, epsilon=epsilon))


def assign_percentiles(dataset: RRADataset, epsilon: float = EPSILON) -> RRADataset:
    """
    Freeze every list and set ``Item.percentile`` for every item.

    Lists are sorted once here; no value may be added afterwards.
    """
    for ranked_list in dataset.lists.values():
        ranked_list.freeze()

    # Gather items per list so each list is searched with one vectorized call
    by_list = {}
    for group in dataset.groups.values():
        for item in group.items:
            by_list.setdefault(item.list_name, []).append(item)

    for list_name, items in by_list.items():
        sorted_values = dataset.lists[list_name].sorted_values
        values = np.array([item.value for item in items], dtype=float)
        percentiles = compute_percentiles(values, sorted_values, epsilon=epsilon)
        for item, percentile in zip(items, percentiles):
            item.percentile = float(percentile)

    return dataset
