"""
Order-statistic aggregation of a group's percentiles (the "lo-value").

Under the null hypothesis the n percentiles of a group are i.i.d.
Uniform(0,1), so the k-th smallest follows Beta(k, n-k+1):

    score_k = P(U_(k) <= x_k) = I_{x_k}(k, n-k+1)

The lo-value is the minimum score over ranks k = 1..n, skipping every rank
k > 1 whose percentile exceeds ``max_percentile``.
"""

import numpy as np
from scipy.special import betainc

from ..exceptions import ComputationError, InvalidInputError

CDF_MAX_ERROR = 1e-10


def compute_lo_values_batch(
    percentiles: np.ndarray,
    max_percentile: float = 0.25,
    cdf_tolerance: float = CDF_MAX_ERROR
) -> np.ndarray:
    """
    Lo-values of several groups that all have the same size.

    Parameters
    ----------
    percentiles : np.ndarray, shape (n_groups, n_items)
        One row of percentiles per group, in any order
    max_percentile : float, default=0.25
        Percentile cutoff; rank 1 is always evaluated
    cdf_tolerance : float, default=1e-10
        Admissible numerical error of the Beta CDF

    Returns
    -------
    lo_values : np.ndarray, shape (n_groups,)
        Values in (0, 1]
    """
    x = np.array(percentiles, dtype=float, ndmin=2)
    n_items = x.shape[1]
    if n_items == 0:
        raise InvalidInputError("cannot compute lo-value of an empty group")

    x.sort(axis=1)

    k = np.arange(1, n_items + 1, dtype=float)
    scores = betainc(k, n_items - k + 1, x)

    if not np.all(np.isfinite(scores)):
        raise ComputationError("Beta CDF evaluation failed (non-finite result)")
    if np.any(scores < -cdf_tolerance) or np.any(scores > 1.0 + cdf_tolerance):
        raise ComputationError("Beta CDF evaluation out of [0, 1] beyond tolerance")

    # Ranks past the cutoff are not scored; rank 1 always is
    skipped = x > max_percentile
    skipped[:, 0] = False
    scores[skipped] = 1.0

    return np.minimum(scores.min(axis=1), 1.0)


def compute_lo_value(
    percentiles: np.ndarray,
    max_percentile: float = 0.25,
    cdf_tolerance: float = CDF_MAX_ERROR
) -> float:
    """
    Lo-value of a single group.

    The input is copied; its order does not matter.

    Parameters
    ----------
    percentiles : array-like, shape (n_items,)
        Percentiles of the group's items
    max_percentile : float, default=0.25
        Percentile cutoff
    cdf_tolerance : float, default=1e-10
        Admissible numerical error of the Beta CDF

    Returns
    -------
    lo_value : float
    """
    percentiles = np.asarray(percentiles, dtype=float).ravel()
    if percentiles.size == 0:
        raise InvalidInputError("cannot compute lo-value of an empty group")

    return float(compute_lo_values_batch(percentiles[np.newaxis, :],
                                         max_percentile=max_percentile,
                                         cdf_tolerance=cdf_tolerance)[0])
