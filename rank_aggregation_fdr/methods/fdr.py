"""
Empirical FDR of observed lo-values against the simulated null pool.

For the group at sorted position i (0 = most significant) among m groups,
with a null pool of size N:

    null_cdf     = mid_rank(lo_i, null_pool)
    observed_cdf = (i + 0.5) / m
    fdr_i        = null_cdf / observed_cdf

The raw ratio is then made non-decreasing from the least significant
group upwards (step-up monotonization), with the last value clamped to 1.
"""

import numpy as np

from .ranking import EPSILON, check_sorted, mid_rank


def estimate_raw_fdr(
    lo_values: np.ndarray,
    null_pool: np.ndarray,
    epsilon: float = EPSILON
) -> np.ndarray:
    """
    Raw FDR ratio for each observed lo-value.

    Parameters
    ----------
    lo_values : np.ndarray, shape (n_groups,)
        Observed lo-values, sorted ascending
    null_pool : np.ndarray, shape (n_null,)
        Null lo-values, sorted ascending
    epsilon : float, default=1e-9
        Tie tolerance

    Returns
    -------
    fdr : np.ndarray, shape (n_groups,)
        Unrepaired FDR (may exceed 1 or be non-monotone)
    """
    lo_values = check_sorted(lo_values, 'lo_values')
    null_pool = check_sorted(null_pool, 'null_pool')

    n_groups = len(lo_values)
    null_cdf = mid_rank(lo_values, null_pool, epsilon=epsilon, check=False)

    # null_cdf / ((i + 0.5) / m)
    return null_cdf / (np.arange(n_groups) + 0.5) * n_groups


def enforce_monotone_fdr(fdr: np.ndarray) -> np.ndarray:
    """
    Step-up repair: clamp the last FDR to 1, then fdr_i = min(fdr_i, fdr_{i+1}).

    Returns a new array; the result is non-decreasing and bounded by 1.
    """
    fdr = np.array(fdr, dtype=float)
    if fdr.size == 0:
        return fdr

    fdr[-1] = min(fdr[-1], 1.0)
    return np.minimum.accumulate(fdr[::-1])[::-1]


def compute_fdr(
    lo_values: np.ndarray,
    null_pool: np.ndarray,
    epsilon: float = EPSILON
) -> np.ndarray:
    """
    Monotone empirical FDR for lo-values sorted ascending.

    Parameters
    ----------
    lo_values : np.ndarray
        Observed lo-values, sorted ascending
    null_pool : np.ndarray
        Null lo-values, sorted ascending
    epsilon : float, default=1e-9
        Tie tolerance

    Returns
    -------
    fdr : np.ndarray
        FDR in [0, 1], non-decreasing along ``lo_values``
    """
    return enforce_monotone_fdr(estimate_raw_fdr(lo_values, null_pool, epsilon=epsilon))
