"""
Monte-Carlo null distribution of lo-values.

For every pass, each observed group is replaced by a synthetic group of the
same size whose percentiles are drawn from Uniform(0,1). The lo-values of
all synthetic groups are pooled and sorted. Group sizes therefore enter the
pool in proportion to their frequency among the observed groups.

Each pass owns its own generator, seeded with ``random_state + pass_idx``,
so the pool is identical whatever the number of workers.
"""

import numpy as np
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence
from tqdm import tqdm

from .lo_value import CDF_MAX_ERROR, compute_lo_values_batch
from .ranking import sort_ascending
from ..exceptions import InvalidInputError

RAND_PASS_NUM = 100
RANDOM_SEED = 123456


def n_simulation_passes(n_groups: int, n_samples: int) -> int:
    """Number of passes needed to draw at least ``n_samples`` null lo-values."""
    if n_groups < 1:
        raise InvalidInputError("at least one group is required")
    return max(1, -(-int(n_samples) // int(n_groups)))


def simulate_null_pass(
    group_sizes: np.ndarray,
    max_percentile: float,
    rng: np.random.Generator,
    cdf_tolerance: float = CDF_MAX_ERROR
) -> np.ndarray:
    """
    One synthetic lo-value per group, in group order.

    Uniform draws are taken group by group in the order of
    ``group_sizes``; lo-values are then computed in batches of equal size.
    """
    group_sizes = np.asarray(group_sizes, dtype=int)
    draws = rng.uniform(0.0, 1.0, size=int(group_sizes.sum()))
    offsets = np.concatenate(([0], np.cumsum(group_sizes)[:-1]))

    lo_values = np.empty(len(group_sizes), dtype=float)
    for size in np.unique(group_sizes):
        idx = np.flatnonzero(group_sizes == size)
        rows = draws[offsets[idx][:, np.newaxis] + np.arange(size)]
        lo_values[idx] = compute_lo_values_batch(
            rows,
            max_percentile=max_percentile,
            cdf_tolerance=cdf_tolerance
        )

    return lo_values


def simulate_null_pool(
    group_sizes: Sequence[int],
    max_percentile: float = 0.25,
    n_samples: Optional[int] = None,
    random_state: int = RANDOM_SEED,
    n_jobs: int = 1,
    cdf_tolerance: float = CDF_MAX_ERROR,
    show_progress: bool = False
) -> np.ndarray:
    """
    Sorted pool of lo-values under the uniform null model.

    Parameters
    ----------
    group_sizes : sequence of int
        Item count of every observed group, in group order
    max_percentile : float, default=0.25
        Percentile cutoff passed to the aggregator
    n_samples : int, optional
        Target number of null lo-values. Defaults to
        ``RAND_PASS_NUM * len(group_sizes)``. The simulator runs
        ``ceil(n_samples / n_groups)`` passes over all groups.
    random_state : int, default=123456
        Base seed; pass ``p`` uses ``random_state + p``
    n_jobs : int, default=1
        Worker threads. The result does not depend on this value.
    cdf_tolerance : float, default=1e-10
        Admissible numerical error of the Beta CDF
    show_progress : bool, default=False
        Show a progress bar over passes

    Returns
    -------
    null_pool : np.ndarray, shape (n_passes * n_groups,)
        Null lo-values sorted ascending
    """
    group_sizes = np.asarray(group_sizes, dtype=int)
    if group_sizes.ndim != 1 or group_sizes.size == 0:
        raise InvalidInputError("at least one group is required")
    if np.any(group_sizes < 1):
        raise InvalidInputError("every group must contain at least one item")

    n_groups = len(group_sizes)
    if n_samples is None:
        n_samples = RAND_PASS_NUM * n_groups
    n_passes = n_simulation_passes(n_groups, n_samples)

    def run_pass(pass_idx: int) -> np.ndarray:
        rng = np.random.default_rng(random_state + pass_idx)
        return simulate_null_pass(group_sizes, max_percentile, rng, cdf_tolerance)

    passes = range(n_passes)
    if n_jobs > 1:
        with ThreadPoolExecutor(max_workers=n_jobs) as executor:
            results = list(tqdm(executor.map(run_pass, passes), total=n_passes,
                                desc="Null simulation", disable=not show_progress))
    else:
        results = [run_pass(p) for p in tqdm(passes, desc="Null simulation",
                                             disable=not show_progress)]

    null_pool = np.concatenate(results)
    return sort_ascending(null_pool)
