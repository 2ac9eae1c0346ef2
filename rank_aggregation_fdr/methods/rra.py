"""
Robust Rank Aggregation with simulation-based FDR.

Runs the four phases strictly in sequence:
1. Percentiles: mid-rank percentile of each item within its own list
2. Lo-values: Beta order-statistic score of each group's percentiles
3. Null pool: lo-values of uniform synthetic groups of the same sizes
4. FDR: observed lo-values ranked against the null pool, made monotone
"""

import numpy as np
import pandas as pd
from typing import List, Optional

from .fdr import compute_fdr
from .lo_value import CDF_MAX_ERROR, compute_lo_value
from .null_simulation import RAND_PASS_NUM, RANDOM_SEED, simulate_null_pool
from .percentile import assign_percentiles
from .ranking import EPSILON
from ..config import RRAConfig
from ..data.loader import results_frame
from ..data.model import MAX_GROUP_NUM, MAX_LIST_NUM, RRADataset
from ..exceptions import InvalidInputError, OutOfRangeError


class RobustRankAggregation:
    """
    Robust Rank Aggregation of groups of items measured in several lists.

    Parameters
    ----------
    max_percentile : float, default=0.25
        Ranks whose percentile exceeds this cutoff are not scored (rank 1
        always is). Must lie in [0, 1].
    rand_pass_num : int, default=100
        Null lo-values simulated per observed group
    n_null_samples : int, optional
        Explicit target size of the null pool; overrides
        ``rand_pass_num * n_groups``
    random_state : int, default=123456
        Fixed seed of the null simulation
    epsilon : float, default=1e-9
        Tie tolerance of the rank searches
    cdf_tolerance : float, default=1e-10
        Admissible numerical error of the Beta CDF
    n_jobs : int, default=1
        Worker threads for the null simulation (results do not depend on it)
    fdr_level : float, default=0.1
        Default threshold used by ``reject``
    verbose : bool, default=False
        Print progress of each phase

    Attributes
    ----------
    group_names_ : list of str
        Group identities sorted by ascending lo-value
    lo_values_ : np.ndarray
        Lo-values in the same order
    fdr_ : np.ndarray
        FDR in the same order (non-decreasing)
    null_pool_ : np.ndarray
        Sorted null lo-values
    results_ : pd.DataFrame
        Columns ``group_id, n_items, lo_value, fdr``

    Notes
    -----
    ``fit`` and ``compute_fdr`` reorder ``dataset.groups`` in place by
    ascending lo-value.
    """

    def __init__(
        self,
        max_percentile: float = 0.25,
        rand_pass_num: int = RAND_PASS_NUM,
        n_null_samples: Optional[int] = None,
        random_state: int = RANDOM_SEED,
        epsilon: float = EPSILON,
        cdf_tolerance: float = CDF_MAX_ERROR,
        n_jobs: int = 1,
        fdr_level: float = 0.1,
        verbose: bool = False
    ):
        if not 0.0 <= max_percentile <= 1.0:
            raise OutOfRangeError(
                f"max_percentile should be within 0.0 and 1.0, got {max_percentile}"
            )
        self.max_percentile = max_percentile
        self.rand_pass_num = rand_pass_num
        self.n_null_samples = n_null_samples
        self.random_state = random_state
        self.epsilon = epsilon
        self.cdf_tolerance = cdf_tolerance
        self.n_jobs = n_jobs
        self.fdr_level = fdr_level
        self.verbose = verbose

        # Will be set during fit
        self.group_names_ = None
        self.lo_values_ = None
        self.fdr_ = None
        self.null_pool_ = None
        self.results_ = None

    @classmethod
    def from_config(cls, config: RRAConfig, verbose: bool = False) -> 'RobustRankAggregation':
        config.validate()
        return cls(
            max_percentile=config.max_percentile,
            rand_pass_num=config.rand_pass_num,
            random_state=config.random_state,
            epsilon=config.epsilon,
            cdf_tolerance=config.cdf_tolerance,
            n_jobs=config.n_jobs,
            fdr_level=config.fdr_level,
            verbose=verbose
        )

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def compute_percentiles(self, dataset: RRADataset) -> RRADataset:
        """Freeze every list and assign item percentiles."""
        if dataset.n_groups == 0:
            raise InvalidInputError("dataset has no groups")
        return assign_percentiles(dataset, epsilon=self.epsilon)

    def compute_lo_values(self, dataset: RRADataset) -> RRADataset:
        """Set ``Group.lo_value`` for every group."""
        for group in dataset.groups.values():
            if group.n_items == 0:
                raise InvalidInputError(f"group '{group.name}' has no items")
            group.lo_value = compute_lo_value(
                group.percentiles,
                max_percentile=self.max_percentile,
                cdf_tolerance=self.cdf_tolerance
            )
        return dataset

    def simulate_null(self, dataset: RRADataset) -> np.ndarray:
        """Simulate the sorted null pool for the dataset's group sizes."""
        n_samples = self.n_null_samples
        if n_samples is None:
            n_samples = self.rand_pass_num * dataset.n_groups

        self.null_pool_ = simulate_null_pool(
            dataset.group_sizes(),
            max_percentile=self.max_percentile,
            n_samples=n_samples,
            random_state=self.random_state,
            n_jobs=self.n_jobs,
            cdf_tolerance=self.cdf_tolerance,
            show_progress=self.verbose
        )
        return self.null_pool_

    def compute_fdr(self, dataset: RRADataset) -> RRADataset:
        """
        Sort groups by lo-value (in place) and set ``Group.fdr``.

        Requires ``simulate_null`` to have run.
        """
        if self.null_pool_ is None:
            raise InvalidInputError("Run simulate_null() first!")

        dataset.sort_groups_by_lo_value()
        groups = list(dataset.groups.values())
        lo_values = np.array([g.lo_value for g in groups], dtype=float)

        fdr = compute_fdr(lo_values, self.null_pool_, epsilon=self.epsilon)
        for group, value in zip(groups, fdr):
            group.fdr = float(value)

        self.group_names_ = [g.name for g in groups]
        self.lo_values_ = lo_values
        self.fdr_ = fdr
        self.results_ = results_frame(dataset)
        return dataset

    # ------------------------------------------------------------------
    # Full run
    # ------------------------------------------------------------------

    def fit(self, dataset: RRADataset) -> 'RobustRankAggregation':
        """
        Run all phases on ``dataset``.

        Parameters
        ----------
        dataset : RRADataset
            Groups and lists; groups are reordered in place

        Returns
        -------
        self : RobustRankAggregation
            Fitted model
        """
        if self.verbose:
            print(f"{dataset.n_items} items\n{dataset.n_groups} groups\n{dataset.n_lists} lists")
            print("computing lo-values for each group...")

        self.compute_percentiles(dataset)
        self.compute_lo_values(dataset)

        if self.verbose:
            print("computing false discovery rate...")

        self.simulate_null(dataset)
        self.compute_fdr(dataset)

        if self.verbose:
            n_sig = int(np.sum(self.fdr_ <= self.fdr_level))
            print(f"Null pool size: {len(self.null_pool_)}")
            print(f"Groups with FDR <= {self.fdr_level}: {n_sig}/{dataset.n_groups}")

        return self

    def reject(self, fdr_level: Optional[float] = None) -> List[str]:
        """Names of groups with FDR <= ``fdr_level`` (most significant first)."""
        if self.fdr_ is None:
            raise InvalidInputError("Model not fitted. Call fit() first.")
        if fdr_level is None:
            fdr_level = self.fdr_level
        return [name for name, fdr in zip(self.group_names_, self.fdr_) if fdr <= fdr_level]


def aggregate_ranks(
    records: pd.DataFrame,
    max_groups: int = MAX_GROUP_NUM,
    max_lists: int = MAX_LIST_NUM,
    **kwargs
) -> pd.DataFrame:
    """
    Run rank aggregation on a 4-column frame (item, group, list, value).

    Keyword arguments are passed to ``RobustRankAggregation``.

    Returns
    -------
    results : pd.DataFrame
        Columns ``group_id, n_items, lo_value, fdr``, by ascending lo-value
    """
    dataset = RRADataset.from_frame(records, max_groups=max_groups, max_lists=max_lists)
    return RobustRankAggregation(**kwargs).fit(dataset).results_
