"""Rank aggregation and FDR methods."""

from .ranking import (
    sort_ascending,
    rank_below_or_equal,
    mid_rank,
    check_sorted
)
from .percentile import compute_percentiles, assign_percentiles
from .lo_value import compute_lo_value, compute_lo_values_batch
from .null_simulation import simulate_null_pool, simulate_null_pass, n_simulation_passes
from .fdr import estimate_raw_fdr, enforce_monotone_fdr, compute_fdr
from .baseline import bh_adjust, naive_bh_results
from .rra import RobustRankAggregation, aggregate_ranks

__all__ = [
    'sort_ascending',
    'rank_below_or_equal',
    'mid_rank',
    'check_sorted',
    'compute_percentiles',
    'assign_percentiles',
    'compute_lo_value',
    'compute_lo_values_batch',
    'simulate_null_pool',
    'simulate_null_pass',
    'n_simulation_passes',
    'estimate_raw_fdr',
    'enforce_monotone_fdr',
    'compute_fdr',
    'bh_adjust',
    'naive_bh_results',
    'RobustRankAggregation',
    'aggregate_ranks'
]
