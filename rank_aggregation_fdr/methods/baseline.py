"""
Naive Benjamini-Hochberg FDR on group lo-values.

A lo-value is a minimum over ranks and is not uniform under the null, so
treating it as a p-value is anti-conservative for groups with many items.
This baseline is kept for comparison with the simulation-based FDR.
"""

import numpy as np
import pandas as pd
from statsmodels.stats.multitest import multipletests
from typing import Tuple

from ..exceptions import InvalidInputError


def bh_adjust(lo_values: np.ndarray, fdr_level: float = 0.1) -> Tuple[np.ndarray, np.ndarray]:
    """
    BH step-up adjustment of lo-values taken as p-values.

    Returns
    -------
    rejected : np.ndarray of bool
    q_values : np.ndarray
        Adjusted values, in input order
    """
    lo_values = np.asarray(lo_values, dtype=float)
    if lo_values.size == 0 or not np.all(np.isfinite(lo_values)):
        raise InvalidInputError("lo-values must be a non-empty array of finite values")

    rejected, q_values, _, _ = multipletests(lo_values, alpha=fdr_level, method='fdr_bh')
    return rejected, q_values


def naive_bh_results(results: pd.DataFrame, fdr_level: float = 0.1) -> pd.DataFrame:
    """
    Copy of ``results`` with a ``bh_fdr`` column next to the simulated ``fdr``.

    Parameters
    ----------
    results : pd.DataFrame
        Columns ``group_id, n_items, lo_value, fdr``
    fdr_level : float, default=0.1
        Level passed to the BH procedure

    Returns
    -------
    bh_results : pd.DataFrame
        Same rows and order, plus ``bh_fdr``
    """
    if 'lo_value' not in results.columns:
        raise InvalidInputError("results have no 'lo_value' column")

    _, q_values = bh_adjust(results['lo_value'].to_numpy(), fdr_level=fdr_level)
    bh_results = results.copy()
    bh_results['bh_fdr'] = q_values
    return bh_results
