"""
Visualization functions for rank aggregation results.
"""

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
from typing import Dict, List, Optional


def plot_lo_value_distribution(
    lo_values: np.ndarray,
    null_pool: np.ndarray,
    save_path: Optional[str] = None,
    figsize: tuple = (12, 5)
):
    """
    Observed lo-values against the simulated null pool.

    Left: densities of -log10(lo-value). Right: empirical CDFs.

    Parameters
    ----------
    lo_values : np.ndarray
        Observed lo-values
    null_pool : np.ndarray
        Null lo-values from the simulation
    save_path : str, optional
        Path to save figure
    figsize : tuple, default=(12, 5)
        Figure size
    """
    lo_values = np.asarray(lo_values, dtype=float)
    null_pool = np.asarray(null_pool, dtype=float)

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=figsize)

    # Floor at the smallest positive double to keep log finite
    obs_log = -np.log10(np.maximum(lo_values, np.finfo(float).tiny))
    null_log = -np.log10(np.maximum(null_pool, np.finfo(float).tiny))

    sns.histplot(null_log, bins=50, stat='density', color='gray', alpha=0.5,
                 label='Null pool', ax=ax1)
    sns.histplot(obs_log, bins=50, stat='density', color='red', alpha=0.5,
                 label='Observed', ax=ax1)
    ax1.set_xlabel('-log10(lo-value)', fontsize=13)
    ax1.set_ylabel('Density', fontsize=13)
    ax1.set_title('Lo-value Distribution', fontsize=14, fontweight='bold')
    ax1.legend(fontsize=11)
    ax1.grid(True, alpha=0.3)

    for values, color, label in [(null_pool, 'gray', 'Null pool'), (lo_values, 'red', 'Observed')]:
        x = np.sort(values)
        ax2.step(x, np.arange(1, len(x) + 1) / len(x), where='post',
                 color=color, linewidth=2, label=label)
    ax2.set_xscale('log')
    ax2.set_xlabel('lo-value', fontsize=13)
    ax2.set_ylabel('Empirical CDF', fontsize=13)
    ax2.set_title('Observed vs. Null CDF', fontsize=14, fontweight='bold')
    ax2.legend(fontsize=11)
    ax2.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')

    return fig


def plot_fdr_curve(
    results: pd.DataFrame,
    fdr_level: float = 0.1,
    save_path: Optional[str] = None,
    figsize: tuple = (8, 6)
):
    """
    FDR of groups ordered by lo-value, with the number of discoveries.

    Parameters
    ----------
    results : pd.DataFrame
        Columns ``group_id, n_items, lo_value, fdr``
    fdr_level : float, default=0.1
        Threshold line
    save_path : str, optional
        Path to save figure
    figsize : tuple, default=(8, 6)
        Figure size
    """
    ordered = results.sort_values('lo_value')
    rank = np.arange(1, len(ordered) + 1)
    n_sig = int((ordered['fdr'] <= fdr_level).sum())

    fig, ax = plt.subplots(figsize=figsize)

    ax.plot(rank, ordered['fdr'].to_numpy(), '-', linewidth=2, color='blue', label='FDR')
    ax.axhline(fdr_level, color='black', linestyle='--', linewidth=2,
               label=f'FDR = {fdr_level} ({n_sig} groups)')
    if n_sig > 0:
        ax.axvline(n_sig, color='gray', linestyle=':', linewidth=2)

    ax.set_xscale('log')
    ax.set_xlabel('Group rank (by lo-value)', fontsize=13)
    ax.set_ylabel('FDR', fontsize=13)
    ax.set_ylim([0, 1.05])
    ax.set_title('FDR along the Aggregated Ranking', fontsize=14, fontweight='bold')
    ax.legend(fontsize=11)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')

    return fig


def plot_percentile_sensitivity(
    sensitivity_results: Dict[str, List[float]],
    nominal_fdr: float = 0.1,
    save_path: Optional[str] = None,
    figsize: tuple = (12, 5)
):
    """
    Plot sensitivity to the percentile cutoff.

    Parameters
    ----------
    sensitivity_results : dict
        Output of ``run_percentile_sensitivity``
    nominal_fdr : float, default=0.1
        Target FDR level
    save_path : str, optional
        Path to save figure
    figsize : tuple, default=(12, 5)
        Figure size
    """
    cutoffs = sensitivity_results['max_percentile_values']
    power_values = sensitivity_results['power_mean']
    fdr_values = sensitivity_results['fdr_mean']

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=figsize)

    # Power vs cutoff
    ax1.errorbar(cutoffs, power_values, yerr=sensitivity_results['power_std'],
                 fmt='o-', linewidth=2, markersize=8, color='blue', capsize=5)
    ax1.set_xlabel('max_percentile', fontsize=13)
    ax1.set_ylabel('Power (TPR)', fontsize=13)
    ax1.set_title('Power vs. Percentile Cutoff', fontsize=14, fontweight='bold')
    ax1.grid(True, alpha=0.3)
    ax1.set_ylim([0, 1])

    # FDR vs cutoff
    ax2.errorbar(cutoffs, fdr_values, yerr=sensitivity_results['fdr_std'],
                 fmt='o-', linewidth=2, markersize=8, color='red', capsize=5)
    ax2.axhline(nominal_fdr, color='black', linestyle='--', linewidth=2,
                label=f'Nominal FDR = {nominal_fdr}')
    ax2.set_xlabel('max_percentile', fontsize=13)
    ax2.set_ylabel('Empirical FDR', fontsize=13)
    ax2.set_title('FDR Control vs. Percentile Cutoff', fontsize=14, fontweight='bold')
    ax2.legend(fontsize=11)
    ax2.grid(True, alpha=0.3)
    ax2.set_ylim([0, max(max(fdr_values), nominal_fdr) * 1.2])

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')

    return fig
