"""
Evaluation metrics for group-level discoveries.

Compares the groups called significant by rank aggregation with known
hit/null labels (synthetic screens). Labels follow the convention
1 = H0 (null group), 0 = H1 (hit group).
"""

import numpy as np
import pandas as pd
from sklearn.metrics import roc_auc_score
from typing import Dict, List


def discoveries_from_results(
    results: pd.DataFrame,
    true_labels: pd.Series,
    fdr_level: float = 0.1,
    column: str = 'fdr'
) -> np.ndarray:
    """
    Boolean discoveries aligned with ``true_labels``.

    Parameters
    ----------
    results : pd.DataFrame
        Output of ``RobustRankAggregation.results_`` (any row order)
    true_labels : pd.Series
        Labels indexed by group id
    fdr_level : float, default=0.1
        Groups with ``column`` <= fdr_level are discoveries
    column : str, default='fdr'
        Column to threshold
    """
    scores = results.set_index('group_id')[column].reindex(true_labels.index)
    if scores.isna().any():
        missing = list(scores.index[scores.isna()][:5])
        raise ValueError(f"results have no score for groups {missing}")
    return (scores <= fdr_level).to_numpy()


def compute_confusion_matrix(
    discoveries: np.ndarray,
    true_labels: np.ndarray
) -> Dict[str, int]:
    """
    Confusion counts of discoveries against labels.

    Returns
    -------
    confusion : dict
        Keys: 'TP', 'FP', 'TN', 'FN', 'n_discoveries', 'n_true_hits'
    """
    discoveries = np.asarray(discoveries).astype(bool)
    true_labels = np.asarray(true_labels)
    is_hit = true_labels == 0

    return {
        'TP': int(np.sum(discoveries & is_hit)),
        'FP': int(np.sum(discoveries & ~is_hit)),
        'TN': int(np.sum(~discoveries & ~is_hit)),
        'FN': int(np.sum(~discoveries & is_hit)),
        'n_discoveries': int(np.sum(discoveries)),
        'n_true_hits': int(np.sum(is_hit))
    }


def compute_metrics(
    discoveries: np.ndarray,
    true_labels: np.ndarray
) -> Dict[str, float]:
    """
    Power, observed FDR, precision and F1 of a set of discoveries.

    Empty denominators give 0.0.
    """
    cm = compute_confusion_matrix(discoveries, true_labels)

    TP, FP, FN = cm['TP'], cm['FP'], cm['FN']
    n_discoveries = cm['n_discoveries']
    n_true_hits = cm['n_true_hits']

    power = TP / n_true_hits if n_true_hits > 0 else 0.0
    fdr = FP / n_discoveries if n_discoveries > 0 else 0.0
    precision = TP / n_discoveries if n_discoveries > 0 else 0.0
    f1 = 2 * precision * power / (precision + power) if precision + power > 0 else 0.0

    return {
        'power': power,
        'FDR': fdr,
        'precision': precision,
        'F1': f1,
        'n_discoveries': n_discoveries,
        'n_true_hits': n_true_hits,
        'TP': TP,
        'FP': FP,
        'FN': FN
    }


def lo_value_auc(results: pd.DataFrame, true_labels: pd.Series) -> float:
    """
    ROC AUC of lo-values for separating hits from nulls.

    Smaller lo-values should indicate hits, so ``-lo_value`` is the score.
    Returns NaN when only one class is present.
    """
    lo_values = results.set_index('group_id')['lo_value'].reindex(true_labels.index)
    is_hit = (true_labels.to_numpy() == 0).astype(int)
    if is_hit.min() == is_hit.max():
        return float('nan')
    return float(roc_auc_score(is_hit, -lo_values.to_numpy()))


def summarize_metrics(metrics_list: List[Dict[str, float]]) -> Dict[str, Dict[str, float]]:
    """
    Mean, std, min, max and median of each metric across replications.
    """
    if not metrics_list:
        return {}

    summary = {}
    for metric_name in metrics_list[0].keys():
        values = np.array([m[metric_name] for m in metrics_list], dtype=float)
        summary[metric_name] = {
            'mean': float(np.nanmean(values)),
            'std': float(np.nanstd(values)),
            'min': float(np.nanmin(values)),
            'max': float(np.nanmax(values)),
            'median': float(np.nanmedian(values))
        }

    return summary

