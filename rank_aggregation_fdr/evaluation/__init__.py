"""Evaluation metrics and analysis."""

from .metrics import (
    discoveries_from_results,
    compute_confusion_matrix,
    compute_metrics,
    lo_value_auc,
    summarize_metrics
)

__all__ = [
    'discoveries_from_results',
    'compute_confusion_matrix',
    'compute_metrics',
    'lo_value_auc',
    'summarize_metrics'
]
