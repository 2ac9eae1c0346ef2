"""Experiment runners and evaluation scripts."""

from .run_evaluation import (
    run_synthetic_evaluation,
    run_percentile_sensitivity,
    run_single_replication
)

__all__ = [
    'run_synthetic_evaluation',
    'run_percentile_sensitivity',
    'run_single_replication'
]
