"""Visualization and plotting utilities."""

from .plots import (
    plot_lo_value_distribution,
    plot_fdr_curve,
    plot_percentile_sensitivity
)

__all__ = [
    'plot_lo_value_distribution',
    'plot_fdr_curve',
    'plot_percentile_sensitivity'
]
