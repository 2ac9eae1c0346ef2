"""
Configuration module for rank aggregation runs.

This module provides the configuration class and presets shared by
the estimator, the command line and the synthetic experiments.
"""

from .rra_config import (
    RRAConfig,
    load_config,
    save_config,
    create_config_from_preset,
    RRA_PRESETS,
)

__all__ = [
    'RRAConfig',
    'load_config',
    'save_config',
    'create_config_from_preset',
    'RRA_PRESETS',
]
