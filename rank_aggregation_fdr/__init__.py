"""
Robust Rank Aggregation with Empirical FDR
==========================================

Aggregates several ranked lists that measure the same items into one
significance score per group ("lo-value") using order statistics, and
estimates its false discovery rate by Monte-Carlo simulation.
"""

__version__ = "0.1.0"

from . import config
from . import data
from . import methods
from . import evaluation
from . import visualization
from .exceptions import (
    RRAError,
    InvalidInputError,
    OutOfRangeError,
    ComputationError,
    ResourceExhaustionError
)
from .methods import RobustRankAggregation, aggregate_ranks

__all__ = [
    "config",
    "data",
    "methods",
    "evaluation",
    "visualization",
    "RRAError",
    "InvalidInputError",
    "OutOfRangeError",
    "ComputationError",
    "ResourceExhaustionError",
    "RobustRankAggregation",
    "aggregate_ranks"
]
