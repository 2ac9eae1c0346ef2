"""
Error taxonomy for rank aggregation runs.

Every failure aborts the run: RRA is a one-shot batch computation and the
FDR of each group depends on every other group, so no partial result is
ever considered valid.
"""

from typing import Optional


class RRAError(Exception):
    """Base class for all rank aggregation errors."""


class InvalidInputError(RRAError, ValueError):
    """Malformed records, wrong field counts, duplicate identities or empty groups."""


class OutOfRangeError(RRAError, ValueError):
    """A parameter lies outside its admissible range (e.g. max_percentile)."""


class ComputationError(RRAError, RuntimeError):
    """The Beta order-statistic CDF could not be evaluated reliably."""


class ResourceExhaustionError(RRAError, RuntimeError):
    """Too many distinct groups or lists for the configured ceiling."""

    def __init__(self, kind: str, ceiling: int, message: Optional[str] = None):
        self.kind = kind
        self.ceiling = ceiling
        super().__init__(message or f"too many {kind}, ceiling = {ceiling}")
