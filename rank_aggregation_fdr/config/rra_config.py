"""
Configuration System for Robust Rank Aggregation.

This module provides a single configuration object shared by the
estimator, the command line and the synthetic experiments.

Usage:
    # Load from YAML
    config = load_config('configs/screen.yaml')

    # Use presets
    config = RRA_PRESETS['default']

    # Programmatic
    config = RRAConfig(max_percentile=0.1, n_jobs=4)
"""

import json
import yaml
from dataclasses import dataclass, asdict, fields
from typing import Dict, Union
from pathlib import Path

from ..exceptions import InvalidInputError, OutOfRangeError


@dataclass
class RRAConfig:
    """
    Configuration for a rank aggregation run.

    Parameters
    ----------
    max_percentile : float
        Ranks whose percentile exceeds this cutoff are not scored
        (rank 1 is always scored). Must lie in [0, 1].
    rand_pass_num : int
        Null samples per observed group. The simulator draws
        ``rand_pass_num * n_groups`` null lo-values in total.
    random_state : int
        Fixed seed of the null simulator.
    epsilon : float
        Tolerance used when locating tied values by rank search.
    cdf_tolerance : float
        Admissible numerical error of the Beta CDF.
    max_groups, max_lists : int
        Ceilings on distinct group / list identities.
    n_jobs : int
        Worker threads for the null simulation.
    fdr_level : float
        FDR threshold used by ``reject`` and the evaluation helpers.
    """
    # Scoring
    max_percentile: float = 0.25
    epsilon: float = 1e-9
    cdf_tolerance: float = 1e-10

    # Null simulation
    rand_pass_num: int = 100
    random_state: int = 123456
    n_jobs: int = 1

    # Ceilings
    max_groups: int = 100000
    max_lists: int = 1000

    # Reporting
    fdr_level: float = 0.1

    def validate(self) -> 'RRAConfig':
        """Check parameter ranges, raising before any computation starts."""
        if not 0.0 <= self.max_percentile <= 1.0:
            raise OutOfRangeError(
                f"max_percentile should be within 0.0 and 1.0, got {self.max_percentile}"
            )
        if not 0.0 <= self.fdr_level <= 1.0:
            raise OutOfRangeError(f"fdr_level should be within 0.0 and 1.0, got {self.fdr_level}")
        for name in ('rand_pass_num', 'n_jobs', 'max_groups', 'max_lists'):
            if int(getattr(self, name)) < 1:
                raise InvalidInputError(f"{name} must be a positive integer")
        if self.epsilon <= 0 or self.cdf_tolerance <= 0:
            raise InvalidInputError("epsilon and cdf_tolerance must be positive")
        return self

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> 'RRAConfig':
        """Build from a mapping, coercing values to the declared field types."""
        if not isinstance(d, dict):
            raise InvalidInputError(f"configuration must be a mapping, got {type(d).__name__}")

        types = {f.name: f.type for f in fields(cls)}
        unknown = sorted(set(d) - set(types))
        if unknown:
            raise InvalidInputError(f"unknown configuration keys: {unknown}")

        kwargs = {}
        for name, value in d.items():
            field_type = types[name]
            message = f"{name} must be {field_type.__name__}, got {value!r}"
            if isinstance(value, bool) or not isinstance(value, (int, float, str)):
                raise InvalidInputError(message)
            try:
                kwargs[name] = field_type(value)
            except (ValueError, OverflowError):
                raise InvalidInputError(message)
            if field_type is int and kwargs[name] != float(value):
                raise InvalidInputError(message)
        return cls(**kwargs)


# =============================================================================
# PRESET CONFIGURATIONS
# =============================================================================

RRA_PRESETS: Dict[str, RRAConfig] = {
    'default': RRAConfig(),

    'quick_test': RRAConfig(
        rand_pass_num=10,
    ),

    'stringent': RRAConfig(
        max_percentile=0.1,
        fdr_level=0.05,
    ),
}


# =============================================================================
# I/O FUNCTIONS
# =============================================================================

def load_config(path: Union[str, Path]) -> RRAConfig:
    """
    Load configuration from YAML or JSON file.

    Parameters
    ----------
    path : str or Path
        Path to configuration file (.yaml, .yml, or .json)

    Returns
    -------
    config : RRAConfig
        Loaded and validated configuration
    """
    path = Path(path)

    try:
        if path.suffix in ['.yaml', '.yml']:
            with open(path, 'r') as f:
                data = yaml.safe_load(f) or {}
        elif path.suffix == '.json':
            with open(path, 'r') as f:
                data = json.load(f)
        else:
            raise ValueError(f"Unknown config format: {path.suffix}")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise InvalidInputError(f"cannot parse config file {path}: {e}") from e

    return RRAConfig.from_dict(data).validate()


def save_config(
    config: RRAConfig,
    path: Union[str, Path],
    format: str = 'yaml'
) -> None:
    """
    Save configuration to file.

    Parameters
    ----------
    config : RRAConfig
        Configuration to save
    path : str or Path
        Output path
    format : str
        'yaml' or 'json'
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.to_dict()

    if format == 'yaml':
        with open(path, 'w') as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
    elif format == 'json':
        with open(path, 'w') as f:
            json.dump(data, f, indent=2)
    else:
        raise ValueError(f"Unknown format: {format}")


def create_config_from_preset(preset_name: str, **overrides) -> RRAConfig:
    """
    Create configuration from preset with optional overrides.

    Unknown override keys are ignored.
    """
    if preset_name not in RRA_PRESETS:
        raise ValueError(f"Unknown preset: {preset_name}")

    config_dict = RRA_PRESETS[preset_name].to_dict()

    for key, value in overrides.items():
        if key in config_dict:
            config_dict[key] = value

    return RRAConfig.from_dict(config_dict).validate()
