"""
Centralized Configuration Management for QuadLab

This module provides a unified interface for loading and accessing
the integration problem, Runge driver budget, and report settings
from YAML files.
"""

import os
import yaml
from pathlib import Path
from typing import Optional
from dataclasses import dataclass, field, asdict

from . import constants


@dataclass(frozen=True)
class Interval:
    """Closed integration interval [lower_bound, upper_bound]"""

    lower_bound: float
    upper_bound: float

    def __post_init__(self):
        if not self.lower_bound < self.upper_bound:
            raise ValueError(
                f"Interval lower bound must be below upper bound, "
                f"got [{self.lower_bound}, {self.upper_bound}]"
            )

    @property
    def width(self) -> float:
        """Interval length b - a"""
        return self.upper_bound - self.lower_bound


@dataclass
class ProblemConfig:
    """Configuration for the integration problem"""

    lower_bound: float = constants.DEFAULT_LOWER_BOUND
    upper_bound: float = constants.DEFAULT_UPPER_BOUND
    tolerance: float = constants.DEFAULT_TOLERANCE

    # Precomputed max|f''(x)| over the interval
    derivative_bound: float = constants.DEFAULT_DERIVATIVE_BOUND
    derivative_samples: int = constants.DERIVATIVE_SAMPLES

    def __post_init__(self):
        if self.tolerance <= 0:
            raise ValueError(f"tolerance must be positive, got {self.tolerance}")
        if self.derivative_bound < 0:
            raise ValueError(
                f"derivative_bound must be non-negative, got {self.derivative_bound}"
            )

    @property
    def interval(self) -> Interval:
        """Integration interval as a validated value"""
        return Interval(self.lower_bound, self.upper_bound)


@dataclass
class RungeConfig:
    """Configuration for the step-doubling Runge driver"""

    initial_subdivisions: int = constants.RUNGE_INITIAL_SUBDIVISIONS
    max_iterations: int = constants.RUNGE_MAX_ITERATIONS
    max_subdivisions: int = constants.RUNGE_MAX_SUBDIVISIONS
    reliability_floor: int = constants.RUNGE_RELIABILITY_FLOOR


@dataclass
class ReportConfig:
    """Configuration for the comparison report"""

    precision: int = 8


@dataclass
class QuadLabConfig:
    """Master configuration for QuadLab"""

    problem: ProblemConfig = field(default_factory=ProblemConfig)
    runge: RungeConfig = field(default_factory=RungeConfig)
    report: ReportConfig = field(default_factory=ReportConfig)

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'QuadLabConfig':
        """Load configuration from YAML file"""
        with open(yaml_path, 'r') as f:
            config_dict = yaml.safe_load(f) or {}

        return cls(
            problem=ProblemConfig(**config_dict.get('problem', {})),
            runge=RungeConfig(**config_dict.get('runge', {})),
            report=ReportConfig(**config_dict.get('report', {})),
        )

    def to_yaml(self, yaml_path: str) -> None:
        """Save configuration to YAML file"""
        with open(yaml_path, 'w') as f:
            yaml.dump(asdict(self), f, default_flow_style=False)


def get_config(config_path: Optional[str] = None) -> QuadLabConfig:
    """
    Get system configuration

    Priority:
    1. Provided config_path
    2. QUADLAB_CONFIG environment variable
    3. config/default.yml
    4. Default configuration

    Raises:
        FileNotFoundError: config_path or QUADLAB_CONFIG names a missing file
    """
    if config_path is None:
        config_path = os.getenv('QUADLAB_CONFIG')

    if config_path:
        if not Path(config_path).is_file():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return QuadLabConfig.from_yaml(config_path)

    default_paths = [
        Path(__file__).parent.parent.parent.parent / 'config' / 'default.yml',
        Path('config/default.yml')
    ]

    for path in default_paths:
        if path.exists():
            return QuadLabConfig.from_yaml(str(path))

    return QuadLabConfig()
