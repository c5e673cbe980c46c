"""
Numerical Quadrature Engine

This package provides composite quadrature formulas for definite
integrals of one-dimensional functions, plus two ways of choosing the
subdivision count.

Available Formulas:
- MidpointRule: central rectangles, order 2
- TrapezoidRule: trapezoids, order 2
- SimpsonRule: parabolas, order 4

Step Selection:
- ErrorBoundPlanner: a-priori n from a second-derivative bound M2
- RungeDriver: step doubling with Runge's error estimate and
  Richardson extrapolation
"""

from .base import (
    BaseQuadrature,
    QuadratureResult,
    sample_integrand,
)
from .midpoint import MidpointRule, midpoint_rule
from .trapezoid import TrapezoidRule, trapezoid_rule
from .simpson import SimpsonRule, simpson_rule
from .planner import (
    ErrorBoundPlanner,
    plan_subdivisions,
    error_bound,
    estimate_derivative_bound,
)
from .runge import (
    RungeDriver,
    ConvergenceState,
    ConvergenceStatus,
    DriverPhase,
    AdaptiveResult,
    adaptive_integrate,
)
from .factory import QuadratureFactory, QuadratureType, create_quadrature

__all__ = [
    # Base classes
    'BaseQuadrature',
    'QuadratureResult',
    'sample_integrand',
    # Formulas
    'MidpointRule',
    'TrapezoidRule',
    'SimpsonRule',
    'midpoint_rule',
    'trapezoid_rule',
    'simpson_rule',
    # Planner
    'ErrorBoundPlanner',
    'plan_subdivisions',
    'error_bound',
    'estimate_derivative_bound',
    # Runge driver
    'RungeDriver',
    'ConvergenceState',
    'ConvergenceStatus',
    'DriverPhase',
    'AdaptiveResult',
    'adaptive_integrate',
    # Factory
    'QuadratureFactory',
    'QuadratureType',
    'create_quadrature',
]
