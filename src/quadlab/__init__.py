"""
QuadLab Numerical Integration Package

Computes the definite integral of f(x) = (x+3)/(x^2+4) on [0, 2] with four
classical strategies and compares each against the closed-form value
0.5 ln 2 + 3 pi / 8:

- Midpoint rule with n chosen from the second-derivative bound M2
- Trapezoidal rule with n chosen from M2
- Trapezoidal rule with automatic step doubling by Runge's rule
- Simpson rule with automatic step doubling by Runge's rule
"""

__version__ = "0.1.0"

from .integrand import Integrand, RATIONAL_INTEGRAND
from .integrators import (
    MidpointRule,
    TrapezoidRule,
    SimpsonRule,
    midpoint_rule,
    trapezoid_rule,
    simpson_rule,
    ErrorBoundPlanner,
    RungeDriver,
    AdaptiveResult,
    adaptive_integrate,
)
