"""
Numerical Constants for QuadLab

This module contains the fixed problem data and the method constants
used by the quadrature engine and the comparison report.
"""

import numpy as np

# Integration problem
DEFAULT_LOWER_BOUND = 0.0
DEFAULT_UPPER_BOUND = 2.0
DEFAULT_TOLERANCE = 1e-4

# max|f''(x)| for f(x) = (x+3)/(x^2+4) on [0, 2], attained near x = 0.3
DEFAULT_DERIVATIVE_BOUND = 0.43156

# Closed-form value of the integral of (x+3)/(x^2+4) over [0, 2]
EXACT_VALUE = 0.5 * np.log(2.0) + 3.0 * np.pi / 8.0

# Error-bound denominators: |R| <= (b-a)^3 * M2 / (k * n^2)
MIDPOINT_BOUND_CONSTANT = 24.0
TRAPEZOID_BOUND_CONSTANT = 12.0

# Orders of accuracy (error ~ h^p)
MIDPOINT_ORDER = 2
TRAPEZOID_ORDER = 2
SIMPSON_ORDER = 4

# Runge step-doubling budget
RUNGE_INITIAL_SUBDIVISIONS = 2
RUNGE_MAX_ITERATIONS = 2000
RUNGE_MAX_SUBDIVISIONS = 4_000_000
# Below this n the 4th-order Runge estimate is not trusted
RUNGE_RELIABILITY_FLOOR = 8

# Grid size for the sampled max|f''| cross-check
DERIVATIVE_SAMPLES = 10001
