"""
A-Priori Step Selection from a Second-Derivative Bound

For the second-order midpoint and trapezoidal formulas the remainder
obeys

    |R_n| <= L^3 * M2 / (k * n^2)

with L = b - a, M2 = max|f''(x)| on [a, b], k = 24 (midpoint) or
k = 12 (trapezoid). Requiring the bound to be at most epsilon gives
the smallest admissible subdivision count

    n = ceil( sqrt( L^3 * M2 / (k * epsilon) ) ),   n >= 1

This gives a guaranteed accuracy without any iteration, provided the
supplied M2 really bounds |f''|. M2 is always supplied by the caller;
nothing here differentiates the integrand.
"""

import math
from typing import Callable

import numpy as np

from ..common.constants import DERIVATIVE_SAMPLES
from .base import BaseQuadrature


def _check_inputs(m2: float, tolerance: float) -> None:
    if tolerance <= 0:
        raise ValueError(f"tolerance must be positive, got {tolerance}")
    if m2 < 0:
        raise ValueError(f"derivative bound must be non-negative, got {m2}")


def plan_subdivisions(width: float, m2: float, tolerance: float, k: float) -> int:
    """
    Minimum n meeting the a-priori error bound.

    Args:
        width: Interval length L = b - a
        m2: Bound on |f''| over the interval
        tolerance: Target absolute error epsilon
        k: Method constant (24 midpoint, 12 trapezoid)

    Returns:
        Smallest n >= 1 with L^3 * M2 / (k * n^2) <= epsilon

    Raises:
        ValueError: If tolerance <= 0 or m2 < 0
    """
    _check_inputs(m2, tolerance)

    n = math.ceil(math.sqrt(abs(width) ** 3 * m2 / (k * tolerance)))
    return max(n, 1)


def error_bound(width: float, m2: float, n: int, k: float) -> float:
    """
    Theoretical error bound L^3 * M2 / (k * n^2) achieved by n.
    """
    if n <= 0:
        return math.inf
    return abs(width) ** 3 * m2 / (k * n * n)


def estimate_derivative_bound(
    second_derivative: Callable[[np.ndarray], np.ndarray],
    a: float,
    b: float,
    samples: int = DERIVATIVE_SAMPLES,
) -> float:
    """
    Sample a closed-form f'' on a uniform grid and return max|f''|.

    Used to cross-check a hand-derived M2. A grid maximum can slightly
    underestimate the true supremum, so the result is a check, not a
    replacement for the precomputed bound.

    Args:
        second_derivative: Vectorized f''(x)
        a: Lower bound
        b: Upper bound
        samples: Number of grid points (including both endpoints)

    Returns:
        Largest sampled |f''(x)|
    """
    xs = np.linspace(a, b, max(samples, 2))
    return float(np.max(np.abs(second_derivative(xs))))


class ErrorBoundPlanner:
    """
    Plans subdivision counts for formulas with a second-derivative bound.

    The planner is bound to a derivative bound M2 and target tolerance;
    the method constant k is taken from the formula's bound_constant.

    Example:
        planner = ErrorBoundPlanner(m2=0.43156, tolerance=1e-4)
        n = planner.plan(0.0, 2.0, MidpointRule())    # 38
        n = planner.plan(0.0, 2.0, TrapezoidRule())   # 54
    """

    def __init__(self, m2: float, tolerance: float):
        """
        Initialize planner.

        Args:
            m2: Precomputed max|f''(x)| over the interval
            tolerance: Target absolute error epsilon

        Raises:
            ValueError: If tolerance <= 0 or m2 < 0
        """
        _check_inputs(m2, tolerance)
        self.m2 = m2
        self.tolerance = tolerance

    def plan(self, a: float, b: float, rule: BaseQuadrature) -> int:
        """
        Subdivision count for rule on [a, b].

        Raises:
            ValueError: If the rule has no second-derivative bound
        """
        if rule.bound_constant is None:
            raise ValueError(
                f"{rule.name()} has no second-derivative error bound"
            )
        return plan_subdivisions(b - a, self.m2, self.tolerance, rule.bound_constant)

    def bound(self, a: float, b: float, rule: BaseQuadrature, n: int) -> float:
        """Theoretical error bound of rule with n subintervals."""
        if rule.bound_constant is None:
            raise ValueError(
                f"{rule.name()} has no second-derivative error bound"
            )
        return error_bound(b - a, self.m2, n, rule.bound_constant)

    def __repr__(self) -> str:
        return f"ErrorBoundPlanner(m2={self.m2}, tol={self.tolerance})"
