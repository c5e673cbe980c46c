"""
Composite Midpoint (Central Rectangles) Rule

    h = (b - a) / n
    I ~ h * sum_{i=0}^{n-1} f(a + (i + 1/2) h)

Second order: the error behaves like h^2, with the a-priori bound

    |R| <= (b - a)^3 * M2 / (24 n^2),   M2 = max|f''(x)| on [a, b]

Exact for linear integrands.
"""

import numpy as np

from ..common.constants import MIDPOINT_BOUND_CONSTANT, MIDPOINT_ORDER
from ..integrand import RATIONAL_INTEGRAND
from .base import BaseQuadrature, sample_integrand


def midpoint_rule(a: float, b: float, n: int, func=RATIONAL_INTEGRAND) -> float:
    """
    Midpoint approximation of the integral of func over [a, b].

    Args:
        a: Lower bound
        b: Upper bound
        n: Number of subintervals
        func: Vectorized integrand (defaults to the problem integrand)

    Returns:
        Approximate integral, or 0.0 when n <= 0
    """
    if n <= 0:
        return 0.0

    h = (b - a) / n
    midpoints = a + (np.arange(n) + 0.5) * h

    return float(h * np.sum(sample_integrand(func, midpoints)))


class MidpointRule(BaseQuadrature):
    """
    Composite midpoint rule.

    Uses n integrand evaluations, one at the centre of each subinterval.
    The endpoints are never evaluated.
    """

    order = MIDPOINT_ORDER
    bound_constant = MIDPOINT_BOUND_CONSTANT

    def evaluate(self, a: float, b: float, n: int) -> float:
        return midpoint_rule(a, b, n, self.integrand)

    def evaluations(self, n: int) -> int:
        return max(n, 0)

    def name(self) -> str:
        """Return formula name."""
        return "Midpoint (Central Rectangles)"
