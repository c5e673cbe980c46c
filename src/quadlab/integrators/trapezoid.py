"""
Composite Trapezoidal Rule

    h = (b - a) / n
    I ~ h * [ (f(a) + f(b)) / 2 + sum_{i=1}^{n-1} f(a + i h) ]

Second order, with the a-priori bound

    |R| <= (b - a)^3 * M2 / (12 n^2)

Exact for linear integrands.
"""

import numpy as np

from ..common.constants import TRAPEZOID_BOUND_CONSTANT, TRAPEZOID_ORDER
from ..integrand import RATIONAL_INTEGRAND
from .base import BaseQuadrature, sample_integrand


def trapezoid_rule(a: float, b: float, n: int, func=RATIONAL_INTEGRAND) -> float:
    """
    Trapezoidal approximation of the integral of func over [a, b].

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
    interior = a + np.arange(1, n) * h

    f_a, f_b = sample_integrand(func, [a, b])
    total = (f_a + f_b) / 2.0 + np.sum(sample_integrand(func, interior))
    return float(h * total)


class TrapezoidRule(BaseQuadrature):
    """
    Composite trapezoidal rule.

    Uses n + 1 integrand evaluations (both endpoints and n - 1
    interior nodes).
    """

    order = TRAPEZOID_ORDER
    bound_constant = TRAPEZOID_BOUND_CONSTANT

    def evaluate(self, a: float, b: float, n: int) -> float:
        return trapezoid_rule(a, b, n, self.integrand)

    def evaluations(self, n: int) -> int:
        return n + 1 if n > 0 else 0

    def name(self) -> str:
        """Return formula name."""
        return "Trapezoidal"
