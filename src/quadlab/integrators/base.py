"""
Base Classes for Fixed-Step Quadrature Formulas

Provides the abstract capability shared by all composite Newton-Cotes
style formulas used in QuadLab:

    evaluate(a, b, n) -> approximate integral of f over [a, b]

where [a, b] is split into n equal subintervals of width h = (b - a) / n.

Every formula is a pure function of (a, b, n): there is no hidden state,
so the same arguments always give a bit-identical result. The adaptive
Runge driver and the error-bound planner depend only on this capability
plus the formula's order of accuracy p (error ~ h^p).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from ..integrand import RATIONAL_INTEGRAND


def sample_integrand(func: Callable, nodes) -> np.ndarray:
    """
    Evaluate func at nodes, one value per node.

    Integrands that ignore their argument (e.g. lambda x: 2.0) return a
    scalar; the result is broadcast to the shape of nodes.

    Args:
        func: Vectorized integrand
        nodes: Array of abscissae

    Returns:
        Float array with the same shape as nodes
    """
    nodes = np.asarray(nodes, dtype=float)
    return np.broadcast_to(np.asarray(func(nodes), dtype=float), nodes.shape)


@dataclass(frozen=True)
class QuadratureResult:
    """
    Result of a single fixed-step quadrature.

    Attributes:
        value: Approximate integral
        subdivisions_used: Number of subintervals actually used
                           (Simpson rounds odd n up to even)
        function_evals: Number of integrand evaluations
    """
    value: float
    subdivisions_used: int
    function_evals: int

    def __repr__(self) -> str:
        return (f"QuadratureResult(value={self.value:.10f}, "
                f"n={self.subdivisions_used}, "
                f"evals={self.function_evals})")


class BaseQuadrature(ABC):
    """
    Abstract base class for composite quadrature formulas.

    Subclasses must implement:
        - evaluate(): Approximate the integral with n subintervals
        - evaluations(): Integrand calls needed for a given n
        - name(): Return formula name for logging and reports

    Class attributes:
        order: Order of accuracy p (error ~ h^p)
        bound_constant: Denominator k of the a-priori error bound
                        (b-a)^3 * M2 / (k * n^2), or None when the
                        formula has no second-derivative bound

    Example:
        rule = TrapezoidRule()
        value = rule.evaluate(0.0, 2.0, 54)

        # Or bind a different vectorized integrand
        rule = SimpsonRule(lambda x: x ** 3)
        result = rule.integrate(0.0, 1.0, 4)
        print(result.value, result.function_evals)
    """

    order: int = 0
    bound_constant: Optional[float] = None

    def __init__(self, integrand: Callable[[np.ndarray], np.ndarray] = RATIONAL_INTEGRAND):
        """
        Initialize formula.

        Args:
            integrand: Vectorized function f(x). Defaults to the fixed
                       problem integrand (x+3)/(x^2+4).
        """
        self.integrand = integrand

    @abstractmethod
    def evaluate(self, a: float, b: float, n: int) -> float:
        """
        Approximate the integral of the integrand over [a, b].

        Args:
            a: Lower bound
            b: Upper bound
            n: Number of subintervals (n <= 0 yields 0.0)

        Returns:
            Approximate integral
        """
        pass

    @abstractmethod
    def evaluations(self, n: int) -> int:
        """
        Number of integrand evaluations used by evaluate() for n.
        """
        pass

    @abstractmethod
    def name(self) -> str:
        """
        Return formula name for logging.

        Returns:
            Human-readable formula name
        """
        pass

    def subdivisions(self, n: int) -> int:
        """
        Subinterval count actually used for a requested n.

        Override in formulas that adjust n (e.g. Simpson parity).
        """
        return max(n, 0)

    def integrate(self, a: float, b: float, n: int) -> QuadratureResult:
        """Evaluate and package the value with its cost."""
        return QuadratureResult(
            value=self.evaluate(a, b, n),
            subdivisions_used=self.subdivisions(n),
            function_evals=self.evaluations(n),
        )

    def __call__(self, a: float, b: float, n: int) -> float:
        return self.evaluate(a, b, n)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(order={self.order})"
