"""
Integrands for QuadLab

An integrand bundles the function being integrated with optional
closed-form companions:

    second_derivative: f''(x), used only to cross-check the
                       precomputed bound M2 = max|f''(x)|
    antiderivative:    F(x) with F' = f, used for the exact value
                       via Newton-Leibniz: F(b) - F(a)

All callables must accept numpy arrays as well as scalars, since the
quadrature formulas evaluate the integrand on whole node arrays.

The fixed problem integrand is:

    f(x)   = (x + 3) / (x^2 + 4)
    f''(x) = 2 (x^3 + 9x^2 - 12x - 12) / (x^2 + 4)^3
    F(x)   = ln(x^2 + 4) / 2 + (3/2) atan(x / 2)
"""

from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np
from scipy import integrate


@dataclass(frozen=True)
class Integrand:
    """
    Function to integrate and its closed-form companions.

    Attributes:
        func: f(x)
        label: Human-readable formula for reports
        second_derivative: f''(x), if known
        antiderivative: F(x) with F' = f, if known
    """
    func: Callable[[np.ndarray], np.ndarray]
    label: str = "f(x)"
    second_derivative: Optional[Callable[[np.ndarray], np.ndarray]] = None
    antiderivative: Optional[Callable[[np.ndarray], np.ndarray]] = None

    def __call__(self, x):
        return self.func(x)

    def exact_integral(self, a: float, b: float) -> float:
        """
        Reference value of the integral over [a, b].

        Uses the antiderivative when one is known. Otherwise falls back
        to adaptive Gauss-Kronrod quadrature from scipy.
        """
        if self.antiderivative is not None:
            return float(self.antiderivative(b) - self.antiderivative(a))

        value, _ = integrate.quad(self.func, a, b)
        return float(value)


def rational_function(x):
    return (x + 3.0) / (x * x + 4.0)


def rational_second_derivative(x):
    num = 2.0 * (x * x * x + 9.0 * x * x - 12.0 * x - 12.0)
    den_base = x * x + 4.0
    return num / (den_base * den_base * den_base)


def rational_antiderivative(x):
    return 0.5 * np.log(x * x + 4.0) + 1.5 * np.arctan(x / 2.0)


RATIONAL_INTEGRAND = Integrand(
    func=rational_function,
    label="f(x) = (x+3) / (x^2+4)",
    second_derivative=rational_second_derivative,
    antiderivative=rational_antiderivative,
)
