"""
Quadrature Factory

Provides factory functions for creating quadrature formulas by name or
type. Simplifies formula selection in configuration files and reports.

Example:
    # By name
    rule = create_quadrature('simpson')

    # By enum, with a different integrand
    rule = QuadratureFactory.create(QuadratureType.TRAPEZOID, lambda x: x ** 2)

    # List available formulas
    for name in QuadratureFactory.available():
        print(name)
"""

from enum import Enum, auto
from typing import Callable, Dict, Type

import numpy as np

from ..integrand import RATIONAL_INTEGRAND
from .base import BaseQuadrature
from .midpoint import MidpointRule
from .trapezoid import TrapezoidRule
from .simpson import SimpsonRule


class QuadratureType(Enum):
    """Available quadrature formulas."""
    MIDPOINT = auto()
    TRAPEZOID = auto()
    SIMPSON = auto()


_QUADRATURE_CLASSES: Dict[QuadratureType, Type[BaseQuadrature]] = {
    QuadratureType.MIDPOINT: MidpointRule,
    QuadratureType.TRAPEZOID: TrapezoidRule,
    QuadratureType.SIMPSON: SimpsonRule,
}

_CANONICAL_NAMES: Dict[QuadratureType, str] = {
    QuadratureType.MIDPOINT: 'midpoint',
    QuadratureType.TRAPEZOID: 'trapezoid',
    QuadratureType.SIMPSON: 'simpson',
}

_NAME_TO_TYPE: Dict[str, QuadratureType] = {
    # Midpoint / central rectangles
    'midpoint': QuadratureType.MIDPOINT,
    'central_rectangles': QuadratureType.MIDPOINT,
    'rectangle': QuadratureType.MIDPOINT,
    'rect': QuadratureType.MIDPOINT,

    # Trapezoidal
    'trapezoid': QuadratureType.TRAPEZOID,
    'trapezoidal': QuadratureType.TRAPEZOID,
    'trap': QuadratureType.TRAPEZOID,

    # Simpson
    'simpson': QuadratureType.SIMPSON,
    'simpsons': QuadratureType.SIMPSON,
    'simp': QuadratureType.SIMPSON,
}

_DESCRIPTIONS: Dict[str, str] = {
    'midpoint': (
        "Composite midpoint (central rectangles) rule. Second order, "
        "n evaluations. Error bound (b-a)^3 M2 / (24 n^2)."
    ),
    'trapezoid': (
        "Composite trapezoidal rule. Second order, n+1 evaluations. "
        "Error bound (b-a)^3 M2 / (12 n^2)."
    ),
    'simpson': (
        "Composite Simpson rule. Fourth order, exact for cubics. "
        "Odd n is rounded up to even. Best driven adaptively by Runge's rule."
    ),
}


class QuadratureFactory:
    """
    Factory for creating quadrature formulas.

    Supports creation by enum type or string name. String names are
    case-insensitive and support multiple aliases.
    """

    @staticmethod
    def create(
        quadrature_type: QuadratureType,
        integrand: Callable[[np.ndarray], np.ndarray] = RATIONAL_INTEGRAND,
    ) -> BaseQuadrature:
        """
        Create formula by type enum.

        Args:
            quadrature_type: Type of formula to create
            integrand: Vectorized integrand bound to the formula

        Returns:
            Formula instance

        Raises:
            ValueError: If the type is not recognized
        """
        if quadrature_type not in _QUADRATURE_CLASSES:
            raise ValueError(f"Unknown quadrature type: {quadrature_type}")

        return _QUADRATURE_CLASSES[quadrature_type](integrand)

    @staticmethod
    def from_name(
        name: str,
        integrand: Callable[[np.ndarray], np.ndarray] = RATIONAL_INTEGRAND,
    ) -> BaseQuadrature:
        """
        Create formula by string name.

        Args:
            name: Formula name (case-insensitive). Supported names:
                  - 'midpoint', 'central_rectangles', 'rectangle', 'rect'
                  - 'trapezoid', 'trapezoidal', 'trap'
                  - 'simpson', 'simpsons', 'simp'
            integrand: Vectorized integrand bound to the formula

        Returns:
            Formula instance

        Raises:
            ValueError: If name is not recognized
        """
        name_lower = name.lower().strip()

        if name_lower not in _NAME_TO_TYPE:
            available = ', '.join(sorted(_NAME_TO_TYPE))
            raise ValueError(
                f"Unknown quadrature name: '{name}'. "
                f"Available: {available}"
            )

        return QuadratureFactory.create(_NAME_TO_TYPE[name_lower], integrand)

    @staticmethod
    def available() -> list:
        """
        List canonical formula names.
        """
        return [_CANONICAL_NAMES[t] for t in QuadratureType]

    @staticmethod
    def available_aliases() -> Dict[str, str]:
        """
        List all available names with their canonical form.

        Returns:
            Dict mapping alias -> canonical name
        """
        return {alias: _CANONICAL_NAMES[qtype] for alias, qtype in _NAME_TO_TYPE.items()}

    @staticmethod
    def get_description(name: str) -> str:
        """
        Get description for a formula.

        Args:
            name: Formula name or alias

        Returns:
            Human-readable description
        """
        name_lower = name.lower().strip()
        if name_lower in _NAME_TO_TYPE:
            canonical = _CANONICAL_NAMES[_NAME_TO_TYPE[name_lower]]
            return _DESCRIPTIONS[canonical]

        return f"Unknown quadrature: {name}"


def create_quadrature(
    name: str,
    integrand: Callable[[np.ndarray], np.ndarray] = RATIONAL_INTEGRAND,
) -> BaseQuadrature:
    """
    Convenience function to create a formula by name.

    Shorthand for QuadratureFactory.from_name().
    """
    return QuadratureFactory.from_name(name, integrand)
