"""
Unit Tests for Fixed-Step Quadrature Formulas

Tests the three composite formulas:
- MidpointRule (central rectangles, order 2)
- TrapezoidRule (order 2)
- SimpsonRule (order 4)

Tests verify:
1. Degenerate input handling (n <= 0, zero-width interval)
2. Polynomial exactness
3. Convergence order under step halving
4. Determinism and evaluation counts
"""

import pytest
import numpy as np

from quadlab.common.constants import EXACT_VALUE
from quadlab.integrators import (
    BaseQuadrature,
    QuadratureResult,
    MidpointRule,
    TrapezoidRule,
    SimpsonRule,
    midpoint_rule,
    trapezoid_rule,
    simpson_rule,
    sample_integrand,
)


ALL_RULES = [midpoint_rule, trapezoid_rule, simpson_rule]


def linear(x):
    return 3.0 * x - 1.0


def linear_antiderivative(x):
    return 1.5 * x ** 2 - x


def cubic(x):
    return x ** 3 - 2.0 * x ** 2 + x + 1.0


def cubic_antiderivative(x):
    return x ** 4 / 4.0 - 2.0 * x ** 3 / 3.0 + x ** 2 / 2.0 + x


class TestDegenerateInput:
    """Tests for n <= 0 and zero-width intervals."""

    @pytest.mark.parametrize("rule", ALL_RULES)
    @pytest.mark.parametrize("n", [0, -1, -10])
    def test_non_positive_n_returns_zero(self, rule, n):
        """Test that n <= 0 yields 0.0 without raising."""
        assert rule(0.0, 2.0, n) == 0.0

    @pytest.mark.parametrize("rule", ALL_RULES)
    @pytest.mark.parametrize("n", [1, 2, 7, 64])
    def test_zero_width_interval(self, rule, n):
        """Test that integrating over [a, a] gives 0.0."""
        assert rule(1.3, 1.3, n) == 0.0

    def test_degenerate_evaluation_counts(self):
        """Test that no evaluations are reported for n <= 0."""
        for rule in (MidpointRule(), TrapezoidRule(), SimpsonRule()):
            result = rule.integrate(0.0, 2.0, 0)
            assert result.value == 0.0
            assert result.function_evals == 0
            assert result.subdivisions_used == 0


class TestPolynomialExactness:
    """Tests that each formula is exact for its polynomial degree."""

    @pytest.mark.parametrize("rule", [midpoint_rule, trapezoid_rule])
    @pytest.mark.parametrize("a, b", [(-2.0, 5.0), (0.0, 1.0), (3.5, 4.0)])
    @pytest.mark.parametrize("n", [1, 3, 10])
    def test_second_order_exact_for_linear(self, rule, a, b, n):
        """Test midpoint and trapezoid integrate linear functions exactly."""
        exact = linear_antiderivative(b) - linear_antiderivative(a)
        assert abs(rule(a, b, n, linear) - exact) < 1e-12

    @pytest.mark.parametrize("a, b", [(-1.0, 3.0), (0.0, 1.0), (2.0, 2.5)])
    @pytest.mark.parametrize("n", [2, 4, 3, 20])
    def test_simpson_exact_for_cubic(self, a, b, n):
        """Test Simpson integrates cubic polynomials exactly (odd n included)."""
        exact = cubic_antiderivative(b) - cubic_antiderivative(a)
        assert abs(simpson_rule(a, b, n, cubic) - exact) < 1e-12

    @pytest.mark.parametrize("rule", ALL_RULES)
    @pytest.mark.parametrize("n", [1, 2, 7, 10])
    def test_constant_integrand_scalar_output(self, rule, n):
        """Test an integrand returning a scalar is counted at every node."""
        assert rule(0.0, 2.0, n, lambda x: 2.0) == pytest.approx(4.0, abs=1e-12)

    def test_sample_integrand_broadcasts(self):
        """Test scalar integrand output takes the node shape."""
        values = sample_integrand(lambda x: 2.0, np.linspace(0.0, 1.0, 5))
        assert values.shape == (5,)
        np.testing.assert_array_equal(values, 2.0)

    def test_trapezoid_not_exact_for_quadratic(self):
        """Sanity check: second order formulas miss curvature."""
        value = trapezoid_rule(0.0, 1.0, 2, lambda x: x ** 2)
        assert abs(value - 1.0 / 3.0) > 1e-3


class TestConvergenceOrder:
    """Tests that halving h reduces the error by 2^p."""

    @pytest.mark.parametrize("rule, expected_ratio", [
        (midpoint_rule, 4.0),
        (trapezoid_rule, 4.0),
        (simpson_rule, 16.0),
    ])
    def test_step_halving_ratio_exp(self, rule, expected_ratio):
        """Test error ratio on exp(x) over [0, 1]."""
        exact = np.e - 1.0
        coarse = abs(rule(0.0, 1.0, 8, np.exp) - exact)
        fine = abs(rule(0.0, 1.0, 16, np.exp) - exact)

        ratio = coarse / fine
        assert ratio == pytest.approx(expected_ratio, rel=0.2)

    @pytest.mark.parametrize("rule", [midpoint_rule, trapezoid_rule])
    def test_step_halving_ratio_problem_integrand(self, rule):
        """Test second order convergence on (x+3)/(x^2+4)."""
        coarse = abs(rule(0.0, 2.0, 16) - EXACT_VALUE)
        fine = abs(rule(0.0, 2.0, 32) - EXACT_VALUE)

        assert coarse / fine == pytest.approx(4.0, rel=0.2)


class TestSimpsonParity:
    """Tests for Simpson odd-n handling."""

    @pytest.mark.parametrize("n", [1, 3, 5, 17])
    def test_odd_n_rounded_up(self, n):
        """Test that an odd n behaves exactly like n + 1."""
        assert simpson_rule(0.0, 2.0, n) == simpson_rule(0.0, 2.0, n + 1)

    def test_subdivisions_reported_after_rounding(self):
        """Test QuadratureResult reports the even n actually used."""
        result = SimpsonRule().integrate(0.0, 2.0, 7)
        assert result.subdivisions_used == 8
        assert result.function_evals == 9


class TestRuleClasses:
    """Tests for the BaseQuadrature implementations."""

    def test_orders_and_bound_constants(self):
        """Test class-level order and error bound constants."""
        assert MidpointRule.order == 2
        assert TrapezoidRule.order == 2
        assert SimpsonRule.order == 4
        assert MidpointRule.bound_constant == 24.0
        assert TrapezoidRule.bound_constant == 12.0
        assert SimpsonRule.bound_constant is None

    def test_is_base_quadrature(self):
        """Test all formulas implement the shared capability."""
        for rule in (MidpointRule(), TrapezoidRule(), SimpsonRule()):
            assert isinstance(rule, BaseQuadrature)
            assert rule.name()

    def test_class_matches_function(self):
        """Test evaluate() and __call__ agree with the plain functions."""
        assert MidpointRule().evaluate(0.0, 2.0, 38) == midpoint_rule(0.0, 2.0, 38)
        assert TrapezoidRule()(0.0, 2.0, 54) == trapezoid_rule(0.0, 2.0, 54)
        assert SimpsonRule()(0.0, 2.0, 8) == simpson_rule(0.0, 2.0, 8)

    def test_custom_integrand(self):
        """Test binding a different vectorized integrand."""
        rule = SimpsonRule(cubic)
        exact = cubic_antiderivative(1.0) - cubic_antiderivative(0.0)
        assert rule.evaluate(0.0, 1.0, 2) == pytest.approx(exact, abs=1e-12)

    def test_evaluation_counts(self):
        """Test integrand evaluation accounting."""
        assert MidpointRule().integrate(0.0, 2.0, 38).function_evals == 38
        assert TrapezoidRule().integrate(0.0, 2.0, 54).function_evals == 55
        assert SimpsonRule().integrate(0.0, 2.0, 8).function_evals == 9

    def test_result_is_frozen(self):
        """Test QuadratureResult is immutable."""
        result = TrapezoidRule().integrate(0.0, 2.0, 4)
        assert isinstance(result, QuadratureResult)
        with pytest.raises(AttributeError):
            result.value = 0.0


class TestDeterminism:
    """Tests that formulas are pure functions."""

    @pytest.mark.parametrize("rule", ALL_RULES)
    def test_repeated_calls_bit_identical(self, rule):
        """Test identical arguments give bit-identical results."""
        first = rule(0.0, 2.0, 37)
        second = rule(0.0, 2.0, 37)
        assert first == second

    def test_problem_integrand_default(self):
        """Test the default integrand approximates the exact value."""
        assert midpoint_rule(0.0, 2.0, 1000) == pytest.approx(EXACT_VALUE, abs=1e-6)
        assert trapezoid_rule(0.0, 2.0, 1000) == pytest.approx(EXACT_VALUE, abs=1e-6)
        assert simpson_rule(0.0, 2.0, 100) == pytest.approx(EXACT_VALUE, abs=1e-8)
