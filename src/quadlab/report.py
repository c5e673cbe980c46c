"""
Quadrature Comparison Report

Runs the four strategies on the configured problem and tabulates each
against the exact value:

    1. Midpoint rule, n from the M2 error bound (k = 24)
    2. Trapezoidal rule, n from the M2 error bound (k = 12)
    3. Trapezoidal rule, Runge step doubling (p = 2)
    4. Simpson rule, Runge step doubling (p = 4)
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .common.config import Interval, QuadLabConfig, get_config
from .common.logging_config import MetricsLogger, ServiceLogger
from .integrand import Integrand, RATIONAL_INTEGRAND
from .integrators import (
    ErrorBoundPlanner,
    RungeDriver,
    create_quadrature,
    estimate_derivative_bound,
)


@dataclass(frozen=True)
class MethodResult:
    """
    One row of the comparison.

    Attributes:
        key: Short identifier (e.g. 'trapezoid_runge')
        label: Display name
        subdivisions: Final n
        value: Computed integral
        abs_error: |value - exact|
        function_evals: Integrand evaluations spent
        verified: False when an adaptive run exhausted its budget
    """
    key: str
    label: str
    subdivisions: int
    value: float
    abs_error: float
    function_evals: int
    verified: bool = True


@dataclass
class ComparisonReport:
    """All four strategies evaluated on one problem."""

    integrand_label: str
    interval: Interval
    tolerance: float
    exact_value: float
    derivative_bound: float
    sampled_derivative_bound: Optional[float]
    planned: List[MethodResult] = field(default_factory=list)
    adaptive: List[MethodResult] = field(default_factory=list)

    @property
    def rows(self) -> List[MethodResult]:
        return self.planned + self.adaptive

    def within_tolerance(self, row: MethodResult) -> bool:
        return row.verified and row.abs_error <= self.tolerance

    @property
    def all_accurate(self) -> bool:
        """True when every strategy met the target accuracy."""
        return all(self.within_tolerance(row) for row in self.rows)


_PLANNED_METHODS = [
    ('midpoint_m2', 'Central rectangles (M2)', 'midpoint'),
    ('trapezoid_m2', 'Trapezoid (M2)', 'trapezoid'),
]

_ADAPTIVE_METHODS = [
    ('trapezoid_runge', 'Trapezoid (Runge)', 'trapezoid'),
    ('simpson_runge', 'Simpson (Runge)', 'simpson'),
]


def run_comparison(
    config: Optional[QuadLabConfig] = None,
    integrand: Integrand = RATIONAL_INTEGRAND,
) -> ComparisonReport:
    """
    Evaluate all four strategies.

    Args:
        config: Configuration (defaults to get_config())
        integrand: Problem integrand

    Returns:
        ComparisonReport with one row per strategy
    """
    if config is None:
        config = get_config()

    logger = ServiceLogger("quadlab", "report")
    metrics = MetricsLogger("quadlab")

    problem = config.problem
    interval = problem.interval
    a, b = interval.lower_bound, interval.upper_bound
    exact = integrand.exact_integral(a, b)

    sampled_m2 = None
    if integrand.second_derivative is not None:
        sampled_m2 = estimate_derivative_bound(
            integrand.second_derivative, a, b, problem.derivative_samples
        )
        # M2 is usually quoted to a few digits; ignore rounding-level excess
        if sampled_m2 > problem.derivative_bound * (1.0 + 1e-4):
            logger.warning(
                f"Sampled max|f''| = {sampled_m2:.6f} exceeds configured "
                f"M2 = {problem.derivative_bound}; planned n may be too small"
            )

    report = ComparisonReport(
        integrand_label=integrand.label,
        interval=interval,
        tolerance=problem.tolerance,
        exact_value=exact,
        derivative_bound=problem.derivative_bound,
        sampled_derivative_bound=sampled_m2,
    )

    planner = ErrorBoundPlanner(problem.derivative_bound, problem.tolerance)
    for key, label, name in _PLANNED_METHODS:
        rule = create_quadrature(name, integrand)
        result = rule.integrate(a, b, planner.plan(a, b, rule))
        report.planned.append(MethodResult(
            key=key,
            label=label,
            subdivisions=result.subdivisions_used,
            value=result.value,
            abs_error=abs(result.value - exact),
            function_evals=result.function_evals,
        ))

    for key, label, name in _ADAPTIVE_METHODS:
        rule = create_quadrature(name, integrand)
        driver = RungeDriver(
            rule,
            problem.tolerance,
            order=rule.order,
            initial_subdivisions=config.runge.initial_subdivisions,
            max_iterations=config.runge.max_iterations,
            max_subdivisions=config.runge.max_subdivisions,
            reliability_floor=config.runge.reliability_floor,
        )
        result = driver.integrate(a, b)
        report.adaptive.append(MethodResult(
            key=key,
            label=label,
            subdivisions=result.subdivisions_used,
            value=result.value,
            abs_error=abs(result.value - exact),
            function_evals=result.function_evals,
            verified=result.converged,
        ))

    for row in report.rows:
        labels = {'method': row.key}
        metrics.log_gauge('quadrature_abs_error', row.abs_error, labels)
        metrics.log_gauge('quadrature_subdivisions', row.subdivisions, labels)
        metrics.log_gauge('quadrature_function_evals', row.function_evals, labels)

    logger.info(f"Comparison complete: {len(report.rows)} methods, "
                f"all accurate: {report.all_accurate}")

    return report


def _section(title: str) -> List[str]:
    return [title, '-' * len(title)]


def format_report(report: ComparisonReport, precision: int = 8) -> str:
    """
    Render the comparison as plain text.

    Args:
        report: Result of run_comparison()
        precision: Digits after the decimal point

    Returns:
        Multi-line report text
    """
    p = precision
    a, b = report.interval.lower_bound, report.interval.upper_bound
    eps = report.tolerance

    lines = [
        "Numerical integration methods",
        f"Function: {report.integrand_label}",
        f"Interval: [{a:.{p}f}, {b:.{p}f}]",
        f"Target accuracy epsilon = {eps}",
        "",
        f"1. Exact value (Newton-Leibniz): {report.exact_value:.{p}f}",
        "",
    ]

    lines += _section("2. Step chosen from the second-derivative bound M2")
    lines.append(f"   M2 = max|f''(x)| used: {report.derivative_bound}")
    if report.sampled_derivative_bound is not None:
        lines.append(f"   Sampled max|f''(x)| on the interval: "
                     f"{report.sampled_derivative_bound:.{p}f}")
    for row in report.planned:
        step = (b - a) / row.subdivisions
        lines += [
            f"   {row.label}:",
            f"     n = {row.subdivisions}, h = {step:.{p}f}",
            f"     Result = {row.value:.{p}f}, abs. error = {row.abs_error:.{p}f}",
        ]
    lines.append("")

    lines += _section("3. Automatic step selection by Runge's rule")
    for row in report.adaptive:
        status = "" if row.verified else " (UNVERIFIED)"
        lines += [
            f"   {row.label}{status}:",
            f"     Final n = {row.subdivisions}, evaluations = {row.function_evals}",
            f"     Result = {row.value:.{p}f}, abs. error = {row.abs_error:.{p}f}",
        ]
    lines.append("")

    lines += _section(f"4. Comparison with the exact value ({report.exact_value:.{p}f})")
    rule = "   " + "-" * 88
    lines += [
        rule,
        f"   | {'Method':<26} | {'N':>8} | {'Evals':>9} | {'Result':>16} | {'Abs. error':>16} |",
        rule,
    ]
    for row in report.rows:
        lines.append(
            f"   | {row.label:<26} | {row.subdivisions:>8} | {row.function_evals:>9} | "
            f"{row.value:>16.{p}f} | {row.abs_error:>16.{p}f} |"
        )
    lines += [rule, ""]

    for row in report.rows:
        if not row.verified:
            lines.append(f"Warning: {row.label} exhausted its iteration budget; "
                         f"accuracy is not verified.")
        if row.abs_error > eps:
            lines.append(f"Warning: {row.label} error ({row.abs_error:.{p}f}) "
                         f"> epsilon ({eps}).")

    if report.all_accurate:
        lines.append(f"All methods reached the target accuracy epsilon = {eps}.")
    else:
        lines.append(f"Not all methods reached the target accuracy epsilon = {eps}.")

    return "\n".join(lines) + "\n"
