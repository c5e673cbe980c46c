"""
Adaptive Step Doubling with Runge's Rule

Drives a fixed-step formula of known order p by repeatedly doubling the
subdivision count until Runge's error estimate falls below the target.

Error Estimation Method:
    I_h  = Q(a, b, n)
    I_2h = Q(a, b, n / 2)              # previous iterate
    error ~ |I_h - I_2h| / (2^p - 1)   # Runge's rule

On convergence the Richardson-extrapolated value is returned:
    I ~ I_h + (I_h - I_2h) / (2^p - 1)

For a 4th-order formula Runge's estimate is unreliable at very small n,
where the leading error term does not dominate yet. Estimates below the
tolerance are ignored until n reaches a reliability floor (8 by default).

The driver is an explicit state machine:

    INITIALIZING -> ITERATING -> CONVERGED
                    ITERATING -> EXHAUSTED_BUDGET

All loop state lives in an immutable ConvergenceState record; advance()
maps (state, interval) to (new state, optional result) without side
effects other than logging.

Reference: Kalitkin, Numerical Methods; Press et al., Numerical Recipes 4.3
"""

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Iterator, Optional, Tuple, Union

from ..common.constants import (
    RUNGE_INITIAL_SUBDIVISIONS,
    RUNGE_MAX_ITERATIONS,
    RUNGE_MAX_SUBDIVISIONS,
    RUNGE_RELIABILITY_FLOOR,
)
from ..common.logging_config import ServiceLogger
from .base import BaseQuadrature


Integrator = Union[BaseQuadrature, Callable[[float, float, int], float]]


class DriverPhase(Enum):
    """Driver state machine phases."""
    INITIALIZING = "initializing"
    ITERATING = "iterating"
    CONVERGED = "converged"
    EXHAUSTED_BUDGET = "exhausted_budget"


class ConvergenceStatus(Enum):
    """Outcome of an adaptive integration."""
    CONVERGED = "converged"
    UNVERIFIED = "unverified"


@dataclass(frozen=True)
class ConvergenceState:
    """
    Loop state of the Runge driver.

    Attributes:
        current_estimate: I_h at the current n (nan before the first evaluation)
        previous_estimate: I_2h from the previous iterate (nan until one exists)
        current_n: Current subdivision count
        iteration_count: Number of doublings performed
        function_evals: Integrand evaluations spent so far
        error_estimate: Latest Runge error estimate (inf until one exists)
        phase: Current state machine phase
    """
    current_estimate: float
    previous_estimate: float
    current_n: int
    iteration_count: int
    function_evals: int
    error_estimate: float
    phase: DriverPhase

    @property
    def finished(self) -> bool:
        return self.phase in (DriverPhase.CONVERGED, DriverPhase.EXHAUSTED_BUDGET)


@dataclass(frozen=True)
class AdaptiveResult:
    """
    Final result of an adaptive integration.

    Attributes:
        value: Richardson-extrapolated integral estimate
        subdivisions_used: Final subdivision count n
        error_estimate: Runge error estimate at the final n
        iterations: Number of doublings performed
        function_evals: Total integrand evaluations over all iterates
        status: CONVERGED, or UNVERIFIED when the budget ran out before
                the stopping rule was met
    """
    value: float
    subdivisions_used: int
    error_estimate: float
    iterations: int
    function_evals: int
    status: ConvergenceStatus

    @property
    def converged(self) -> bool:
        """True when the tolerance was met, False for a degraded estimate."""
        return self.status is ConvergenceStatus.CONVERGED

    def __iter__(self) -> Iterator:
        # Allows: value, n = adaptive_integrate(...)
        return iter((self.value, self.subdivisions_used))

    def __repr__(self) -> str:
        return (f"AdaptiveResult(value={self.value:.10f}, "
                f"n={self.subdivisions_used}, "
                f"error={self.error_estimate:.2e}, "
                f"status={self.status.value})")


class RungeDriver:
    """
    Step-doubling driver with Runge error control.

    Attributes:
        integrator: Formula with signature (a, b, n) -> float
        tolerance: Target error epsilon for the Runge estimate
        order: Formula order of accuracy p
        initial_subdivisions: Starting n (made even for p >= 4)
        max_iterations: Ceiling on the number of doublings
        max_subdivisions: Ceiling on n
        reliability_floor: Smallest n at which a p >= 4 estimate is trusted

    Example:
        driver = RungeDriver(SimpsonRule(), tolerance=1e-4)
        result = driver.integrate(0.0, 2.0)

        if not result.converged:
            print("accuracy not verified")
    """

    def __init__(
        self,
        integrator: Integrator,
        tolerance: float,
        order: Optional[int] = None,
        initial_subdivisions: int = RUNGE_INITIAL_SUBDIVISIONS,
        max_iterations: int = RUNGE_MAX_ITERATIONS,
        max_subdivisions: int = RUNGE_MAX_SUBDIVISIONS,
        reliability_floor: int = RUNGE_RELIABILITY_FLOOR,
    ):
        """
        Initialize driver.

        Args:
            integrator: Quadrature formula; a BaseQuadrature or any
                        callable (a, b, n) -> float
            tolerance: Target error epsilon
            order: Order p; defaults to integrator.order when available
            initial_subdivisions: Starting n
            max_iterations: Maximum number of doublings
            max_subdivisions: Maximum n before giving up
            reliability_floor: Minimum n for trusting a p >= 4 estimate

        Raises:
            ValueError: On non-positive tolerance, order or budgets
        """
        if order is None:
            order = getattr(integrator, 'order', None)
        if order is None or order <= 0:
            raise ValueError(f"order of accuracy must be a positive integer, got {order}")
        if tolerance <= 0:
            raise ValueError(f"tolerance must be positive, got {tolerance}")
        if initial_subdivisions <= 0 or max_iterations <= 0 or max_subdivisions <= 0:
            raise ValueError("subdivision and iteration budgets must be positive")

        self.integrator = integrator
        self.tolerance = tolerance
        self.order = order
        self.initial_subdivisions = initial_subdivisions
        self.max_iterations = max_iterations
        self.max_subdivisions = max_subdivisions
        self.reliability_floor = reliability_floor
        self.logger = ServiceLogger("quadlab", "runge")

    @property
    def runge_denominator(self) -> float:
        """2^p - 1"""
        return 2.0 ** self.order - 1.0

    def _cost(self, n: int) -> int:
        evaluations = getattr(self.integrator, 'evaluations', None)
        if evaluations is not None:
            return evaluations(n)
        return n + 1

    def _trusted(self, n: int) -> bool:
        return self.order < 4 or n >= self.reliability_floor

    def initialize(self) -> ConvergenceState:
        """
        Create the starting state record.

        Returns:
            State in the INITIALIZING phase with the starting n
        """
        n = self.initial_subdivisions
        if self.order >= 4 and n % 2 != 0:
            n += 1

        return ConvergenceState(
            current_estimate=math.nan,
            previous_estimate=math.nan,
            current_n=n,
            iteration_count=0,
            function_evals=0,
            error_estimate=math.inf,
            phase=DriverPhase.INITIALIZING,
        )

    def advance(
        self,
        state: ConvergenceState,
        a: float,
        b: float,
    ) -> Tuple[ConvergenceState, Optional[AdaptiveResult]]:
        """
        Perform one state transition.

        INITIALIZING evaluates the formula at the starting n. ITERATING
        doubles n, re-evaluates, and applies the stopping rule.

        Args:
            state: Current state record
            a: Lower bound
            b: Upper bound

        Returns:
            Tuple of (new_state, result); result is None until the
            driver reaches CONVERGED or EXHAUSTED_BUDGET

        Raises:
            ValueError: If state is already in a terminal phase
        """
        if state.finished:
            raise ValueError(f"driver already finished in phase {state.phase.value}")

        if state.phase is DriverPhase.INITIALIZING:
            n = state.current_n
            new_state = replace(
                state,
                current_estimate=self.integrator(a, b, n),
                function_evals=state.function_evals + self._cost(n),
                phase=DriverPhase.ITERATING,
            )
            return new_state, None

        i_2h = state.current_estimate
        n = state.current_n * 2
        i_h = self.integrator(a, b, n)

        difference = i_h - i_2h
        error = abs(difference) / self.runge_denominator
        iteration = state.iteration_count + 1

        new_state = replace(
            state,
            current_estimate=i_h,
            previous_estimate=i_2h,
            current_n=n,
            iteration_count=iteration,
            function_evals=state.function_evals + self._cost(n),
            error_estimate=error,
        )

        self.logger.debug(
            f"Runge iteration {iteration}: n={n}, I_h={i_h:.12f}, error={error:.3e}"
        )

        if error < self.tolerance and self._trusted(n):
            new_state = replace(new_state, phase=DriverPhase.CONVERGED)
            return new_state, self._result(new_state, ConvergenceStatus.CONVERGED)

        if iteration >= self.max_iterations or n > self.max_subdivisions:
            new_state = replace(new_state, phase=DriverPhase.EXHAUSTED_BUDGET)
            self.logger.warning(
                f"Runge rule did not converge to epsilon={self.tolerance} after "
                f"{iteration} iterations (n={n}); last error estimate {error:.3e}. "
                f"Returning an unverified estimate."
            )
            return new_state, self._result(new_state, ConvergenceStatus.UNVERIFIED)

        return new_state, None

    def _result(self, state: ConvergenceState, status: ConvergenceStatus) -> AdaptiveResult:
        extrapolated = (
            state.current_estimate
            + (state.current_estimate - state.previous_estimate) / self.runge_denominator
        )
        return AdaptiveResult(
            value=extrapolated,
            subdivisions_used=state.current_n,
            error_estimate=state.error_estimate,
            iterations=state.iteration_count,
            function_evals=state.function_evals,
            status=status,
        )

    def integrate(self, a: float, b: float) -> AdaptiveResult:
        """
        Run the driver to completion on [a, b].

        Returns:
            AdaptiveResult; check result.converged before trusting the
            accuracy
        """
        state = self.initialize()

        while True:
            state, result = self.advance(state, a, b)
            if result is not None:
                return result

    def __repr__(self) -> str:
        return (f"RungeDriver(p={self.order}, tol={self.tolerance}, "
                f"max_iter={self.max_iterations}, max_n={self.max_subdivisions})")


def adaptive_integrate(
    integrator: Integrator,
    a: float,
    b: float,
    tolerance: float,
    order: Optional[int] = None,
    **budget,
) -> AdaptiveResult:
    """
    Integrate over [a, b] by step doubling until Runge's estimate < tolerance.

    Args:
        integrator: Formula (a, b, n) -> float
        a: Lower bound
        b: Upper bound
        tolerance: Target error epsilon
        order: Order of accuracy p (2 trapezoid, 4 Simpson)
        **budget: Optional RungeDriver budget overrides
                  (initial_subdivisions, max_iterations, max_subdivisions,
                  reliability_floor)

    Returns:
        AdaptiveResult with the extrapolated value and final n
    """
    driver = RungeDriver(integrator, tolerance, order=order, **budget)
    return driver.integrate(a, b)
