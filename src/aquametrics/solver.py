"""Recover usage (kWh) from a paid bill amount.

The blended bill is a sum of two day-weighted piecewise-linear tier curves,
which has no closed-form inverse. It is monotonically non-decreasing in
usage, so a bisection over usage converges on the bill.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from aquametrics.billing import BillingCalculator
from aquametrics.models import as_date

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolverSettings:
    """Search bounds for the bill-to-usage bisection.

    Attributes:
        upper_bound_kwh: Highest usage considered for one billing period.
        max_iterations: Hard cap on bill evaluations.
        tolerance: Accepted distance between computed and target bill (TWD).
    """

    upper_bound_kwh: float = 20000.0
    max_iterations: int = 100
    tolerance: float = 0.01

    def __post_init__(self) -> None:
        if self.upper_bound_kwh <= 0:
            raise ValueError("upper_bound_kwh must be positive")
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        if self.tolerance <= 0:
            raise ValueError("tolerance must be positive")


@dataclass(frozen=True)
class SolveResult:
    kwh: float
    bill: float
    iterations: int
    converged: bool


class ReverseUsageSolver:
    def __init__(
        self,
        calculator: BillingCalculator,
        settings: SolverSettings | None = None,
    ) -> None:
        self.calculator = calculator
        self.settings = settings or SolverSettings()

    def solve(self, target_bill: float, start_date: object, end_date: object) -> float:
        """Estimated usage in kWh; rounding is left to the caller."""
        return self.solve_detailed(target_bill, start_date, end_date).kwh

    def solve_detailed(
        self, target_bill: float, start_date: object, end_date: object
    ) -> SolveResult:
        start = as_date(start_date)
        end = as_date(end_date)
        settings = self.settings

        lo = 0.0
        hi = settings.upper_bound_kwh
        mid = lo
        cost = 0.0
        for iteration in range(1, settings.max_iterations + 1):
            mid = (lo + hi) / 2
            cost = self.calculator.compute(mid, start, end).bill
            if abs(cost - target_bill) < settings.tolerance:
                return SolveResult(mid, cost, iteration, True)
            if cost < target_bill:
                lo = mid
            else:
                hi = mid

        _LOGGER.warning(
            "Bill %.2f for %s to %s not matched within %.2f after %d iterations; "
            "best estimate %.3f kWh bills %.2f",
            target_bill,
            start,
            end,
            settings.tolerance,
            settings.max_iterations,
            mid,
            cost,
        )
        return SolveResult(mid, cost, settings.max_iterations, False)


__all__ = ["ReverseUsageSolver", "SolveResult", "SolverSettings"]
