"""Public package entry point for the Taipower agricultural bill estimator."""

from __future__ import annotations

from aquametrics.billing import (
    BillingCalculationResult,
    BillingCalculator,
    SeasonBreakdown,
    TierCharge,
)
from aquametrics.errors import (
    AquametricsError,
    EndBeforeStart,
    InvalidInputError,
    InvalidRangeError,
    NoApplicableVersion,
    RateDataError,
    RateResolutionError,
)
from aquametrics.estimate import UsageEstimate, estimate, estimate_batch
from aquametrics.models import (
    BimonthlyTier,
    ElectricityType,
    RateVersion,
    SeasonalSplit,
    SeasonTierTable,
    SeasonType,
    Tier,
)
from aquametrics.rates import (
    DirectoryRateSource,
    PackagedRateSource,
    RateDataSource,
    StaticRateSource,
)
from aquametrics.registry import RateVersionRegistry, load_registry
from aquametrics.seasons import (
    TaiwanSeasonStrategy,
    crosses_boundary,
    determine_season,
    is_boundary_date,
    period_length_days,
    split,
)
from aquametrics.solver import ReverseUsageSolver, SolveResult, SolverSettings
from aquametrics.tiers import to_bimonthly
from aquametrics.validation import PeriodValidation, round_kwh, validate_billing_period
from aquametrics.water import PumpSpec, flow_rate, monthly_volume

__version__ = "0.1.0"


def compute(
    total_kwh: float,
    start_date: object,
    end_date: object,
    electricity_type: ElectricityType = ElectricityType.NON_BUSINESS,
    registry: RateVersionRegistry | None = None,
) -> BillingCalculationResult:
    """Bill for ``total_kwh`` used over the period (forward calculation)."""
    registry = registry or load_registry(electricity_type)
    return BillingCalculator(registry).compute(total_kwh, start_date, end_date)


def solve(
    target_bill: float,
    start_date: object,
    end_date: object,
    electricity_type: ElectricityType = ElectricityType.NON_BUSINESS,
    registry: RateVersionRegistry | None = None,
    settings: SolverSettings | None = None,
) -> float:
    """Usage in kWh that produces ``target_bill`` (reverse calculation).

    The result is unrounded; use ``round_kwh`` for display.
    """
    registry = registry or load_registry(electricity_type)
    solver = ReverseUsageSolver(BillingCalculator(registry), settings)
    return solver.solve(target_bill, start_date, end_date)


__all__ = [
    "AquametricsError",
    "BillingCalculationResult",
    "BillingCalculator",
    "BimonthlyTier",
    "DirectoryRateSource",
    "ElectricityType",
    "EndBeforeStart",
    "InvalidInputError",
    "InvalidRangeError",
    "NoApplicableVersion",
    "PackagedRateSource",
    "PeriodValidation",
    "PumpSpec",
    "RateDataError",
    "RateDataSource",
    "RateResolutionError",
    "RateVersion",
    "RateVersionRegistry",
    "ReverseUsageSolver",
    "SeasonBreakdown",
    "SeasonTierTable",
    "SeasonType",
    "SeasonalSplit",
    "SolveResult",
    "SolverSettings",
    "StaticRateSource",
    "TaiwanSeasonStrategy",
    "Tier",
    "TierCharge",
    "UsageEstimate",
    "compute",
    "crosses_boundary",
    "determine_season",
    "estimate",
    "estimate_batch",
    "flow_rate",
    "is_boundary_date",
    "load_registry",
    "monthly_volume",
    "period_length_days",
    "round_kwh",
    "solve",
    "split",
    "to_bimonthly",
    "validate_billing_period",
    "__version__",
]
