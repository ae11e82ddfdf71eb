"""Forward bill computation under seasonally blended progressive tiers."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any

import pandas as pd

from aquametrics.errors import InvalidInputError
from aquametrics.models import (
    BimonthlyTier,
    SeasonalSplit,
    SeasonType,
    as_date,
)
from aquametrics.registry import RateVersionRegistry
from aquametrics.seasons import TaiwanSeasonStrategy
from aquametrics.tiers import to_bimonthly

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class TierCharge:
    tier_index: int
    kwh: float
    unit_price: float
    cost: float


@dataclass(frozen=True)
class SeasonBreakdown:
    """Cost of the full usage on one season's ladder, before blending."""

    season: SeasonType
    days: int
    total_days: int
    cost: float = 0.0
    tiers: tuple[TierCharge, ...] = field(default_factory=tuple)

    @property
    def weight(self) -> float:
        return self.days / self.total_days if self.total_days else 0.0

    @property
    def weighted_cost(self) -> float:
        return self.cost * self.weight


@dataclass(frozen=True)
class BillingCalculationResult:
    bill: float
    total_kwh: float
    version_id: str
    split: SeasonalSplit
    summer: SeasonBreakdown
    non_summer: SeasonBreakdown

    def breakdown_for(self, season: SeasonType) -> SeasonBreakdown:
        return self.summer if season is SeasonType.SUMMER else self.non_summer

    def describe(self) -> dict[str, Any]:
        return {
            "bill": self.bill,
            "total_kwh": self.total_kwh,
            "version_id": self.version_id,
            "summer_days": self.split.summer_days,
            "non_summer_days": self.split.non_summer_days,
            "total_days": self.split.total_days,
            "seasons": [
                {
                    "season": breakdown.season.value,
                    "days": breakdown.days,
                    "cost": breakdown.cost,
                    "weighted_cost": breakdown.weighted_cost,
                    "tiers": [
                        {
                            "tier": charge.tier_index,
                            "kwh": charge.kwh,
                            "unit_price": charge.unit_price,
                            "cost": charge.cost,
                        }
                        for charge in breakdown.tiers
                    ],
                }
                for breakdown in (self.summer, self.non_summer)
            ],
        }

    def to_frame(self) -> pd.DataFrame:
        """One row per consumed tier of each season ladder."""
        records = []
        for breakdown in (self.summer, self.non_summer):
            for charge in breakdown.tiers:
                records.append(
                    {
                        "season": breakdown.season.value,
                        "tier": charge.tier_index,
                        "kwh": charge.kwh,
                        "unit_price": charge.unit_price,
                        "cost": charge.cost,
                        "days": breakdown.days,
                        "total_days": breakdown.total_days,
                        "weighted_cost": charge.cost * breakdown.weight,
                    }
                )
        return pd.DataFrame(
            records,
            columns=[
                "season",
                "tier",
                "kwh",
                "unit_price",
                "cost",
                "days",
                "total_days",
                "weighted_cost",
            ],
        )


class BillingCalculator:
    """Compute a bill from total usage over a billing period.

    The rate version is the one in force on the period's end date. The full
    usage is priced on both the summer and the non-summer bimonthly ladders,
    and the two costs are blended by the share of days in each season.
    """

    def __init__(
        self,
        registry: RateVersionRegistry,
        season_strategy: TaiwanSeasonStrategy | None = None,
    ) -> None:
        self.registry = registry
        self.season_strategy = season_strategy or TaiwanSeasonStrategy()

    def compute(
        self, total_kwh: float, start_date: object, end_date: object
    ) -> BillingCalculationResult:
        if total_kwh is None or math.isnan(total_kwh):
            raise InvalidInputError("total_kwh must be a number")

        start = as_date(start_date)
        end = as_date(end_date)
        version = self.registry.resolve(end)
        split = self.season_strategy.split(start, end)

        breakdowns = {}
        for season in self.season_strategy.get_all_seasons():
            days = split.days_for(season)
            if total_kwh <= 0:
                breakdowns[season] = SeasonBreakdown(season, days, split.total_days)
                continue
            ladder = to_bimonthly(version.table_for(season))
            charges = _tiered_charges(total_kwh, ladder)
            breakdowns[season] = SeasonBreakdown(
                season=season,
                days=days,
                total_days=split.total_days,
                cost=sum(charge.cost for charge in charges),
                tiers=tuple(charges),
            )

        summer = breakdowns[SeasonType.SUMMER]
        non_summer = breakdowns[SeasonType.NON_SUMMER]
        bill = summer.weighted_cost + non_summer.weighted_cost
        return BillingCalculationResult(
            bill=bill,
            total_kwh=max(float(total_kwh), 0.0),
            version_id=version.version_id,
            split=split,
            summer=summer,
            non_summer=non_summer,
        )


def _tiered_charges(
    total_usage_kwh: float, tiers: list[BimonthlyTier]
) -> list[TierCharge]:
    remaining_kwh = total_usage_kwh
    charges = []
    for index, tier in enumerate(tiers):
        if remaining_kwh <= 0:
            break
        usage_in_tier_kwh = min(remaining_kwh, tier.width_kwh)
        charges.append(
            TierCharge(
                tier_index=index,
                kwh=usage_in_tier_kwh,
                unit_price=tier.unit_price,
                cost=usage_in_tier_kwh * tier.unit_price,
            )
        )
        remaining_kwh -= usage_in_tier_kwh
    if remaining_kwh > 0:
        _LOGGER.warning(
            "%.3f kWh left unpriced after exhausting the tier ladder", remaining_kwh
        )
    return charges


def compute(
    total_kwh: float,
    start_date: object,
    end_date: object,
    registry: RateVersionRegistry,
) -> BillingCalculationResult:
    return BillingCalculator(registry).compute(total_kwh, start_date, end_date)


__all__ = [
    "BillingCalculationResult",
    "BillingCalculator",
    "SeasonBreakdown",
    "TierCharge",
    "compute",
]
