"""Shared data structures for the billing engine."""

from __future__ import annotations

import functools
import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterator

from aquametrics.errors import InvalidInputError

# Sentinel used by rate tables for the version that is still in force.
OPEN_ENDED_DATE = date(9999, 12, 31)


class SeasonType(Enum):
    SUMMER = "summer"
    NON_SUMMER = "non_summer"

    @property
    def label(self) -> str:
        return "夏月" if self is SeasonType.SUMMER else "非夏月"


class ElectricityType(Enum):
    """Taipower non-TOU lighting tariff classes (表燈非時間電價)."""

    NON_BUSINESS = "non_business"
    BUSINESS = "business"
    RESIDENTIAL = "residential"

    @property
    def label(self) -> str:
        return {
            ElectricityType.NON_BUSINESS: "表燈非營業用",
            ElectricityType.BUSINESS: "表燈營業用",
            ElectricityType.RESIDENTIAL: "住宅用",
        }[self]


@dataclass(frozen=True)
class Tier:
    upper_bound_kwh: float | None
    unit_price: float

    @property
    def is_open(self) -> bool:
        return self.upper_bound_kwh is None


@dataclass(frozen=True)
class SeasonTierTable:
    """Monthly progressive tiers for one season, ascending by upper bound."""

    tiers: tuple[Tier, ...]

    def __iter__(self) -> Iterator[Tier]:
        return iter(self.tiers)

    def __len__(self) -> int:
        return len(self.tiers)

    def describe(self) -> list[dict[str, Any]]:
        return [
            {"upper_bound_kwh": tier.upper_bound_kwh, "unit_price": tier.unit_price}
            for tier in self.tiers
        ]


@dataclass(frozen=True)
class BimonthlyTier:
    width_kwh: float
    unit_price: float

    @property
    def is_open(self) -> bool:
        return math.isinf(self.width_kwh)


@dataclass(frozen=True)
class RateVersion:
    version_id: str
    effective_from: date
    effective_to: date
    summer: SeasonTierTable
    non_summer: SeasonTierTable

    def contains(self, target: date) -> bool:
        return self.effective_from <= target <= self.effective_to

    def table_for(self, season: SeasonType) -> SeasonTierTable:
        return self.summer if season is SeasonType.SUMMER else self.non_summer

    @property
    def is_open_ended(self) -> bool:
        return self.effective_to == OPEN_ENDED_DATE

    def describe(self) -> dict[str, Any]:
        return {
            "version_id": self.version_id,
            "effective_from": self.effective_from.isoformat(),
            "effective_to": self.effective_to.isoformat(),
            "summer": self.summer.describe(),
            "non_summer": self.non_summer.describe(),
        }


@dataclass(frozen=True)
class SeasonalSplit:
    summer_days: int
    non_summer_days: int
    total_days: int

    def __post_init__(self) -> None:
        if self.summer_days + self.non_summer_days != self.total_days:
            raise ValueError("summer_days + non_summer_days must equal total_days")

    def days_for(self, season: SeasonType) -> int:
        if season is SeasonType.SUMMER:
            return self.summer_days
        return self.non_summer_days

    def weight(self, season: SeasonType) -> float:
        if self.total_days == 0:
            return 0.0
        return self.days_for(season) / self.total_days


@functools.singledispatch
def as_date(value: object) -> date:
    """Coerce a date-like value (date, datetime, Timestamp, ISO string)."""
    raise InvalidInputError(f"Unsupported date type: {type(value)}")


@as_date.register(date)
def _(value: date) -> date:
    return value


@as_date.register(datetime)
def _(value: datetime) -> date:
    return value.date()


@as_date.register(str)
def _(value: str) -> date:
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError as exc:
        raise InvalidInputError(f"Invalid ISO date: {value!r}") from exc


__all__ = [
    "OPEN_ENDED_DATE",
    "BimonthlyTier",
    "ElectricityType",
    "RateVersion",
    "SeasonTierTable",
    "SeasonType",
    "SeasonalSplit",
    "Tier",
    "as_date",
]
