"""Summer / non-summer day counting for billing periods.

Taipower prices the summer months (June 1 to September 30) higher than the
rest of the year. A billing period that straddles the boundary is billed on
both season ladders and blended by day count, so the engine needs exact
per-season day counts rather than a single season label.
"""

from __future__ import annotations

import logging
from datetime import date

import numpy as np
import pandas as pd

from aquametrics.errors import EndBeforeStart
from aquametrics.models import SeasonalSplit, SeasonType, as_date

_LOGGER = logging.getLogger(__name__)

SUMMER_START = (6, 1)
SUMMER_END = (9, 30)


class TaiwanSeasonStrategy:
    def __init__(
        self,
        summer_start: tuple[int, int] = SUMMER_START,
        summer_end: tuple[int, int] = SUMMER_END,
    ) -> None:
        self._start = summer_start
        self._end = summer_end

    def get_season(self, target: date) -> SeasonType:
        current = (target.month, target.day)
        start = self._start
        end = self._end
        if start <= end:
            return (
                SeasonType.SUMMER if start <= current <= end else SeasonType.NON_SUMMER
            )
        return (
            SeasonType.SUMMER
            if current >= start or current <= end
            else SeasonType.NON_SUMMER
        )

    def get_all_seasons(self) -> list[SeasonType]:
        return [SeasonType.SUMMER, SeasonType.NON_SUMMER]

    def summer_mask(self, days: pd.DatetimeIndex) -> np.ndarray:
        """Vectorized get_season for a run of calendar days."""
        keys = np.asarray(days.month * 100 + days.day)
        start = self._start[0] * 100 + self._start[1]
        end = self._end[0] * 100 + self._end[1]
        if start <= end:
            return (keys >= start) & (keys <= end)
        return (keys >= start) | (keys <= end)

    def split(self, start_date: object, end_date: object) -> SeasonalSplit:
        start = as_date(start_date)
        end = as_date(end_date)
        if end < start:
            raise EndBeforeStart(start, end)

        days = pd.date_range(start, end, freq="D")
        summer_days = int(np.count_nonzero(self.summer_mask(days)))
        total_days = len(days)
        return SeasonalSplit(
            summer_days=summer_days,
            non_summer_days=total_days - summer_days,
            total_days=total_days,
        )

    def determine_season(self, start_date: object, end_date: object) -> SeasonType:
        """Majority season of the period; a tie goes to the closing date's season."""
        split = self.split(start_date, end_date)
        if split.summer_days > split.non_summer_days:
            return SeasonType.SUMMER
        if split.non_summer_days > split.summer_days:
            return SeasonType.NON_SUMMER
        season = self.get_season(as_date(end_date))
        _LOGGER.debug(
            "Season tie over %s days resolved to %s by end date",
            split.total_days,
            season.value,
        )
        return season

    def crosses_boundary(self, start_date: object, end_date: object) -> bool:
        start = as_date(start_date)
        end = as_date(end_date)
        return self.get_season(start) is not self.get_season(end)

    def is_boundary_date(self, target: object) -> bool:
        """True on the first or last day of either season."""
        day = as_date(target)
        current = (day.month, day.day)
        before_start = _previous_day(self._start)
        after_end = _next_day(self._end)
        return current in (self._start, self._end, before_start, after_end)


def _previous_day(month_day: tuple[int, int]) -> tuple[int, int]:
    # Leap years only matter for Mar 1; a non-leap reference year is used.
    current = date(2023, *month_day)
    previous = date.fromordinal(current.toordinal() - 1)
    return (previous.month, previous.day)


def _next_day(month_day: tuple[int, int]) -> tuple[int, int]:
    current = date(2023, *month_day)
    following = date.fromordinal(current.toordinal() + 1)
    return (following.month, following.day)


_DEFAULT_STRATEGY = TaiwanSeasonStrategy()


def split(start_date: object, end_date: object) -> SeasonalSplit:
    return _DEFAULT_STRATEGY.split(start_date, end_date)


def determine_season(start_date: object, end_date: object) -> SeasonType:
    return _DEFAULT_STRATEGY.determine_season(start_date, end_date)


def crosses_boundary(start_date: object, end_date: object) -> bool:
    return _DEFAULT_STRATEGY.crosses_boundary(start_date, end_date)


def is_boundary_date(target: object) -> bool:
    return _DEFAULT_STRATEGY.is_boundary_date(target)


def period_length_days(start_date: object, end_date: object) -> int:
    """Inclusive number of calendar days between two dates (order-insensitive)."""
    start = as_date(start_date)
    end = as_date(end_date)
    return abs((end - start).days) + 1


__all__ = [
    "SUMMER_END",
    "SUMMER_START",
    "TaiwanSeasonStrategy",
    "crosses_boundary",
    "determine_season",
    "is_boundary_date",
    "period_length_days",
    "split",
]
