"""Exception hierarchy for the billing engine."""

from __future__ import annotations

from datetime import date


class AquametricsError(Exception):
    """Base class for all library errors."""


class RateDataError(AquametricsError):
    """Rate records that break the structural invariants of a rate history."""


class InvalidInputError(AquametricsError, ValueError):
    """Caller-supplied value outside the accepted domain."""


class RateResolutionError(AquametricsError):
    pass


class NoApplicableVersion(RateResolutionError):
    """No known rate version covers the queried date."""

    def __init__(
        self,
        queried_date: date,
        min_effective: date | None,
        max_effective: date | None,
    ) -> None:
        self.queried_date = queried_date
        self.min_effective = min_effective
        self.max_effective = max_effective
        if min_effective is None or max_effective is None:
            coverage = "no rate versions are loaded"
        else:
            coverage = (
                f"known coverage is {min_effective.isoformat()} to "
                f"{max_effective.isoformat()}"
            )
        super().__init__(
            f"No rate version applies to {queried_date.isoformat()}; {coverage}"
        )


class InvalidRangeError(AquametricsError):
    pass


class EndBeforeStart(InvalidRangeError):
    def __init__(self, start_date: date, end_date: date) -> None:
        self.start_date = start_date
        self.end_date = end_date
        super().__init__(
            f"end date {end_date.isoformat()} is before start date "
            f"{start_date.isoformat()}"
        )


__all__ = [
    "AquametricsError",
    "EndBeforeStart",
    "InvalidInputError",
    "InvalidRangeError",
    "NoApplicableVersion",
    "RateDataError",
    "RateResolutionError",
]
