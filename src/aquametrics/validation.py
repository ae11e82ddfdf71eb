"""Input validation for bill estimates and presentation rounding."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from datetime import date

from aquametrics.errors import InvalidInputError
from aquametrics.models import as_date
from aquametrics.seasons import period_length_days
from aquametrics.water import PumpSpec

MIN_ALLOWED_DATE = date(2020, 1, 1)
MAX_BILLING_PERIOD_DAYS = 70
MAX_BILL_AMOUNT = 50000.0
MIN_FIELD_AREA_FEN = 0.5
MAX_FIELD_AREA_FEN = 50.0
MAX_WELL_DEPTH_M = 200.0


@dataclass(frozen=True)
class PeriodValidation:
    valid: bool
    error: str | None = None
    warning: str | None = None


def validate_bill_amount(amount: float) -> float:
    if not _is_number(amount) or not 0 <= amount <= MAX_BILL_AMOUNT:
        raise InvalidInputError(
            f"bill amount must be between 0 and {MAX_BILL_AMOUNT:g} TWD, "
            f"got {amount!r}"
        )
    return float(amount)


def validate_field_area(fen: float) -> float:
    if not _is_number(fen) or not MIN_FIELD_AREA_FEN <= fen <= MAX_FIELD_AREA_FEN:
        raise InvalidInputError(
            f"field area must be between {MIN_FIELD_AREA_FEN:g} and "
            f"{MAX_FIELD_AREA_FEN:g} fen, got {fen!r}"
        )
    return float(fen)


def validate_pump(spec: PumpSpec) -> PumpSpec:
    if not _is_number(spec.horsepower) or spec.horsepower <= 0:
        raise InvalidInputError(f"horsepower must be positive, got {spec.horsepower!r}")
    if not _is_number(spec.efficiency) or not 0 < spec.efficiency <= 1.0:
        raise InvalidInputError(
            f"pump efficiency must be in (0, 1], got {spec.efficiency!r}"
        )
    depth = spec.well_depth_m
    if not _is_number(depth) or not 0 < depth <= MAX_WELL_DEPTH_M:
        raise InvalidInputError(
            f"well depth must be in (0, {MAX_WELL_DEPTH_M:g}] m, got {depth!r}"
        )
    return spec


def validate_billing_period(
    start_date: object, end_date: object, today: date | None = None
) -> PeriodValidation:
    """Check order and range of a billing period.

    Out-of-order or out-of-range periods are invalid. Unusually long periods
    and periods reaching into the future stay valid but carry a warning.
    """
    try:
        start = as_date(start_date)
        end = as_date(end_date)
    except InvalidInputError as exc:
        return PeriodValidation(False, error=str(exc))

    if end < start:
        return PeriodValidation(False, error="end date must not precede start date")

    today = today or date.today()
    max_date = _one_year_after(today)
    for value in (start, end):
        if not MIN_ALLOWED_DATE <= value <= max_date:
            return PeriodValidation(
                False,
                error=(
                    f"dates must be between {MIN_ALLOWED_DATE.isoformat()} "
                    f"and {max_date.isoformat()}"
                ),
            )

    if period_length_days(start, end) > MAX_BILLING_PERIOD_DAYS:
        return PeriodValidation(
            True,
            warning=(
                f"billing period is longer than {MAX_BILLING_PERIOD_DAYS} days; "
                f"check the dates"
            ),
        )
    if start > today or end > today:
        return PeriodValidation(True, warning="billing period includes future dates")
    return PeriodValidation(True)


def round_kwh(value: float) -> float:
    return round(value, 1)


def _one_year_after(day: date) -> date:
    try:
        return day.replace(year=day.year + 1)
    except ValueError:
        # Feb 29
        return day.replace(year=day.year + 1, day=28)


def _is_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


__all__ = [
    "MAX_BILLING_PERIOD_DAYS",
    "MIN_ALLOWED_DATE",
    "PeriodValidation",
    "round_kwh",
    "validate_bill_amount",
    "validate_billing_period",
    "validate_field_area",
    "validate_pump",
]
