"""Progressive tier ladders and their bimonthly equivalents."""

from __future__ import annotations

from aquametrics.errors import RateDataError
from aquametrics.models import BimonthlyTier, SeasonTierTable

BILLING_CYCLE_MONTHS = 2


def to_bimonthly(
    monthly_tiers: SeasonTierTable, cycle_months: int = BILLING_CYCLE_MONTHS
) -> list[BimonthlyTier]:
    """Convert monthly tier boundaries into per-cycle tier widths.

    Each tier's incremental width (distance from the previous boundary) is
    multiplied by the number of months in the billing cycle. Taipower meters
    agricultural and lighting customers every other month, so the default
    doubles the monthly allowances. The open-ended tier keeps an infinite
    width.
    """
    result = []
    previous_bound = 0.0
    for tier in monthly_tiers:
        if tier.upper_bound_kwh is None:
            result.append(BimonthlyTier(float("inf"), tier.unit_price))
            continue
        width = (tier.upper_bound_kwh - previous_bound) * cycle_months
        result.append(BimonthlyTier(width, tier.unit_price))
        previous_bound = tier.upper_bound_kwh
    return result


def validate_table(table: SeasonTierTable, name: str = "tier table") -> None:
    """Raise RateDataError unless the table is a well-formed tier ladder."""
    if not table.tiers:
        raise RateDataError(f"{name} has no tiers")

    open_tiers = [tier for tier in table if tier.upper_bound_kwh is None]
    if len(open_tiers) != 1:
        raise RateDataError(
            f"{name} must have exactly one open-ended tier, found {len(open_tiers)}"
        )
    if table.tiers[-1].upper_bound_kwh is not None:
        raise RateDataError(f"{name} must end with the open-ended tier")

    previous_bound = 0.0
    for bound in [tier.upper_bound_kwh for tier in table.tiers[:-1]]:
        if bound <= previous_bound:
            raise RateDataError(
                f"{name} boundaries must be strictly increasing: "
                f"{bound} after {previous_bound}"
            )
        previous_bound = bound

    for tier in table:
        if tier.unit_price <= 0:
            raise RateDataError(f"{name} has non-positive price {tier.unit_price}")
