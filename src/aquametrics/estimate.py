"""End-to-end estimate: paid bill -> usage -> irrigation water volume."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import pandas as pd

from aquametrics.billing import BillingCalculationResult, BillingCalculator
from aquametrics.models import ElectricityType, SeasonType, as_date
from aquametrics.registry import RateVersionRegistry, load_registry
from aquametrics.solver import ReverseUsageSolver, SolverSettings
from aquametrics.validation import (
    round_kwh,
    validate_bill_amount,
    validate_field_area,
    validate_pump,
)
from aquametrics.water import (
    PumpSpec,
    flow_rate,
    is_over_extraction,
    monthly_volume,
)

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class UsageEstimate:
    kwh: float
    raw_kwh: float
    bill_amount: float
    season: SeasonType
    crosses_season_boundary: bool
    crosses_rate_version: bool
    version_id: str
    calculation: BillingCalculationResult
    flow_rate_lps: float = 0.0
    volume_m3: float = 0.0
    over_extraction: bool = False

    def describe(self) -> dict[str, Any]:
        return {
            "kwh": self.kwh,
            "bill_amount": self.bill_amount,
            "season": self.season.value,
            "crosses_season_boundary": self.crosses_season_boundary,
            "crosses_rate_version": self.crosses_rate_version,
            "version_id": self.version_id,
            "flow_rate_lps": self.flow_rate_lps,
            "volume_m3": self.volume_m3,
            "over_extraction": self.over_extraction,
        }


def estimate(
    bill_amount: float,
    start_date: object,
    end_date: object,
    electricity_type: ElectricityType = ElectricityType.NON_BUSINESS,
    pump: PumpSpec | None = None,
    field_area_fen: float | None = None,
    registry: RateVersionRegistry | None = None,
    settings: SolverSettings | None = None,
) -> UsageEstimate:
    """Estimate usage and irrigation volume for one paid bill.

    Args:
        bill_amount: Paid energy charge in TWD.
        start_date: First day of the billing period.
        end_date: Last day of the billing period; selects the rate version.
        electricity_type: Tariff class used when ``registry`` is omitted.
        pump: Pump specification; defaults to a 5 HP pump at 75% efficiency
            drawing from 30 m.
        field_area_fen: Irrigated area. Water figures stay zero without it.
        registry: Rate history to price against.
        settings: Solver bounds.

    Raises:
        InvalidInputError: For out-of-range bill, pump or field inputs.
        InvalidRangeError: If the period ends before it starts.
        RateResolutionError: If no rate version covers ``end_date``.
    """
    bill_amount = validate_bill_amount(bill_amount)
    pump = validate_pump(pump or PumpSpec())
    if field_area_fen is not None:
        field_area_fen = validate_field_area(field_area_fen)

    start = as_date(start_date)
    end = as_date(end_date)
    registry = registry or load_registry(electricity_type)
    calculator = BillingCalculator(registry)
    solver = ReverseUsageSolver(calculator, settings)

    raw_kwh = solver.solve(bill_amount, start, end)
    calculation = calculator.compute(raw_kwh, start, end)
    strategy = calculator.season_strategy
    kwh = round_kwh(raw_kwh)

    rate = 0.0
    volume = 0.0
    if field_area_fen:
        rate = flow_rate(pump.horsepower, pump.efficiency, pump.well_depth_m)
        volume = monthly_volume(rate, kwh, pump.horsepower, field_area_fen)

    return UsageEstimate(
        kwh=kwh,
        raw_kwh=raw_kwh,
        bill_amount=bill_amount,
        season=strategy.determine_season(start, end),
        crosses_season_boundary=strategy.crosses_boundary(start, end),
        crosses_rate_version=registry.crosses_version(start, end),
        version_id=calculation.version_id,
        calculation=calculation,
        flow_rate_lps=rate,
        volume_m3=volume,
        over_extraction=is_over_extraction(volume),
    )


def estimate_batch(
    records: pd.DataFrame,
    electricity_type: ElectricityType = ElectricityType.NON_BUSINESS,
    pump: PumpSpec | None = None,
    registry: RateVersionRegistry | None = None,
    settings: SolverSettings | None = None,
) -> pd.DataFrame:
    """Estimate every row of a frame with bill_amount/start/end columns.

    An optional ``field_area_fen`` column enables the water figures per row.
    """
    missing = {"bill_amount", "start", "end"} - set(records.columns)
    if missing:
        raise KeyError(f"records are missing columns: {sorted(missing)}")

    registry = registry or load_registry(electricity_type)
    has_area = "field_area_fen" in records.columns
    rows = []
    for index, row in records.iterrows():
        area = row["field_area_fen"] if has_area else None
        if area is not None and pd.isna(area):
            area = None
        result = estimate(
            float(row["bill_amount"]),
            row["start"],
            row["end"],
            pump=pump,
            field_area_fen=area,
            registry=registry,
            settings=settings,
        )
        record = result.describe()
        record["index"] = index
        rows.append(record)

    _LOGGER.debug("Estimated %d billing records", len(rows))
    columns = [
        "kwh",
        "bill_amount",
        "season",
        "crosses_season_boundary",
        "crosses_rate_version",
        "version_id",
        "flow_rate_lps",
        "volume_m3",
        "over_extraction",
    ]
    if not rows:
        return pd.DataFrame(columns=columns, index=records.index)
    return pd.DataFrame(rows).set_index("index").rename_axis(records.index.name)[
        columns
    ]


__all__ = ["UsageEstimate", "estimate", "estimate_batch"]
