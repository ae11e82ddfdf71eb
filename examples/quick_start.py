"""Quick Start Guide - from a paid bill to kWh and irrigation water.

This example walks through the most common use cases.
"""

from __future__ import annotations

import aquametrics as aq


def main():
    # =============================================================================
    # Example 1: Bill for a known usage (由用電度數計算電費)
    # =============================================================================

    print("=" * 60)
    print("Example 1: Forward Billing")
    print("=" * 60)

    result = aq.compute(800, "2024-07-01", "2024-08-31")
    print(f"Rate version: {result.version_id}")
    print(f"Usage: {result.total_kwh:.0f} kWh")
    print(f"Bill: {result.bill:.2f} TWD")
    print()
    print(result.to_frame().to_string(index=False))
    print()

    # =============================================================================
    # Example 2: Usage from a paid bill (由電費反推用電度數)
    # =============================================================================

    print("=" * 60)
    print("Example 2: Reverse Calculation")
    print("=" * 60)

    kwh = aq.solve(2500, "2024-07-01", "2024-08-31")
    print("Bill: 2500 TWD (2024-07-01 ~ 2024-08-31)")
    print(f"Estimated usage: {aq.round_kwh(kwh)} kWh")
    print()

    # =============================================================================
    # Example 3: Period crossing the summer boundary (跨季計費)
    # =============================================================================

    print("=" * 60)
    print("Example 3: Cross-Season Period")
    print("=" * 60)

    start, end = "2024-05-15", "2024-07-14"
    split = aq.split(start, end)
    result = aq.compute(800, start, end)
    season = aq.determine_season(start, end)
    print(f"{split.summer_days} summer days, {split.non_summer_days} non-summer days")
    print(f"Summer ladder cost:     {result.summer.cost:8.2f} TWD")
    print(f"Non-summer ladder cost: {result.non_summer.cost:8.2f} TWD")
    print(f"Blended bill:           {result.bill:8.2f} TWD")
    print(f"Main season: {season.label}")
    print()

    # =============================================================================
    # Example 4: Irrigation water estimate (抽水量估算)
    # =============================================================================

    print("=" * 60)
    print("Example 4: Water Volume")
    print("=" * 60)

    pump = aq.PumpSpec(horsepower=5, efficiency=0.75, well_depth_m=30)
    estimate = aq.estimate(
        1200, "2024-07-01", "2024-08-31", pump=pump, field_area_fen=3
    )
    for key, value in estimate.describe().items():
        print(f"{key:25s}: {value}")
    print()

    # =============================================================================
    # Example 5: Compare electricity types (比較電價類別)
    # =============================================================================

    print("=" * 60)
    print("Example 5: Electricity Types")
    print("=" * 60)

    for electricity_type in aq.ElectricityType:
        result = aq.compute(800, "2024-07-01", "2024-08-31", electricity_type)
        print(f"{electricity_type.label:10s}: {result.bill:8.2f} TWD")

    print()
    print("=" * 60)
    print("Quick Start Complete!")
    print("More examples: csv_import.py")
    print("=" * 60)


if __name__ == "__main__":
    main()
