"""CSV Import Example - Estimate usage for a season of paid bills.

This example shows how to:
1. Read a CSV file of bills with Chinese column names
2. Estimate kWh and water volume for every bill
3. Export the results
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

import aquametrics as aq


def create_sample_csv(filename: str = "sample_bills.csv") -> None:
    """Create a sample CSV file for demonstration."""
    data = {
        "井號": ["A-01", "A-02", "B-01", "B-02"],
        "電費": [820, 2450, 1310, 560],
        "起始日": ["2024-05-15", "2024-07-01", "2024-09-01", "2024-11-01"],
        "結束日": ["2024-07-14", "2024-08-31", "2024-10-31", "2024-12-31"],
        "面積(分)": [2.0, 5.5, 3.0, None],
    }
    pd.DataFrame(data).to_csv(filename, index=False, encoding="utf-8-sig")
    print(f"Created sample file: {filename}")


def import_bills(filename: str) -> pd.DataFrame:
    """Map Chinese column names to the estimator's columns."""
    df = pd.read_csv(filename, encoding="utf-8-sig")
    df = df.rename(
        columns={
            "電費": "bill_amount",
            "起始日": "start",
            "結束日": "end",
            "面積(分)": "field_area_fen",
        }
    )
    return df.set_index("井號")


def main() -> None:
    print("CSV Import Example")
    print("=" * 60)
    print()

    print("Step 1: Creating sample CSV file...")
    create_sample_csv("sample_bills.csv")
    print()

    print("Step 2: Importing CSV file...")
    bills = import_bills("sample_bills.csv")
    print(f"Imported {len(bills)} bills")
    print()

    print("Step 3: Estimating usage and water volume...")
    pump = aq.PumpSpec(horsepower=7.5, efficiency=0.7, well_depth_m=40)
    results = aq.estimate_batch(bills, pump=pump)
    print(results[["kwh", "season", "version_id", "volume_m3"]].to_string())
    print()

    print("Step 4: Exporting results to CSV...")
    results.to_csv("estimates.csv", encoding="utf-8-sig")
    print("Results exported to: estimates.csv")
    print()

    Path("sample_bills.csv").unlink(missing_ok=True)
    Path("estimates.csv").unlink(missing_ok=True)

    print("=" * 60)
    print("CSV Import Example Complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
