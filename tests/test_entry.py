from datetime import date

import pytest

import aquametrics as aq


@pytest.mark.parametrize(
    ("electricity_type", "expected"),
    [
        (aq.ElectricityType.NON_BUSINESS, 178.0),
        (aq.ElectricityType.RESIDENTIAL, 168.0),
        (aq.ElectricityType.BUSINESS, 316.0),
    ],
)
def test_entry_compute_with_bundled_rates(electricity_type, expected) -> None:
    result = aq.compute(100, "2024-07-01", "2024-07-31", electricity_type)
    assert result.bill == pytest.approx(expected)
    assert result.version_id == "2024-04-01"


def test_entry_solve_round_trip() -> None:
    kwh = aq.solve(178.0, "2024-07-01", "2024-07-31")
    assert aq.round_kwh(kwh) == 100.0


def test_entry_estimate_defaults() -> None:
    result = aq.estimate(1500, date(2024, 8, 1), date(2024, 9, 30))
    assert result.season is aq.SeasonType.SUMMER
    assert result.version_id == "2024-04-01"
    bill = aq.compute(result.raw_kwh, "2024-08-01", "2024-09-30").bill
    assert bill == pytest.approx(1500, abs=0.01)


def test_entry_accepts_injected_registry(registry) -> None:
    result = aq.compute(100, "2024-07-01", "2024-07-31", registry=registry)
    assert result.bill == pytest.approx(210.0)


def test_entry_date_before_history() -> None:
    with pytest.raises(aq.NoApplicableVersion) as excinfo:
        aq.compute(100, "2018-01-01", "2018-02-28")
    assert excinfo.value.min_effective == date(2018, 4, 1)
    assert isinstance(excinfo.value, aq.AquametricsError)


def test_entry_season_helpers() -> None:
    assert aq.determine_season("2024-05-30", "2024-06-02") is aq.SeasonType.SUMMER
    assert aq.crosses_boundary("2024-05-15", "2024-06-14")
    assert aq.is_boundary_date("2024-10-01")
    assert aq.period_length_days("2024-06-01", "2024-07-31") == 61
    assert aq.split("2024-05-15", "2024-06-14").summer_days == 14


def test_entry_public_names() -> None:
    for name in aq.__all__:
        assert hasattr(aq, name), name
