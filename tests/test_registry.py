import logging
from datetime import date

import pytest

from aquametrics.errors import NoApplicableVersion, RateDataError, RateResolutionError
from aquametrics.models import ElectricityType
from aquametrics.rates import StaticRateSource
from aquametrics.registry import RateVersionRegistry, load_registry


def test_resolve_by_date(registry) -> None:
    assert registry.resolve("2022-12-31").version_id == "2020-01-01"
    assert registry.resolve("2023-01-01").version_id == "2023-01-01"
    assert registry.resolve(date(2030, 5, 1)).version_id == "2023-01-01"


def test_resolve_outside_coverage(registry) -> None:
    with pytest.raises(NoApplicableVersion) as excinfo:
        registry.resolve("2019-12-31")
    error = excinfo.value
    assert isinstance(error, RateResolutionError)
    assert error.queried_date == date(2019, 12, 31)
    assert error.min_effective == date(2020, 1, 1)
    assert error.max_effective == date(9999, 12, 31)
    assert "2020-01-01" in str(error)


def test_versions_sorted_regardless_of_input_order(old_record, current_record) -> None:
    registry = RateVersionRegistry.from_source(
        StaticRateSource([current_record, old_record])
    )
    assert [v.version_id for v in registry.versions] == ["2020-01-01", "2023-01-01"]
    assert len(registry) == 2


def test_coverage_and_lookup(registry) -> None:
    assert registry.coverage() == (date(2020, 1, 1), date(9999, 12, 31))
    assert registry.get("2020-01-01").effective_to == date(2022, 12, 31)
    assert registry.current_version().version_id == "2023-01-01"
    assert registry.current_version().is_open_ended
    with pytest.raises(KeyError):
        registry.get("1999-01-01")


def test_crosses_version(registry) -> None:
    assert registry.crosses_version("2022-12-15", "2023-01-14") is True
    assert registry.crosses_version("2023-03-01", "2023-04-30") is False
    assert registry.crosses_version("2019-12-15", "2020-01-14") is False


def test_empty_history_rejected() -> None:
    with pytest.raises(RateDataError):
        RateVersionRegistry([])


def test_overlapping_versions_rejected(old_record, current_record) -> None:
    current_record["effective_from"] = "2022-12-01"
    with pytest.raises(RateDataError, match="overlapping"):
        RateVersionRegistry.from_source(StaticRateSource([old_record, current_record]))


def test_duplicate_version_ids_rejected(old_record, current_record) -> None:
    current_record["version_id"] = old_record["version_id"]
    with pytest.raises(RateDataError, match="Duplicate"):
        RateVersionRegistry.from_source(StaticRateSource([old_record, current_record]))


def test_inverted_range_rejected(old_record) -> None:
    old_record["effective_to"] = "2019-01-01"
    with pytest.raises(RateDataError, match="ends before"):
        RateVersionRegistry.from_source(StaticRateSource([old_record]))


def test_table_without_open_tier_rejected(old_record) -> None:
    old_record["summer"] = old_record["summer"][:-1]
    with pytest.raises(RateDataError, match="open-ended"):
        RateVersionRegistry.from_source(StaticRateSource([old_record]))


def test_gap_between_versions_logs_warning(old_record, current_record, caplog) -> None:
    current_record["effective_from"] = "2023-02-01"
    with caplog.at_level(logging.WARNING, logger="aquametrics.registry"):
        registry = RateVersionRegistry.from_source(
            StaticRateSource([old_record, current_record])
        )
    assert "gap" in caplog.text
    with pytest.raises(NoApplicableVersion):
        registry.resolve("2023-01-15")


def test_unequal_tier_counts_accepted(old_record) -> None:
    old_record["non_summer"] = [
        {"upper_bound_kwh": 500, "unit_price": 1.63},
        {"upper_bound_kwh": None, "unit_price": 2.68},
    ]
    registry = RateVersionRegistry.from_source(StaticRateSource([old_record]))
    version = registry.current_version()
    assert len(version.summer) == 3
    assert len(version.non_summer) == 2


@pytest.mark.parametrize("electricity_type", list(ElectricityType))
def test_bundled_history_loads(electricity_type) -> None:
    registry = load_registry(electricity_type)
    assert len(registry) == 5
    assert registry.coverage()[0] == date(2018, 4, 1)
    assert registry.current_version().is_open_ended
    assert registry.resolve("2024-07-31").version_id == "2024-04-01"
