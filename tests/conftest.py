from __future__ import annotations

import copy

import pytest

from aquametrics.rates import StaticRateSource
from aquametrics.registry import RateVersionRegistry

OLD_RECORD = {
    "version_id": "2020-01-01",
    "effective_from": "2020-01-01",
    "effective_to": "2022-12-31",
    "summer": [
        {"upper_bound_kwh": 120, "unit_price": 1.63},
        {"upper_bound_kwh": 330, "unit_price": 2.38},
        {"upper_bound_kwh": None, "unit_price": 3.52},
    ],
    "non_summer": [
        {"upper_bound_kwh": 120, "unit_price": 1.63},
        {"upper_bound_kwh": 330, "unit_price": 2.10},
        {"upper_bound_kwh": None, "unit_price": 2.68},
    ],
}

CURRENT_RECORD = {
    "version_id": "2023-01-01",
    "effective_from": "2023-01-01",
    "effective_to": "9999-12-31",
    "summer": [
        {"upper_bound_kwh": 120, "unit_price": 2.10},
        {"upper_bound_kwh": 330, "unit_price": 3.02},
        {"upper_bound_kwh": None, "unit_price": 4.39},
    ],
    "non_summer": [
        {"upper_bound_kwh": 120, "unit_price": 1.80},
        {"upper_bound_kwh": 330, "unit_price": 2.50},
        {"upper_bound_kwh": None, "unit_price": 3.50},
    ],
}


@pytest.fixture
def old_record() -> dict:
    return copy.deepcopy(OLD_RECORD)


@pytest.fixture
def current_record() -> dict:
    return copy.deepcopy(CURRENT_RECORD)


@pytest.fixture
def registry() -> RateVersionRegistry:
    """Two synthetic rate versions covering 2020-01-01 onwards."""
    return RateVersionRegistry.from_source(
        StaticRateSource([OLD_RECORD, CURRENT_RECORD])
    )
