import logging

import pytest

from aquametrics.billing import BillingCalculator
from aquametrics.solver import ReverseUsageSolver, SolverSettings


@pytest.fixture
def solver(registry) -> ReverseUsageSolver:
    return ReverseUsageSolver(BillingCalculator(registry))


@pytest.mark.parametrize(
    ("start", "end", "kwh"),
    [
        ("2024-07-01", "2024-07-31", 100.0),
        ("2024-07-01", "2024-08-31", 750.0),
        ("2024-05-15", "2024-06-14", 300.0),
        ("2022-11-01", "2022-12-31", 1234.5),
    ],
)
def test_round_trip(solver, registry, start, end, kwh) -> None:
    bill = BillingCalculator(registry).compute(kwh, start, end).bill
    result = solver.solve_detailed(bill, start, end)
    assert result.converged
    assert result.kwh == pytest.approx(kwh, abs=0.5)
    assert abs(result.bill - bill) < 0.01


def test_solve_returns_float(solver) -> None:
    kwh = solver.solve(210.0, "2024-07-01", "2024-07-31")
    assert isinstance(kwh, float)
    assert kwh == pytest.approx(100.0, abs=0.01)


def test_zero_bill_converges_near_zero(solver) -> None:
    result = solver.solve_detailed(0.0, "2024-07-01", "2024-07-31")
    assert result.converged
    assert result.kwh < 0.01


def test_iteration_cap(registry, caplog) -> None:
    solver = ReverseUsageSolver(
        BillingCalculator(registry), SolverSettings(max_iterations=3)
    )
    with caplog.at_level(logging.WARNING, logger="aquametrics.solver"):
        result = solver.solve_detailed(210.0, "2024-07-01", "2024-07-31")
    assert result.kwh == 2500.0
    assert result.iterations == 3
    assert not result.converged
    assert "not matched" in caplog.text


def test_bill_beyond_upper_bound(registry) -> None:
    solver = ReverseUsageSolver(
        BillingCalculator(registry), SolverSettings(upper_bound_kwh=1000.0)
    )
    result = solver.solve_detailed(1_000_000.0, "2024-07-01", "2024-07-31")
    assert not result.converged
    assert result.kwh == pytest.approx(1000.0)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"upper_bound_kwh": 0},
        {"max_iterations": 0},
        {"tolerance": 0},
        {"tolerance": -0.5},
    ],
)
def test_invalid_settings(kwargs) -> None:
    with pytest.raises(ValueError):
        SolverSettings(**kwargs)


def test_default_settings() -> None:
    settings = SolverSettings()
    assert settings.upper_bound_kwh == 20000.0
    assert settings.max_iterations == 100
    assert settings.tolerance == 0.01
