"""Irrigation water estimates derived from pump specs and electricity usage."""

from __future__ import annotations

from dataclasses import dataclass

# 1 fen (分) of farmland in hectares.
HECTARES_PER_FEN = 0.0969


@dataclass(frozen=True)
class WaterConstants:
    gravity_constant: float = 0.222
    safety_factor: float = 1.2
    minutes_per_hour: float = 60.0
    hours_per_kwh_divisor: float = 2.0
    over_extraction_threshold_m3: float = 2000.0


@dataclass(frozen=True)
class PumpSpec:
    horsepower: float = 5.0
    efficiency: float = 0.75
    well_depth_m: float = 30.0


DEFAULT_CONSTANTS = WaterConstants()


def flow_rate(
    horsepower: float,
    efficiency: float,
    well_depth_m: float,
    constants: WaterConstants = DEFAULT_CONSTANTS,
) -> float:
    """Pump flow rate Q in L/s: Q = (P x eff) / (0.222 x H x 1.2)."""
    if not horsepower or not efficiency or not well_depth_m:
        return 0.0
    return (horsepower * efficiency) / (
        constants.gravity_constant * well_depth_m * constants.safety_factor
    )


def monthly_volume(
    flow_rate_lps: float,
    kwh: float,
    horsepower: float,
    field_area_fen: float,
    constants: WaterConstants = DEFAULT_CONSTANTS,
) -> float:
    """Water volume V in m3: V = (Q x 60 x kWh) / (2 x P x area)."""
    if not flow_rate_lps or not kwh or not horsepower or not field_area_fen:
        return 0.0
    return (flow_rate_lps * constants.minutes_per_hour * kwh) / (
        constants.hours_per_kwh_divisor * horsepower * field_area_fen
    )


def hectares_to_fen(hectares: float) -> float:
    return hectares / HECTARES_PER_FEN


def fen_to_hectares(fen: float) -> float:
    return fen * HECTARES_PER_FEN


def is_over_extraction(
    volume_m3: float, constants: WaterConstants = DEFAULT_CONSTANTS
) -> bool:
    return volume_m3 > constants.over_extraction_threshold_m3


__all__ = [
    "DEFAULT_CONSTANTS",
    "HECTARES_PER_FEN",
    "PumpSpec",
    "WaterConstants",
    "fen_to_hectares",
    "flow_rate",
    "hectares_to_fen",
    "is_over_extraction",
    "monthly_volume",
]
