"""Closed-form formulas keyed on AQI.

These functions are the only place tree counts, costs, carbon figures and
projected air quality are computed. Both the validator (which corrects model
output) and the fallback generator (which needs no model) call into here, so a
constant changed in ``FormulaConstants`` changes both paths together.
"""
from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field


class TierBand(BaseModel):
    """An AQI range and the trees-per-AQI-point multipliers that apply to it."""

    model_config = ConfigDict(frozen=True)

    upper: float  # inclusive
    multiplier_low: int
    multiplier_high: int


TIER_BANDS: tuple[TierBand, ...] = (
    TierBand(upper=50, multiplier_low=50, multiplier_high=100),
    TierBand(upper=100, multiplier_low=100, multiplier_high=150),
    TierBand(upper=150, multiplier_low=150, multiplier_high=200),
    TierBand(upper=200, multiplier_low=200, multiplier_high=250),
    TierBand(upper=300, multiplier_low=250, multiplier_high=300),
    TierBand(upper=math.inf, multiplier_low=300, multiplier_high=400),
)

AQI_LEVELS: tuple[tuple[float, str], ...] = (
    (50, "Good"),
    (100, "Moderate"),
    (150, "Unhealthy for Sensitive Groups"),
    (200, "Unhealthy"),
    (300, "Very Unhealthy"),
    (math.inf, "Hazardous"),
)


class FormulaConstants(BaseModel):
    """Coefficients shared by validation and fallback generation."""

    model_config = ConfigDict(frozen=True)

    cost_per_tree: int = Field(default=4000, gt=0)  # rupees
    annual_carbon_per_tree: float = 0.02  # tonnes CO2 / year
    lifetime_carbon_per_tree: float = 0.5  # tonnes CO2
    pollution_reduction_scale: float = Field(default=2500, gt=0)  # trees per percentage point
    reduction_floor_pct: int = 5
    reduction_ceiling_pct: int = 35
    improvement_cap: float = Field(default=0.30, ge=0.0, lt=1.0)
    improvement_normalizer: float = Field(default=100_000, gt=0)
    maintenance_rate: float = Field(default=0.05, ge=0.0)
    tree_tolerance: float = Field(default=0.20, ge=0.0)
    investment_tolerance: float = Field(default=0.30, ge=0.0)
    forecast_spread: int = Field(default=10, ge=0)


DEFAULT_CONSTANTS = FormulaConstants()


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def governing_aqi(aqi: float | None) -> float:
    """Absent or negative readings count as 0."""
    if aqi is None or aqi < 0:
        return 0.0
    return float(aqi)


def tier_for(aqi: float | None) -> TierBand:
    value = governing_aqi(aqi)
    for band in TIER_BANDS:
        if value <= band.upper:
            return band
    return TIER_BANDS[-1]


def expected_tree_range(aqi: float | None) -> tuple[int, int]:
    """Return ``(expected_min, expected_max)`` trees for an AQI reading."""
    value = governing_aqi(aqi)
    band = tier_for(value)
    return round_half_up(value * band.multiplier_low), round_half_up(value * band.multiplier_high)


def tree_band_midpoint(aqi: float | None) -> int:
    low, high = expected_tree_range(aqi)
    return round_half_up((low + high) / 2)


def tree_count_within_tolerance(
    trees: float, aqi: float | None, constants: FormulaConstants = DEFAULT_CONSTANTS
) -> bool:
    low, high = expected_tree_range(aqi)
    return low * (1 - constants.tree_tolerance) <= trees <= high * (1 + constants.tree_tolerance)


def investment_for(trees: int, constants: FormulaConstants = DEFAULT_CONSTANTS) -> int:
    return trees * constants.cost_per_tree


def investment_within_tolerance(
    candidate: float, expected: float, constants: FormulaConstants = DEFAULT_CONSTANTS
) -> bool:
    tolerance = constants.investment_tolerance
    return expected * (1 - tolerance) <= candidate <= expected * (1 + tolerance)


def annual_carbon(trees: int, constants: FormulaConstants = DEFAULT_CONSTANTS) -> float:
    return trees * constants.annual_carbon_per_tree


def lifetime_carbon(trees: int, constants: FormulaConstants = DEFAULT_CONSTANTS) -> float:
    return trees * constants.lifetime_carbon_per_tree


def pollution_reduction_pct(trees: int, constants: FormulaConstants = DEFAULT_CONSTANTS) -> int:
    raw = round_half_up(trees / constants.pollution_reduction_scale)
    return _clamp(raw, constants.reduction_floor_pct, constants.reduction_ceiling_pct)


def improvement_factor(trees: int, constants: FormulaConstants = DEFAULT_CONSTANTS) -> float:
    cap = constants.improvement_cap
    return min(cap, (max(trees, 0) / constants.improvement_normalizer) * cap)


def projected_aqi(
    aqi: float | None, trees: int, constants: FormulaConstants = DEFAULT_CONSTANTS
) -> int:
    """AQI expected after planting ``trees``.

    The reduction never exceeds ``improvement_cap``, except that planting any
    trees always improves a positive reading by at least one point.
    """
    current = governing_aqi(aqi)
    projected = round_half_up(current * (1 - improvement_factor(trees, constants)))
    floor = math.ceil(current * (1 - constants.improvement_cap) - 1e-9)
    projected = max(0, floor, projected)
    if trees > 0 and current > 0:
        projected = min(projected, max(0, math.ceil(current) - 1))
    return projected


def pm_reduction_pct(trees: int, constants: FormulaConstants = DEFAULT_CONSTANTS) -> int:
    raw = round_half_up(improvement_factor(trees, constants) * 100)
    return _clamp(raw, constants.reduction_floor_pct, constants.reduction_ceiling_pct)


def improvement_pct(before: float, after: float) -> int:
    if before <= 0:
        return 0
    return round_half_up((before - after) / before * 100)


def maintenance_for(investment: float, constants: FormulaConstants = DEFAULT_CONSTANTS) -> int:
    return round_half_up(investment * constants.maintenance_rate)


def aqi_level(aqi: float) -> str:
    for upper, label in AQI_LEVELS:
        if aqi <= upper:
            return label
    return AQI_LEVELS[-1][1]
