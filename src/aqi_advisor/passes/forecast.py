"""Hourly AQI forecast synthesis and coercion."""
from __future__ import annotations

import random

from ..formula import DEFAULT_CONSTANTS, FormulaConstants, aqi_level, governing_aqi, round_half_up
from ..international.currency import coerce_count
from ..models.recommendation import FORECAST_HOURS, HourlyForecastEntry


def hour_label(hour: int) -> str:
    return f"+{hour}h"


def synthesize_entry(
    hour: int, current_aqi: float | None, rng: random.Random,
    constants: FormulaConstants = DEFAULT_CONSTANTS,
) -> HourlyForecastEntry:
    """Current AQI plus a uniform integer perturbation in ``±forecast_spread``."""
    spread = constants.forecast_spread
    value = max(0, round_half_up(governing_aqi(current_aqi)) + rng.randint(-spread, spread))
    return HourlyForecastEntry(time=hour_label(hour), aqi=value, level=aqi_level(value))


def synthesize_forecast(
    current_aqi: float | None, rng: random.Random,
    constants: FormulaConstants = DEFAULT_CONSTANTS,
) -> list[HourlyForecastEntry]:
    return [synthesize_entry(hour, current_aqi, rng, constants) for hour in range(1, FORECAST_HOURS + 1)]


def coerce_entry(raw, hour: int) -> HourlyForecastEntry | None:
    """Turn one model-supplied forecast entry into a valid one, or ``None``."""
    if not isinstance(raw, dict):
        return None
    value = coerce_count(raw.get("aqi"))
    if value is None:
        return None
    value = max(0, round_half_up(value))

    time_label = raw.get("time")
    if not isinstance(time_label, str) or not time_label.strip():
        time_label = hour_label(hour)
    level = raw.get("level")
    if not isinstance(level, str) or not level.strip():
        level = aqi_level(value)
    return HourlyForecastEntry(time=time_label, aqi=value, level=level)
