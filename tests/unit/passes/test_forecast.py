"""Test hourly forecast synthesis and entry coercion."""
import random

from aqi_advisor.formula import FormulaConstants
from aqi_advisor.passes.forecast import coerce_entry, hour_label, synthesize_entry, synthesize_forecast


def test_hour_label():
    assert hour_label(3) == "+3h"


def test_synthesized_values_within_spread(rng):
    for _ in range(50):
        entry = synthesize_entry(1, 200, rng)
        assert 190 <= entry.aqi <= 210


def test_synthesized_values_never_negative():
    rng = random.Random(7)
    for _ in range(50):
        assert synthesize_entry(1, 2, rng).aqi >= 0


def test_zero_spread_repeats_reading(rng):
    constants = FormulaConstants(forecast_spread=0)
    forecast = synthesize_forecast(88, rng, constants)
    assert [entry.aqi for entry in forecast] == [88] * 5
    assert {entry.level for entry in forecast} == {"Moderate"}


def test_forecast_labels_in_order(rng):
    forecast = synthesize_forecast(None, rng)
    assert [entry.time for entry in forecast] == ["+1h", "+2h", "+3h", "+4h", "+5h"]


def test_coerce_rejects_non_dict():
    assert coerce_entry("70", 1) is None
    assert coerce_entry({"aqi": "unknown"}, 1) is None


def test_coerce_keeps_supplied_fields():
    entry = coerce_entry({"time": "15:00", "aqi": "145", "level": "Unhealthy for Sensitive Groups"}, 2)
    assert entry.time == "15:00"
    assert entry.aqi == 145
    assert entry.level == "Unhealthy for Sensitive Groups"
