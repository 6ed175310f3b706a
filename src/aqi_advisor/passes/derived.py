"""Record sections computed entirely from the tree count and the AQI input."""
from __future__ import annotations

from .. import formula
from ..formula import DEFAULT_CONSTANTS, FormulaConstants
from ..international.currency import format_rupees
from ..models.aqi import AQIData
from ..models.recommendation import (
    CarbonAnalysis,
    Comparison,
    CurrentAirQuality,
    ProjectedAirQuality,
)


def build_carbon_analysis(trees: int, constants: FormulaConstants = DEFAULT_CONSTANTS) -> CarbonAnalysis:
    return CarbonAnalysis(
        annual_carbon_sequestration=f"{formula.annual_carbon(trees, constants):.1f}",
        lifetime_carbon_sequestration=f"{formula.lifetime_carbon(trees, constants):.1f}",
        air_pollution_reduction=f"{formula.pollution_reduction_pct(trees, constants)}%",
    )


def build_comparison(
    aqi_data: AQIData, trees: int, constants: FormulaConstants = DEFAULT_CONSTANTS
) -> Comparison:
    before_aqi = aqi_data.aqi or 0
    after_aqi = formula.projected_aqi(before_aqi, trees, constants)
    pm_label = f"{formula.pm_reduction_pct(trees, constants)}% reduction"
    return Comparison(
        before=CurrentAirQuality(
            aqi=before_aqi,
            pm25=aqi_data.pm25 or 0,
            pm10=aqi_data.pm10 or 0,
        ),
        after=ProjectedAirQuality(aqi=after_aqi, pm25=pm_label, pm10=pm_label),
        improvement=f"{formula.improvement_pct(before_aqi, after_aqi)}%",
    )


def build_maintenance(investment: float, constants: FormulaConstants = DEFAULT_CONSTANTS) -> str:
    return format_rupees(formula.maintenance_for(investment, constants))
