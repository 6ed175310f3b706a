"""Output schema for a tree planting recommendation.

Field names are snake_case in Python and camelCase on the wire
(``model_dump(by_alias=True)``), matching the JSON shape the prompt asks the
model for. Records are frozen once built.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

FORECAST_HOURS = 5


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# ---------------------------------------------------------------------------
# Forecast
# ---------------------------------------------------------------------------


class HourlyForecastEntry(_WireModel):
    time: str
    aqi: int = Field(ge=0)
    level: str


# ---------------------------------------------------------------------------
# Recommendation sections
# ---------------------------------------------------------------------------


class ROI(_WireModel):
    timeframe: str
    benefits: str


class CarbonAnalysis(_WireModel):
    """Tonnes of CO2; both figures are linear in the tree count."""

    annual_carbon_sequestration: str
    lifetime_carbon_sequestration: str
    air_pollution_reduction: str


class CurrentAirQuality(_WireModel):
    aqi: int = Field(ge=0)
    pm25: float = 0
    pm10: float = 0
    description: str = "Current air quality status"


class ProjectedAirQuality(_WireModel):
    aqi: int = Field(ge=0)
    pm25: str
    pm10: str
    description: str = "Expected air quality after 5 years of tree planting"


class Comparison(_WireModel):
    before: CurrentAirQuality
    after: ProjectedAirQuality
    improvement: str


class HumanImpact(_WireModel):
    health_benefit: str
    economic_benefit: str


class Implementation(_WireModel):
    phases: list[str]
    timeline: str
    maintenance: str


class TreePlan(_WireModel):
    tree_types: list[str] = Field(min_length=1)
    number_of_trees: str
    investment_amount: str
    roi: ROI
    carbon_analysis: CarbonAnalysis
    comparison: Comparison
    human_impact: HumanImpact
    implementation: Implementation


class Recommendation(_WireModel):
    """A complete, numerically consistent recommendation."""

    summary: str
    hourly_forecast: list[HourlyForecastEntry] = Field(
        min_length=FORECAST_HOURS, max_length=FORECAST_HOURS
    )
    recommendations: TreePlan

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
