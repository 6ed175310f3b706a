"""Neutral narrative text for the fallback record and for gaps in model output."""
from __future__ import annotations

from ..models.aqi import AQIData

DEFAULT_TREE_TYPES = ["Neem", "Peepal", "Banyan", "Mango", "Jamun", "Gulmohar"]

DEFAULT_ROI_TIMEFRAME = "5-7 years"
DEFAULT_ROI_BENEFITS = (
    "Improved air quality, reduced healthcare costs, increased property values, "
    "carbon sequestration, and environmental benefits."
)

DEFAULT_HEALTH_BENEFIT = (
    "Fewer respiratory and cardiovascular complaints as particulate levels fall, "
    "with the largest gains for children and the elderly."
)
DEFAULT_ECONOMIC_BENEFIT = (
    "Lower public healthcare spending, fewer lost work days, and higher property "
    "values near new green cover."
)

DEFAULT_PHASES = [
    "Phase 1: Site preparation and initial planting (Year 1) - Focus on high-pollution areas",
    "Phase 2: Expansion and maintenance (Years 2-3) - Expand coverage and establish care routines",
    "Phase 3: Full ecosystem establishment (Years 4-5) - Mature trees providing maximum benefits",
]
DEFAULT_TIMELINE = "5 years"


def default_summary(aqi_data: AQIData, trees: int, reduction_pct: int) -> str:
    aqi = aqi_data.aqi if aqi_data.aqi is not None else "N/A"
    return (
        f"Current air quality in {aqi_data.city} shows an AQI of {aqi}. "
        f"Planting {trees:,} trees can reduce air pollution by about "
        f"{reduction_pct}% over 5 years."
    )
