"""Deterministic recommendation built from the formulas alone, no model involved."""
from __future__ import annotations

import random

import structlog

from .. import formula
from ..formula import DEFAULT_CONSTANTS, FormulaConstants
from ..international.currency import format_rupees
from ..models.aqi import AQIData
from ..models.recommendation import (
    ROI,
    HumanImpact,
    Implementation,
    Recommendation,
    TreePlan,
)
from . import narrative
from .derived import build_carbon_analysis, build_comparison, build_maintenance
from .forecast import synthesize_forecast

logger = structlog.get_logger(__name__)


def generate_fallback(
    aqi_data: AQIData,
    *,
    rng: random.Random | None = None,
    constants: FormulaConstants = DEFAULT_CONSTANTS,
) -> Recommendation:
    """Build a complete recommendation at the tier-band midpoint.

    Consistent by construction, so it is never passed through validation.
    Only the hourly forecast draws from ``rng``.
    """
    rng = rng or random.Random()
    trees = formula.tree_band_midpoint(aqi_data.aqi)
    investment = formula.investment_for(trees, constants)
    reduction = formula.pollution_reduction_pct(trees, constants)

    logger.info("fallback_generated", city=aqi_data.city, aqi=aqi_data.aqi, trees=trees)

    return Recommendation(
        summary=narrative.default_summary(aqi_data, trees, reduction),
        hourly_forecast=synthesize_forecast(aqi_data.aqi, rng, constants),
        recommendations=TreePlan(
            tree_types=list(narrative.DEFAULT_TREE_TYPES),
            number_of_trees=str(trees),
            investment_amount=format_rupees(investment),
            roi=ROI(timeframe=narrative.DEFAULT_ROI_TIMEFRAME, benefits=narrative.DEFAULT_ROI_BENEFITS),
            carbon_analysis=build_carbon_analysis(trees, constants),
            comparison=build_comparison(aqi_data, trees, constants),
            human_impact=HumanImpact(
                health_benefit=narrative.DEFAULT_HEALTH_BENEFIT,
                economic_benefit=narrative.DEFAULT_ECONOMIC_BENEFIT,
            ),
            implementation=Implementation(
                phases=list(narrative.DEFAULT_PHASES),
                timeline=narrative.DEFAULT_TIMELINE,
                maintenance=build_maintenance(investment, constants),
            ),
        ),
    )
