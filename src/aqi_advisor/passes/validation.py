"""Consistency validation: check model numbers against the formulas and correct them.

Tree count and investment are tolerance-gated: a model estimate inside the
band is kept. Carbon figures, the before/after comparison and maintenance are
always recomputed from the final tree count. Narrative text passes through.
"""
from __future__ import annotations

import random

import structlog

from .. import formula
from ..formula import DEFAULT_CONSTANTS, FormulaConstants
from ..international.currency import coerce_count, format_rupees, normalize_currency, parse_amount
from ..models.aqi import AQIData
from ..models.internal import Correction, ValidationResult
from ..models.recommendation import (
    FORECAST_HOURS,
    ROI,
    HourlyForecastEntry,
    HumanImpact,
    Implementation,
    Recommendation,
    TreePlan,
)
from . import narrative
from .derived import build_carbon_analysis, build_comparison, build_maintenance
from .forecast import coerce_entry, synthesize_entry, synthesize_forecast

logger = structlog.get_logger(__name__)


def correct_tree_count(
    raw, aqi: float | None, corrections: list[Correction],
    constants: FormulaConstants = DEFAULT_CONSTANTS,
) -> int:
    """Keep the model's tree count if it sits within ±20% of the tier band."""
    supplied = coerce_count(raw)
    trees = formula.round_half_up(supplied) if supplied is not None else 0
    if formula.tree_count_within_tolerance(trees, aqi, constants):
        return trees

    low, high = formula.expected_tree_range(aqi)
    midpoint = formula.tree_band_midpoint(aqi)
    corrections.append(Correction(
        field="recommendations.numberOfTrees",
        message=f"Tree count outside expected {low}-{high} for AQI {formula.governing_aqi(aqi):g}; using band midpoint",
        expected=str(midpoint),
        actual=None if raw is None else str(raw),
    ))
    return midpoint


def correct_investment(
    raw, trees: int, corrections: list[Correction],
    constants: FormulaConstants = DEFAULT_CONSTANTS,
) -> tuple[float, str]:
    """Return ``(value, formatted)``; the model's amount survives within ±30%."""
    expected = formula.investment_for(trees, constants)
    supplied = parse_amount(raw)
    if supplied is not None:
        supplied = round(supplied, 2)
        if formula.investment_within_tolerance(supplied, expected, constants):
            return supplied, normalize_currency(supplied)

    corrections.append(Correction(
        field="recommendations.investmentAmount",
        message=f"Investment inconsistent with {trees} trees x {constants.cost_per_tree}",
        expected=format_rupees(expected),
        actual=None if raw is None else str(raw),
    ))
    return float(expected), normalize_currency(expected)


def correct_forecast(
    raw, aqi: float | None, rng: random.Random, corrections: list[Correction],
    constants: FormulaConstants = DEFAULT_CONSTANTS,
) -> list[HourlyForecastEntry]:
    """Keep a usable forecast; synthesise whatever is missing."""
    if not isinstance(raw, list) or not raw:
        corrections.append(Correction(
            field="hourlyForecast",
            message=f"Forecast missing; synthesised {FORECAST_HOURS} hours",
        ))
        return synthesize_forecast(aqi, rng, constants)

    if len(raw) > FORECAST_HOURS:
        corrections.append(Correction(
            field="hourlyForecast",
            message=f"Forecast truncated from {len(raw)} to {FORECAST_HOURS} hours",
        ))

    entries: list[HourlyForecastEntry] = []
    for hour in range(1, FORECAST_HOURS + 1):
        entry = coerce_entry(raw[hour - 1], hour) if hour <= len(raw) else None
        if entry is None:
            corrections.append(Correction(
                field=f"hourlyForecast.{hour - 1}",
                message="Forecast entry missing or malformed; synthesised",
            ))
            entry = synthesize_entry(hour, aqi, rng, constants)
        entries.append(entry)
    return entries


def _note_recomputed(field: str, supplied, recomputed, corrections: list[Correction]) -> None:
    if supplied is None or str(supplied) == str(recomputed):
        return
    corrections.append(Correction(
        field=field,
        message="Recomputed from final tree count",
        expected=str(recomputed),
        actual=str(supplied),
    ))


def _section(container: dict, key: str) -> dict:
    value = container.get(key)
    return value if isinstance(value, dict) else {}


def _text(container: dict, key: str, default: str, field: str, corrections: list[Correction]) -> str:
    value = container.get(key)
    if isinstance(value, str) and value.strip():
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    corrections.append(Correction(field=field, message="Missing text; default used"))
    return default


def _text_list(
    value, field: str, default: list[str], corrections: list[Correction], *, split: bool = False,
) -> list[str]:
    if isinstance(value, str):
        value = value.split(",") if split else [value]
    items: list[str] = []
    if isinstance(value, list):
        for item in value:
            if isinstance(item, (str, int, float)) and not isinstance(item, bool):
                text = str(item).strip()
                if text and text not in items:
                    items.append(text)
    if items:
        return items
    corrections.append(Correction(field=field, message="Missing list; default used"))
    return list(default)


def validate_and_correct(
    candidate: dict,
    aqi_data: AQIData,
    *,
    rng: random.Random | None = None,
    constants: FormulaConstants = DEFAULT_CONSTANTS,
) -> ValidationResult:
    """Turn a parsed model payload into a record that satisfies every invariant.

    ``candidate`` may be partial: each field is coerced on its own and a broken
    neighbour never prevents a field from being checked.
    """
    rng = rng or random.Random()
    corrections: list[Correction] = []
    aqi = aqi_data.aqi
    plan = _section(candidate, "recommendations")

    # Tolerance-gated
    trees = correct_tree_count(plan.get("numberOfTrees"), aqi, corrections, constants)
    investment, investment_text = correct_investment(
        plan.get("investmentAmount"), trees, corrections, constants,
    )

    # Always recomputed
    carbon = build_carbon_analysis(trees, constants)
    supplied_carbon = _section(plan, "carbonAnalysis")
    for key, value in carbon.model_dump(by_alias=True).items():
        _note_recomputed(f"recommendations.carbonAnalysis.{key}", supplied_carbon.get(key), value, corrections)

    comparison = build_comparison(aqi_data, trees, constants)
    supplied_comparison = _section(plan, "comparison")
    supplied_before = _section(supplied_comparison, "before")
    supplied_after = _section(supplied_comparison, "after")
    _note_recomputed("recommendations.comparison.before.aqi", supplied_before.get("aqi"), comparison.before.aqi, corrections)
    _note_recomputed("recommendations.comparison.after.aqi", supplied_after.get("aqi"), comparison.after.aqi, corrections)
    _note_recomputed("recommendations.comparison.improvement", supplied_comparison.get("improvement"), comparison.improvement, corrections)
    # Descriptions are narrative and survive the recompute
    if isinstance(supplied_before.get("description"), str) and supplied_before["description"].strip():
        comparison = comparison.model_copy(update={
            "before": comparison.before.model_copy(update={"description": supplied_before["description"]}),
        })
    if isinstance(supplied_after.get("description"), str) and supplied_after["description"].strip():
        comparison = comparison.model_copy(update={
            "after": comparison.after.model_copy(update={"description": supplied_after["description"]}),
        })

    supplied_implementation = _section(plan, "implementation")
    maintenance = build_maintenance(investment, constants)
    _note_recomputed("recommendations.implementation.maintenance", supplied_implementation.get("maintenance"), maintenance, corrections)

    forecast = correct_forecast(candidate.get("hourlyForecast"), aqi, rng, corrections, constants)

    # Narrative passes through; gaps get neutral defaults
    roi = _section(plan, "roi")
    impact = _section(plan, "humanImpact")
    summary = _text(
        candidate, "summary",
        narrative.default_summary(aqi_data, trees, formula.pollution_reduction_pct(trees, constants)),
        "summary", corrections,
    )

    recommendation = Recommendation(
        summary=summary,
        hourly_forecast=forecast,
        recommendations=TreePlan(
            tree_types=_text_list(plan.get("treeTypes"), "recommendations.treeTypes", narrative.DEFAULT_TREE_TYPES, corrections, split=True),
            number_of_trees=str(trees),
            investment_amount=investment_text,
            roi=ROI(
                timeframe=_text(roi, "timeframe", narrative.DEFAULT_ROI_TIMEFRAME, "recommendations.roi.timeframe", corrections),
                benefits=_text(roi, "benefits", narrative.DEFAULT_ROI_BENEFITS, "recommendations.roi.benefits", corrections),
            ),
            carbon_analysis=carbon,
            comparison=comparison,
            human_impact=HumanImpact(
                health_benefit=_text(impact, "healthBenefit", narrative.DEFAULT_HEALTH_BENEFIT, "recommendations.humanImpact.healthBenefit", corrections),
                economic_benefit=_text(impact, "economicBenefit", narrative.DEFAULT_ECONOMIC_BENEFIT, "recommendations.humanImpact.economicBenefit", corrections),
            ),
            implementation=Implementation(
                phases=_text_list(supplied_implementation.get("phases"), "recommendations.implementation.phases", narrative.DEFAULT_PHASES, corrections),
                timeline=_text(supplied_implementation, "timeline", narrative.DEFAULT_TIMELINE, "recommendations.implementation.timeline", corrections),
                maintenance=maintenance,
            ),
        ),
    )

    logger.info(
        "validation_complete",
        city=aqi_data.city,
        aqi=aqi,
        trees=trees,
        corrections=len(corrections),
    )
    return ValidationResult(recommendation=recommendation, corrections=corrections)
