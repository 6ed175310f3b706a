"""Test data factories for building test objects."""
import json

from aqi_advisor.models.aqi import AQIData


def make_aqi_data(
    aqi: int | None = 60,
    city: str = "Pune",
    pm25: float | None = 35.0,
    pm10: float | None = 80.0,
) -> AQIData:
    return AQIData(
        city=city,
        aqi=aqi,
        pm25=pm25,
        pm10=pm10,
        co=400.0,
        no2=20.0,
        so2=8.0,
        o3=30.0,
        temp=29.0,
        humidity=60.0,
        wind=3.5,
    )


def make_forecast(values: list[int] | None = None) -> list[dict]:
    values = values if values is not None else [62, 65, 63, 58, 57]
    return [
        {"time": f"+{i}h", "aqi": value, "level": "Moderate"}
        for i, value in enumerate(values, start=1)
    ]


def make_candidate(
    trees="7500",
    investment="₹3,00,00,000",
    forecast: list[dict] | None = None,
    include_forecast: bool = True,
) -> dict:
    """A parsed model payload for AQI 60 with plausible numbers."""
    candidate = {
        "summary": "Moderate air quality driven by traffic particulates.",
        "recommendations": {
            "treeTypes": ["Neem", "Peepal", "Arjun"],
            "numberOfTrees": trees,
            "investmentAmount": investment,
            "roi": {"timeframe": "4-6 years", "benefits": "Cleaner air near schools."},
            "carbonAnalysis": {
                "annualCarbonSequestration": "999",
                "lifetimeCarbonSequestration": "99999",
                "airPollutionReduction": "80%",
            },
            "comparison": {
                "before": {"aqi": 60, "pm25": 35, "pm10": 80, "description": "Moderate"},
                "after": {"aqi": 20, "pm25": "60%", "pm10": "60%", "description": "Good"},
                "improvement": "66%",
            },
            "humanImpact": {
                "healthBenefit": "Fewer asthma admissions.",
                "economicBenefit": "Lower healthcare spend.",
            },
            "implementation": {
                "phases": ["Survey", "Plant", "Maintain"],
                "timeline": "3 years",
                "maintenance": "$1,000",
            },
        },
    }
    if include_forecast:
        candidate["hourlyForecast"] = forecast if forecast is not None else make_forecast()
    return candidate


def make_model_output(candidate: dict | None = None, fenced: bool = True) -> str:
    body = json.dumps(candidate if candidate is not None else make_candidate(), ensure_ascii=False, indent=2)
    if fenced:
        return f"Here is the recommendation you asked for:\n```json\n{body}\n```\nLet me know if you need more."
    return f"Sure! {body} Hope this helps."
