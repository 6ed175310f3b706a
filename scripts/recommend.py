#!/usr/bin/env python3
"""Run one reconciliation pass from the command line and print the record."""
import asyncio
import json
import sys

# Load .env file
from dotenv import load_dotenv
load_dotenv()

from aqi_advisor.config import Settings
from aqi_advisor.engine import RecommendationEngine
from aqi_advisor.errors import AdvisorError
from aqi_advisor.models.aqi import AQIData
from aqi_advisor.utils.logging import setup_logging


async def main(city: str, aqi: str, pm25: str | None = None, pm10: str | None = None) -> None:
    settings = Settings()
    setup_logging(settings.log_level, json_logs=False)
    engine = RecommendationEngine(settings)

    aqi_data = AQIData(city=city, aqi=aqi, pm25=pm25, pm10=pm10)
    print(f"Recommending for {aqi_data.city} (AQI {aqi_data.aqi})")
    print("-" * 50)

    try:
        result = await engine.recommend(aqi_data)
    except AdvisorError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Source: {result.source}" + (f" ({result.model})" if result.model else ""))
    if result.fallback_reason:
        print(f"Fallback reason: {result.fallback_reason}")
    for correction in result.corrections:
        print(f"Corrected {correction.field}: {correction.message}")

    print(json.dumps(result.recommendation.to_wire(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python scripts/recommend.py <city> <aqi> [pm25] [pm10]")
        sys.exit(1)

    asyncio.run(main(*sys.argv[1:5]))
