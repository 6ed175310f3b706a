"""Air quality input record."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AQIData(BaseModel):
    """Current air quality and weather for one city.

    Pollutant concentrations are in μg/m³, temperature in °C, humidity in %
    and wind in m/s. Any reading may be absent.
    """

    model_config = ConfigDict(frozen=True)

    city: str
    aqi: int | None = Field(default=None, ge=0)
    pm25: float | None = None
    pm10: float | None = None
    co: float | None = None
    no2: float | None = None
    so2: float | None = None
    o3: float | None = None
    temp: float | None = None
    humidity: float | None = None
    wind: float | None = None

    @field_validator("aqi", mode="before")
    @classmethod
    def _round_aqi(cls, value):
        # Upstream feeds occasionally report 87.0 or "87"
        if isinstance(value, str) and value.strip():
            try:
                value = float(value)
            except ValueError:
                return value
        if isinstance(value, float) and math.isfinite(value):
            return int(math.floor(value + 0.5))
        return value

    def prompt_variables(self) -> dict[str, str]:
        """Values for prompt templates; absent readings render as ``N/A``."""
        variables = {"city": self.city}
        for name in ("aqi", "pm25", "pm10", "co", "no2", "so2", "o3", "temp", "humidity", "wind"):
            value = getattr(self, name)
            variables[name] = "N/A" if value is None else f"{value:g}"
        variables["before_aqi"] = str(self.aqi or 0)
        variables["before_pm25"] = f"{self.pm25 or 0:g}"
        variables["before_pm10"] = f"{self.pm10 or 0:g}"
        return variables
