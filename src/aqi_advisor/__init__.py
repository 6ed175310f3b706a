"""AQI-driven tree planting recommendations with formula-checked numbers."""

__version__ = "0.1.0"
