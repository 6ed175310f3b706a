"""Application configuration via environment variables with AQI_ADVISOR_ prefix."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .formula import FormulaConstants


class Settings(BaseSettings):
    """Recommendation engine configuration.

    All settings are read from environment variables prefixed with
    ``AQI_ADVISOR_``. Nested formula constants use a double underscore, e.g.
    ``AQI_ADVISOR_FORMULA__COST_PER_TREE=4500``. API keys are wrapped in
    ``SecretStr`` so they are never accidentally logged or serialised.
    """

    model_config = SettingsConfigDict(env_prefix="AQI_ADVISOR_", env_nested_delimiter="__")

    # ── Generative provider ────────────────────────────────────────────
    llm_provider: Literal["gemini", "openai", "anthropic"] = "gemini"
    gemini_api_key: SecretStr = SecretStr("")
    openai_api_key: SecretStr = SecretStr("")
    openai_base_url: str = ""
    anthropic_api_key: SecretStr = SecretStr("")

    # Tried in order; a model-not-found fault moves on to the next one
    models: list[str] = Field(default=["gemini-2.5-flash"], min_length=1)

    llm_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    llm_max_tokens: int = Field(default=4096, gt=0)
    llm_timeout: int = 120
    stream_responses: bool = False

    # ── Reconciliation ─────────────────────────────────────────────────
    prompt_template: str = "tree_recommendation"
    # Fixed seed makes synthesised hourly forecasts reproducible
    forecast_seed: int | None = None
    formula: FormulaConstants = Field(default_factory=FormulaConstants)

    # ── Logging ────────────────────────────────────────────────────────
    log_level: str = "INFO"
    json_logs: bool = True

    # ── API ─────────────────────────────────────────────────────────────
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: list[str] = Field(default=["http://localhost:5173"])

    def api_key(self) -> str:
        """Return the API key for the configured provider ("" when unset)."""
        secret = {
            "gemini": self.gemini_api_key,
            "openai": self.openai_api_key,
            "anthropic": self.anthropic_api_key,
        }[self.llm_provider]
        return secret.get_secret_value()
