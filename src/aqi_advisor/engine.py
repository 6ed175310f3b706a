"""Reconciliation pass: model attempts → extraction → validation, or fallback."""
from __future__ import annotations

import random
import time

import structlog

from .config import Settings
from .errors import (
    ExtractionFailedError,
    MissingCredentialError,
    ModelUnavailableError,
    ParseFailedError,
    ProviderFaultError,
)
from .llm.anthropic_client import AnthropicClient
from .llm.base import LLMClient
from .llm.gemini_client import GeminiClient
from .llm.openai_client import OpenAIClient
from .llm.response_parser import extract_json_from_response
from .models.aqi import AQIData
from .models.internal import (
    AttemptOutcome,
    AttemptRecord,
    ReconciliationResult,
    RecommendationSource,
)
from .passes.fallback import generate_fallback
from .passes.validation import validate_and_correct
from .prompts.registry import PromptRegistry

logger = structlog.get_logger(__name__)


def build_client(settings: Settings) -> LLMClient:
    """Create the client for ``settings.llm_provider``."""
    api_key = settings.api_key()
    if settings.llm_provider == "openai":
        return OpenAIClient(api_key=api_key, base_url=settings.openai_base_url, timeout=settings.llm_timeout)
    if settings.llm_provider == "anthropic":
        return AnthropicClient(api_key=api_key, timeout=settings.llm_timeout)
    return GeminiClient(api_key=api_key, timeout=settings.llm_timeout, stream=settings.stream_responses)


class RecommendationEngine:
    """Runs reconciliation passes against an ordered list of model identifiers.

    Per attempt:

    - success: the validated record is returned
    - extraction or parse failure: the fallback record is returned at once;
      another model is not expected to do better within the same pass
    - model unavailable: the next identifier is tried, and the fallback
      record is returned once the list is exhausted
    - any other provider fault: raised to the caller

    Passes share no state, so one engine may serve concurrent requests.
    """

    def __init__(
        self,
        settings: Settings,
        client: LLMClient | None = None,
        prompt_registry: PromptRegistry | None = None,
    ):
        self.settings = settings
        self.prompt_registry = prompt_registry or PromptRegistry()
        self._client = client

    def _get_client(self) -> LLMClient:
        if self._client is None:
            self._client = build_client(self.settings)
            logger.info("llm_init", provider=self._client.get_provider_name(), models=self.settings.models)
        return self._client

    def _new_rng(self) -> random.Random:
        return random.Random(self.settings.forecast_seed)

    def fallback(self, aqi_data: AQIData, reason: str, attempts: list[AttemptRecord] | None = None,
                 prompt_version: str | None = None) -> ReconciliationResult:
        logger.warning("using_fallback", city=aqi_data.city, reason=reason)
        recommendation = generate_fallback(aqi_data, rng=self._new_rng(), constants=self.settings.formula)
        return ReconciliationResult(
            recommendation=recommendation,
            source=RecommendationSource.FALLBACK,
            prompt_version=prompt_version,
            attempts=attempts or [],
            fallback_reason=reason,
        )

    async def recommend(self, aqi_data: AQIData) -> ReconciliationResult:
        """Run one reconciliation pass for ``aqi_data``."""
        if not self.settings.api_key():
            raise MissingCredentialError(
                f"API key for provider '{self.settings.llm_provider}' is missing. "
                f"Set AQI_ADVISOR_{self.settings.llm_provider.upper()}_API_KEY."
            )

        client = self._get_client()
        template = self.settings.prompt_template
        prompt = self.prompt_registry.render(template, aqi_data.prompt_variables())
        prompt_version = self.prompt_registry.get_version(template)
        attempts: list[AttemptRecord] = []

        logger.info("reconciliation_start", city=aqi_data.city, aqi=aqi_data.aqi, prompt_version=prompt_version)

        for model in self.settings.models:
            start = time.monotonic()
            try:
                response = await client.generate(
                    model,
                    prompt,
                    temperature=self.settings.llm_temperature,
                    max_tokens=self.settings.llm_max_tokens,
                )
            except ModelUnavailableError as e:
                attempts.append(AttemptRecord(
                    model=model,
                    outcome=AttemptOutcome.RETRYABLE_FAULT,
                    error=str(e),
                    latency_ms=int((time.monotonic() - start) * 1000),
                ))
                logger.warning("model_unavailable", model=model, error=str(e))
                continue
            except ProviderFaultError as e:
                attempts.append(AttemptRecord(
                    model=model,
                    outcome=AttemptOutcome.FATAL_FAULT,
                    error=str(e),
                    latency_ms=int((time.monotonic() - start) * 1000),
                ))
                logger.error("provider_fault", model=model, status_code=e.status_code, error=str(e))
                raise

            try:
                candidate = extract_json_from_response(response.content)
            except (ExtractionFailedError, ParseFailedError) as e:
                attempts.append(AttemptRecord(
                    model=model,
                    outcome=AttemptOutcome.EXTRACTION_OR_PARSE_FAILURE,
                    error=str(e),
                    latency_ms=response.latency_ms,
                ))
                logger.warning("model_output_unparseable", model=model, error_type=type(e).__name__)
                return self.fallback(aqi_data, type(e).__name__, attempts, prompt_version)

            validation = validate_and_correct(
                candidate, aqi_data, rng=self._new_rng(), constants=self.settings.formula,
            )
            attempts.append(AttemptRecord(
                model=model,
                outcome=AttemptOutcome.SUCCESS,
                latency_ms=response.latency_ms,
            ))
            logger.info(
                "reconciliation_complete",
                city=aqi_data.city,
                model=model,
                corrections=len(validation.corrections),
                input_tokens=response.input_tokens,
                output_tokens=response.output_tokens,
            )
            return ReconciliationResult(
                recommendation=validation.recommendation,
                source=RecommendationSource.MODEL,
                model=model,
                prompt_version=prompt_version,
                attempts=attempts,
                corrections=validation.corrections,
            )

        return self.fallback(aqi_data, "models_exhausted", attempts, prompt_version)
