"""Anthropic Claude messages client."""
from __future__ import annotations

import time

import anthropic
import structlog

from ..errors import classify_provider_error
from .base import LLMClient, LLMResponse

logger = structlog.get_logger(__name__)


class AnthropicClient(LLMClient):
    """LLM client for Claude models via the Anthropic Messages API."""

    def __init__(self, api_key: str, timeout: int = 120):
        self._client = anthropic.AsyncAnthropic(
            api_key=api_key,
            timeout=float(timeout),
            max_retries=0,
        )

    async def generate(
        self,
        model: str,
        prompt: str,
        *,
        temperature: float = 0.7,
        max_tokens: int = 4096,
    ) -> LLMResponse:
        start = time.monotonic()
        try:
            response = await self._client.messages.create(
                model=model,
                max_tokens=max_tokens,
                temperature=min(temperature, 1.0),
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIStatusError as exc:
            logger.warning("anthropic_api_error", model=model, status=exc.status_code, error=str(exc))
            raise classify_provider_error(exc, model, status_code=exc.status_code) from exc
        except anthropic.AnthropicError as exc:
            logger.warning("anthropic_call_failed", model=model, error=str(exc))
            raise classify_provider_error(exc, model) from exc
        elapsed_ms = int((time.monotonic() - start) * 1000)

        # Concatenate all text blocks
        content_text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )

        return LLMResponse(
            content=content_text,
            model=response.model or model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            finish_reason=response.stop_reason or "",
            latency_ms=elapsed_ms,
        )

    def get_provider_name(self) -> str:
        return "anthropic"
