"""OpenAI chat completions client."""
from __future__ import annotations

import time

import openai
import structlog

from ..errors import classify_provider_error
from .base import LLMClient, LLMResponse

logger = structlog.get_logger(__name__)


class OpenAIClient(LLMClient):
    """LLM client for GPT models.

    ``base_url`` points the client at any OpenAI-compatible endpoint; leave it
    empty for api.openai.com.
    """

    def __init__(self, api_key: str, base_url: str = "", timeout: int = 120):
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            base_url=base_url or None,
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
            response = await self._client.chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except openai.APIStatusError as exc:
            logger.warning("openai_api_error", model=model, status=exc.status_code, error=str(exc))
            raise classify_provider_error(exc, model, status_code=exc.status_code) from exc
        except openai.OpenAIError as exc:
            logger.warning("openai_call_failed", model=model, error=str(exc))
            raise classify_provider_error(exc, model) from exc
        elapsed_ms = int((time.monotonic() - start) * 1000)

        choice = response.choices[0]
        input_tokens = 0
        output_tokens = 0
        if response.usage is not None:
            input_tokens = response.usage.prompt_tokens
            output_tokens = response.usage.completion_tokens

        return LLMResponse(
            content=choice.message.content or "",
            model=response.model or model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            finish_reason=choice.finish_reason or "",
            latency_ms=elapsed_ms,
        )

    def get_provider_name(self) -> str:
        return "openai"
