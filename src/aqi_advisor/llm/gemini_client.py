"""Google Gemini client using the google-genai SDK."""
from __future__ import annotations

import time

import structlog
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from ..errors import classify_provider_error
from .base import LLMClient, LLMResponse

logger = structlog.get_logger(__name__)


class GeminiClient(LLMClient):
    """LLM client for Gemini models via the Google AI API.

    With ``stream=True`` the response is read as a stream of fragments which
    are concatenated in arrival order before being returned.
    """

    def __init__(self, api_key: str, timeout: int = 120, stream: bool = False):
        self._stream = stream
        self._client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=timeout * 1000),
        )

    async def generate(
        self,
        model: str,
        prompt: str,
        *,
        temperature: float = 0.7,
        max_tokens: int = 4096,
    ) -> LLMResponse:
        contents = [types.Content(role="user", parts=[types.Part(text=prompt)])]
        config = types.GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=max_tokens,
        )

        start = time.monotonic()
        try:
            if self._stream:
                text, usage = await self._generate_streamed(model, contents, config)
            else:
                response = await self._client.aio.models.generate_content(
                    model=model, contents=contents, config=config,
                )
                text, usage = response.text or "", response.usage_metadata
        except genai_errors.APIError as exc:
            logger.warning("gemini_api_error", model=model, code=exc.code, status=exc.status)
            raise classify_provider_error(exc, model, status_code=exc.code) from exc
        except Exception as exc:
            logger.warning("gemini_call_failed", model=model, error=str(exc))
            raise classify_provider_error(exc, model) from exc
        elapsed_ms = int((time.monotonic() - start) * 1000)

        return LLMResponse(
            content=text,
            model=model,
            input_tokens=getattr(usage, "prompt_token_count", None) or 0,
            output_tokens=getattr(usage, "candidates_token_count", None) or 0,
            latency_ms=elapsed_ms,
        )

    async def _generate_streamed(self, model, contents, config):
        fragments: list[str] = []
        usage = None
        stream = await self._client.aio.models.generate_content_stream(
            model=model, contents=contents, config=config,
        )
        async for chunk in stream:
            fragments.append(chunk.text or "")
            if chunk.usage_metadata is not None:
                usage = chunk.usage_metadata
        return "".join(fragments), usage

    def get_provider_name(self) -> str:
        return "gemini"
