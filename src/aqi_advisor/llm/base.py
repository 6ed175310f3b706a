"""Provider-neutral interface for single-turn generative calls."""
from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel


class LLMResponse(BaseModel):
    """Raw text returned by one generative call, before any extraction."""

    content: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    finish_reason: str = ""
    latency_ms: int = 0


class LLMClient(ABC):
    """One generative model provider; the model identifier is chosen per call.

    Implementations raise ``ModelUnavailableError`` when the provider does not
    know ``model`` and ``ProviderFaultError`` for every other failure. They do
    not retry: moving to the next identifier is the engine's job.
    """

    @abstractmethod
    async def generate(
        self,
        model: str,
        prompt: str,
        *,
        temperature: float = 0.7,
        max_tokens: int = 4096,
    ) -> LLMResponse:
        ...

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the provider name, e.g. ``gemini``."""
        ...
