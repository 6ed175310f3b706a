"""Shared test fixtures."""
import random

import pytest
from unittest.mock import AsyncMock
from aqi_advisor.llm.base import LLMClient, LLMResponse
from aqi_advisor.config import Settings
from aqi_advisor.prompts.registry import PromptRegistry
from tests.factories import make_model_output


@pytest.fixture
def mock_settings():
    """Create test settings with dummy values."""
    return Settings(
        llm_provider="gemini",
        gemini_api_key="test-gemini-key",
        models=["gemini-2.5-flash", "gemini-2.0-flash", "gemini-1.5-flash"],
        forecast_seed=42,
    )


@pytest.fixture
def mock_llm_client():
    """Create a mock LLM client that answers with a well-formed payload."""
    client = AsyncMock(spec=LLMClient)
    client.get_provider_name.return_value = "mock"
    client.generate.return_value = LLMResponse(
        content=make_model_output(),
        model="mock-model",
        input_tokens=100,
        output_tokens=50,
    )
    return client


@pytest.fixture
def prompt_registry():
    return PromptRegistry()


@pytest.fixture
def rng():
    return random.Random(1234)
