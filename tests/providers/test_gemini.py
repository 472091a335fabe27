"""Tests for the Google Gemini provider."""

import os

import pytest
from unittest.mock import patch, MagicMock

from langchain_core.messages import HumanMessage

from providers.gemini import GeminiProvider
from providers.base import GenerationOptions, ModelConfig


# Environment variable for integration tests
GOOGLE_API_KEY = os.environ.get("GOOGLE_API_KEY", "")


def gemini_config(api_key: str = "test-api-key-12345", model_id: str = "gemini-2.0-flash") -> ModelConfig:
    return ModelConfig(provider_type="gemini", model_id=model_id, api_key=api_key)


class TestGeminiProvider:
    """Test suite for GeminiProvider."""

    def test_api_key_required(self):
        """Should raise ValueError naming GOOGLE_API_KEY if no key is set."""
        with pytest.raises(ValueError) as exc_info:
            GeminiProvider().get_llm(gemini_config(api_key=""))

        assert "GOOGLE_API_KEY" in str(exc_info.value)

    @patch("providers.gemini.ChatGoogleGenerativeAI")
    def test_defaults_only_pass_model_and_key(self, mock_chat_google):
        mock_instance = MagicMock()
        mock_chat_google.return_value = mock_instance

        result = GeminiProvider().get_llm(gemini_config())

        assert result == mock_instance
        mock_chat_google.assert_called_once_with(
            model="gemini-2.0-flash",
            google_api_key="test-api-key-12345",
        )

    @patch("providers.gemini.ChatGoogleGenerativeAI")
    def test_sampling_options_mapped(self, mock_chat_google):
        options = GenerationOptions(temperature=0.2, top_p=0.9, top_k=40, max_tokens=256)

        GeminiProvider().get_llm(gemini_config(), options)

        kwargs = mock_chat_google.call_args.kwargs
        assert kwargs["temperature"] == 0.2
        assert kwargs["top_p"] == 0.9
        assert kwargs["top_k"] == 40
        assert kwargs["max_output_tokens"] == 256

    @patch("providers.gemini.ChatGoogleGenerativeAI")
    def test_unset_options_are_omitted(self, mock_chat_google):
        GeminiProvider().get_llm(gemini_config(), GenerationOptions(temperature=0.0))

        kwargs = mock_chat_google.call_args.kwargs
        assert kwargs["temperature"] == 0.0
        assert "top_k" not in kwargs
        assert "max_output_tokens" not in kwargs


@pytest.mark.skipif(
    not GOOGLE_API_KEY,
    reason="GOOGLE_API_KEY environment variable not set"
)
class TestGeminiIntegration:
    """Integration tests requiring a real Google API key.

    These tests are skipped by default. To run them:
        GOOGLE_API_KEY=AI... pytest tests/providers/test_gemini.py -v
    """

    @pytest.mark.asyncio
    async def test_answer(self):
        llm = GeminiProvider().get_llm(
            gemini_config(api_key=GOOGLE_API_KEY),
            GenerationOptions(temperature=0, max_tokens=20),
        )

        response = await llm.ainvoke([HumanMessage(content="Say 'hello' and nothing else.")])

        assert "hello" in str(response.content).lower()
        assert response.usage_metadata["total_tokens"] > 0
