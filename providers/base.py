"""Base classes and models for LLM providers."""

from abc import ABC, abstractmethod

from langchain_core.language_models.chat_models import BaseChatModel
from pydantic import BaseModel


class ModelConfig(BaseModel):
    """Configuration for the chat model that answers AI queries.

    Attributes:
        provider_type: Provider key (e.g., "gemini", "azure_openai")
        model_id: Model or deployment identifier (e.g., "gemini-2.0-flash")
        api_base: Endpoint URL, for providers that need one
        api_key: API key
        api_version: API version, for providers that pin one
    """

    model_config = {"frozen": True}

    provider_type: str
    model_id: str
    api_base: str = ""
    api_key: str = ""
    api_version: str = ""


class GenerationOptions(BaseModel):
    """Per-request sampling options. None means "provider default"."""

    temperature: float | None = None
    top_p: float | None = None
    top_k: int | None = None
    max_tokens: int | None = None


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    Implementations are thin wrappers that build a configured langchain
    chat model, so callers only ever deal with ``BaseChatModel``.
    """

    @abstractmethod
    def get_llm(
        self,
        config: ModelConfig,
        options: GenerationOptions | None = None,
    ) -> BaseChatModel:
        """Return a configured chat model client.

        Args:
            config: Model configuration with provider details
            options: Sampling options for this request

        Returns:
            A configured langchain chat model
        """
        pass
