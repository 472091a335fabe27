"""Factory functions for creating LLM providers."""

from shared.config import Settings

from .azure_openai import AzureOpenAIProvider
from .base import LLMProvider, ModelConfig
from .gemini import GeminiProvider


def get_providers() -> dict[str, LLMProvider]:
    """Get instances of each provider type.

    Returns:
        Dictionary mapping provider type names to provider instances.
        Keys are: "gemini", "azure_openai"
    """
    return {
        "gemini": GeminiProvider(),
        "azure_openai": AzureOpenAIProvider(),
    }


def get_provider(provider_type: str) -> LLMProvider:
    """Look up a provider by type.

    Raises:
        ValueError: If the provider type is unknown
    """
    providers = get_providers()
    if provider_type not in providers:
        raise ValueError(
            f"Unknown AI provider '{provider_type}'. "
            f"Expected one of: {', '.join(sorted(providers))}"
        )
    return providers[provider_type]


def model_config_from_settings(settings: Settings) -> ModelConfig:
    """Build the model configuration for the provider selected in settings."""
    if settings.ai_provider == "azure_openai":
        return ModelConfig(
            provider_type="azure_openai",
            model_id=settings.azure_openai_deployment,
            api_base=settings.azure_openai_endpoint,
            api_key=settings.azure_openai_key,
            api_version=settings.azure_openai_api_version,
        )
    return ModelConfig(
        provider_type="gemini",
        model_id=settings.gemini_model,
        api_key=settings.google_api_key,
    )
