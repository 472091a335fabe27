"""LLM provider implementations."""

from .base import GenerationOptions, LLMProvider, ModelConfig
from .factory import get_provider, get_providers, model_config_from_settings

__all__ = ["GenerationOptions", "LLMProvider", "ModelConfig", "get_provider", "get_providers", "model_config_from_settings"]
