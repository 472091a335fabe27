"""Google Gemini LLM provider implementation.

Handles Google's Gemini models via the langchain-google-genai package.
Requires a valid API key for authentication.
"""

from langchain_google_genai import ChatGoogleGenerativeAI

from .base import GenerationOptions, LLMProvider, ModelConfig


class GeminiProvider(LLMProvider):
    """Provider for Google Gemini models.

    Available models:
        - gemini-2.0-flash (fast and efficient, default)
        - gemini-2.0-flash-lite (fastest, most economical)
        - gemini-1.5-pro (previous generation, most capable)
    """

    def get_llm(
        self,
        config: ModelConfig,
        options: GenerationOptions | None = None,
    ) -> ChatGoogleGenerativeAI:
        """Return a ChatGoogleGenerativeAI client configured for Gemini.

        Raises:
            ValueError: If api_key is not provided
        """
        if not config.api_key:
            raise ValueError(
                "Google AI API key is required. "
                "Set it via the GOOGLE_API_KEY environment variable."
            )

        options = options or GenerationOptions()
        sampling = {
            "temperature": options.temperature,
            "top_p": options.top_p,
            "top_k": options.top_k,
            "max_output_tokens": options.max_tokens,
        }

        return ChatGoogleGenerativeAI(
            model=config.model_id,
            google_api_key=config.api_key,
            **{k: v for k, v in sampling.items() if v is not None},
        )
