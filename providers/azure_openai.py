"""Azure OpenAI LLM provider implementation.

Handles GPT deployments hosted on Azure via the langchain-openai package.
"""

from langchain_openai import AzureChatOpenAI

from .base import GenerationOptions, LLMProvider, ModelConfig


class AzureOpenAIProvider(LLMProvider):
    """Provider for Azure OpenAI deployments.

    ``model_id`` is the deployment name, not the underlying model name.
    """

    def get_llm(
        self,
        config: ModelConfig,
        options: GenerationOptions | None = None,
    ) -> AzureChatOpenAI:
        """Return an AzureChatOpenAI client for the configured deployment.

        Azure has no top_k; it is ignored.

        Raises:
            ValueError: If the endpoint or key is missing
        """
        if not config.api_base or not config.api_key:
            raise ValueError(
                "Azure OpenAI endpoint and key are required. "
                "Set AZURE_OPENAI_ENDPOINT and AZURE_OPENAI_KEY environment variables."
            )

        options = options or GenerationOptions()
        sampling = {
            "temperature": options.temperature,
            "top_p": options.top_p,
            "max_tokens": options.max_tokens,
        }

        return AzureChatOpenAI(
            azure_deployment=config.model_id,
            azure_endpoint=config.api_base,
            api_key=config.api_key,
            api_version=config.api_version,
            **{k: v for k, v in sampling.items() if v is not None},
        )
