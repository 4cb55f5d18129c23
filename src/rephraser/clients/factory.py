"""
LLM client factory.

Maps the configured provider name to a concrete ``LLMClient``. The caller
resolves the API key and passes it in.
"""

import logging

import httpx

from ..constants import KNOWN_PROVIDERS, PROVIDER_ANTHROPIC, PROVIDER_MOCK, PROVIDER_OPENAI
from ..errors import ConfigError
from ..utils.config import LLMConfig, Settings, load_settings
from .base import LLMClient, LLMParameters

logger = logging.getLogger(__name__)


def create_llm_client(
    llm_config: LLMConfig,
    api_key: str | None = None,
    settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> LLMClient:
    """Build the client for ``llm_config.provider``.

    Args:
        llm_config: The ``llm`` section of the config file.
        api_key: Credential for vendor providers. Ignored by the mock provider.
        settings: Process settings supplying base URLs and the HTTP timeout.
        http_client: Optional shared HTTP client, owned by the caller.

    Raises:
        ConfigError: If the provider is unknown or a vendor provider has no API key.
    """
    provider = llm_config.provider
    parameters = LLMParameters(
        model=llm_config.model,
        temperature=llm_config.parameters.temperature,
        max_tokens=llm_config.parameters.max_tokens,
    )

    if provider == PROVIDER_MOCK:
        from .mock_client import MockLLMClient
        client: LLMClient = MockLLMClient()

    elif provider == PROVIDER_OPENAI:
        if not api_key:
            raise ConfigError(f"An API key is required for provider '{provider}' (set {llm_config.api_key_env})")
        from .openai_client import OpenAIClient
        settings = settings or load_settings()
        client = OpenAIClient(
            api_key,
            parameters,
            base_url=settings.OPENAI_BASE_URL,
            timeout=settings.HTTP_TIMEOUT,
            http_client=http_client,
        )

    elif provider == PROVIDER_ANTHROPIC:
        if not api_key:
            raise ConfigError(f"An API key is required for provider '{provider}' (set {llm_config.api_key_env})")
        from .anthropic_client import AnthropicClient
        settings = settings or load_settings()
        client = AnthropicClient(
            api_key,
            parameters,
            base_url=settings.ANTHROPIC_BASE_URL,
            timeout=settings.HTTP_TIMEOUT,
            http_client=http_client,
        )

    else:
        raise ConfigError(f"Unknown provider: '{provider}'. Supported providers: {', '.join(KNOWN_PROVIDERS)}")

    logger.debug(f"Created LLM client: provider={client.provider_name} model={client.model_name}")
    return client
