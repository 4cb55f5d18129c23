from .base import LLMClient, LLMParameters
from .openai_client import OpenAIClient
from .anthropic_client import AnthropicClient
from .mock_client import MockLLMClient
from .factory import create_llm_client

__all__ = [
    'LLMClient',
    'LLMParameters',
    'OpenAIClient',
    'AnthropicClient',
    'MockLLMClient',
    'create_llm_client',
]
