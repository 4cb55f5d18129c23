"""Text transformation with LLM-backed actions."""

__version__ = "0.1.0"

from .actions import Action, ActionResolver, TemplateEngine
from .clients import AnthropicClient, LLMClient, LLMParameters, MockLLMClient, OpenAIClient, create_llm_client
from .core import Rephraser
