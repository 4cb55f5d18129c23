from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class LLMParameters:
    """Request parameters bound to a client at construction."""

    model: str
    temperature: float = 0.7  # Passed through; the vendor rejects out-of-range values
    max_tokens: int = 500


class LLMClient(ABC):
    """Abstract base class for LLM clients.

    Implementations hold only immutable configuration, so a single instance
    can serve concurrent ``complete`` calls.
    """

    @abstractmethod
    async def complete(self, prompt: str) -> str:
        """Send a single-turn prompt and return the completion text.

        Args:
            prompt: The rendered prompt, sent as one ``user`` message.

        Returns:
            The model's response text.

        Raises:
            NetworkError: The provider could not be reached.
            AuthError: The credential was rejected (401/403).
            RateLimitError: The request was throttled (429).
            BadRequestError: The request was rejected as malformed (400).
            ServiceError: Any other non-2xx status.
            ApiError: A successful response carried no usable content.
        """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Short provider key, e.g. "openai"."""

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Model identifier this client was configured with."""
