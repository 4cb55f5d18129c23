import logging
import time

import httpx
from pydantic import BaseModel, ValidationError

from ..constants import PROVIDER_ANTHROPIC
from ..errors import ApiError, ConfigError, NetworkError, classify_http_error
from .base import LLMClient, LLMParameters

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
ANTHROPIC_VERSION = "2023-06-01"


# ---- Messages API wire schema ----

class _Message(BaseModel):
    role: str
    content: str


class _MessagesRequest(BaseModel):
    model: str
    max_tokens: int
    temperature: float
    messages: list[_Message]


class _ContentBlock(BaseModel):
    type: str
    text: str | None = None


class _Usage(BaseModel):
    input_tokens: int = 0
    output_tokens: int = 0


class _MessagesResponse(BaseModel):
    content: list[_ContentBlock]
    stop_reason: str | None = None
    usage: _Usage | None = None


class _ErrorDetail(BaseModel):
    type: str | None = None
    message: str


class _ErrorEnvelope(BaseModel):
    type: str = "error"
    error: _ErrorDetail


class AnthropicClient(LLMClient):
    """Client for the Anthropic Messages API."""

    def __init__(
        self,
        api_key: str,
        parameters: LLMParameters,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        if not api_key:
            raise ConfigError("Anthropic API key is required")
        self._api_key = api_key
        self.parameters = parameters
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http_client = http_client

    @property
    def provider_name(self) -> str:
        return PROVIDER_ANTHROPIC

    @property
    def model_name(self) -> str:
        return self.parameters.model

    def _headers(self) -> dict[str, str]:
        return {
            "x-api-key": self._api_key,
            "anthropic-version": ANTHROPIC_VERSION,
        }

    async def complete(self, prompt: str) -> str:
        request = _MessagesRequest(
            model=self.parameters.model,
            max_tokens=self.parameters.max_tokens,
            temperature=self.parameters.temperature,
            messages=[_Message(role="user", content=prompt)],
        )
        url = f"{self.base_url}/messages"

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Anthropic request: {request.model_dump_json()}")

        start = time.monotonic()
        response = await self._post(url, request.model_dump(), self._headers())
        elapsed = time.monotonic() - start

        if not response.is_success:
            message = self._error_message(response)
            logger.error(f"Anthropic API returned HTTP {response.status_code}: {message}")
            raise classify_http_error(response.status_code, message)

        try:
            result = _MessagesResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise ApiError(f"Unexpected response from Anthropic: {e}") from e

        if not result.content:
            raise ApiError("Anthropic returned no content")
        text = next((block.text for block in result.content if block.type == "text" and block.text is not None), None)
        if text is None:
            raise ApiError("Anthropic returned no text content")

        usage = result.usage
        logger.info(
            f"Anthropic call: model={self.parameters.model} "
            f"tokens_in={usage.input_tokens if usage else 0} "
            f"tokens_out={usage.output_tokens if usage else 0} latency={elapsed:.2f}s"
        )
        return text

    async def _post(self, url: str, payload: dict, headers: dict[str, str]) -> httpx.Response:
        try:
            if self._http_client is not None:
                return await self._http_client.post(url, json=payload, headers=headers)
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                return await client.post(url, json=payload, headers=headers)
        except (httpx.UnsupportedProtocol, httpx.InvalidURL) as e:
            raise ConfigError(f"Invalid Anthropic base URL '{self.base_url}': {e}") from e
        except httpx.TimeoutException as e:
            logger.error(f"Anthropic request timed out: {e}")
            raise NetworkError(f"Request to {url} timed out") from e
        except httpx.RequestError as e:
            logger.error(f"Error connecting to Anthropic: {e}")
            raise NetworkError(f"Could not connect to {url}: {e}") from e

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            return _ErrorEnvelope.model_validate_json(response.content).error.message
        except ValidationError:
            return response.text
