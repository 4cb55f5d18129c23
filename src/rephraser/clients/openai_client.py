import logging
import time

import httpx
from pydantic import BaseModel, ValidationError

from ..constants import PROVIDER_OPENAI
from ..errors import ApiError, ConfigError, NetworkError, classify_http_error
from .base import LLMClient, LLMParameters

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"


# ---- Chat Completions wire schema ----

class _ChatMessage(BaseModel):
    role: str
    content: str | None = None


class _ChatRequest(BaseModel):
    model: str
    messages: list[_ChatMessage]
    temperature: float
    max_tokens: int


class _Choice(BaseModel):
    index: int = 0
    message: _ChatMessage
    finish_reason: str | None = None


class _Usage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class _ChatResponse(BaseModel):
    choices: list[_Choice]
    usage: _Usage | None = None


class _ErrorDetail(BaseModel):
    message: str
    type: str | None = None
    code: str | int | None = None


class _ErrorEnvelope(BaseModel):
    error: _ErrorDetail


class OpenAIClient(LLMClient):
    """Client for the OpenAI Chat Completions API."""

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
            raise ConfigError("OpenAI API key is required")
        self._api_key = api_key
        self.parameters = parameters
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http_client = http_client  # Owned by the caller when given

    @property
    def provider_name(self) -> str:
        return PROVIDER_OPENAI

    @property
    def model_name(self) -> str:
        return self.parameters.model

    async def complete(self, prompt: str) -> str:
        request = _ChatRequest(
            model=self.parameters.model,
            messages=[_ChatMessage(role="user", content=prompt)],
            temperature=self.parameters.temperature,
            max_tokens=self.parameters.max_tokens,
        )
        url = f"{self.base_url}/chat/completions"
        headers = {"Authorization": f"Bearer {self._api_key}"}

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"OpenAI request: {request.model_dump_json()}")

        start = time.monotonic()
        response = await self._post(url, request.model_dump(), headers)
        elapsed = time.monotonic() - start

        if not response.is_success:
            message = self._error_message(response)
            logger.error(f"OpenAI API returned HTTP {response.status_code}: {message}")
            raise classify_http_error(response.status_code, message)

        try:
            completion = _ChatResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise ApiError(f"Unexpected response from OpenAI: {e}") from e

        if not completion.choices:
            raise ApiError("OpenAI returned no choices")
        text = completion.choices[0].message.content
        if text is None:
            raise ApiError("OpenAI returned a choice without text content")

        usage = completion.usage
        logger.info(
            f"OpenAI call: model={self.parameters.model} "
            f"tokens_in={usage.prompt_tokens if usage else 0} "
            f"tokens_out={usage.completion_tokens if usage else 0} latency={elapsed:.2f}s"
        )
        return text

    async def _post(self, url: str, payload: dict, headers: dict[str, str]) -> httpx.Response:
        try:
            if self._http_client is not None:
                return await self._http_client.post(url, json=payload, headers=headers)
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                return await client.post(url, json=payload, headers=headers)
        except (httpx.UnsupportedProtocol, httpx.InvalidURL) as e:
            raise ConfigError(f"Invalid OpenAI base URL '{self.base_url}': {e}") from e
        except httpx.TimeoutException as e:
            logger.error(f"OpenAI request timed out: {e}")
            raise NetworkError(f"Request to {url} timed out") from e
        except httpx.RequestError as e:
            logger.error(f"Error connecting to OpenAI: {e}")
            raise NetworkError(f"Could not connect to {url}: {e}") from e

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            return _ErrorEnvelope.model_validate_json(response.content).error.message
        except ValidationError:
            return response.text
