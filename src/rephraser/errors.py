"""Error taxonomy shared by the resolver, template engine and LLM clients.

Every failure the core can produce is one of the exceptions below. Provider
failures derive from ``LLMError`` and are classified from the HTTP status code,
never from the contents of the response body.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Stable identifiers for each error class."""

    CONFIG = "config"
    ACTION_NOT_FOUND = "action_not_found"
    INVALID_TEMPLATE = "invalid_template"
    NETWORK = "network"
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    BAD_REQUEST = "bad_request"
    SERVICE = "service"
    API = "api"
    OUTPUT = "output"


class RephraserError(Exception):
    """Base class for all rephraser errors."""

    kind: ErrorKind
    retryable: bool = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(RephraserError):
    kind = ErrorKind.CONFIG

    def __str__(self) -> str:
        return f"Configuration error: {self.message}"


class ActionNotFoundError(RephraserError):
    kind = ErrorKind.ACTION_NOT_FOUND

    def __init__(self, name: str):
        super().__init__(f"Action '{name}' not found")
        self.name = name


class InvalidTemplateError(RephraserError):
    """A template still references unbound variables after substitution."""

    kind = ErrorKind.INVALID_TEMPLATE

    def __init__(self, detail: str, missing: list[str] | None = None):
        super().__init__(detail)
        self.missing = list(missing or [])

    def __str__(self) -> str:
        return f"Invalid template: {self.message}"


class OutputError(RephraserError):
    kind = ErrorKind.OUTPUT

    def __str__(self) -> str:
        return f"Output error: {self.message}"


class LLMError(RephraserError):
    """Base class for failures reported by an LLM provider."""


class NetworkError(LLMError):
    """The provider could not be reached (connect, DNS, TLS, timeout)."""

    kind = ErrorKind.NETWORK
    retryable = True

    def __str__(self) -> str:
        return f"Network error: {self.message}"


class AuthError(LLMError):
    kind = ErrorKind.AUTH

    def __str__(self) -> str:
        return f"Authentication failed: {self.message}"


class RateLimitError(LLMError):
    kind = ErrorKind.RATE_LIMIT
    retryable = True

    def __str__(self) -> str:
        return f"Rate limit exceeded: {self.message}"


class BadRequestError(LLMError):
    kind = ErrorKind.BAD_REQUEST

    def __str__(self) -> str:
        return f"Bad request: {self.message}"


class ServiceError(LLMError):
    """Provider-side failure (5xx or an unrecognized status)."""

    kind = ErrorKind.SERVICE
    retryable = True

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code

    def __str__(self) -> str:
        return f"Service error (HTTP {self.status_code}): {self.message}"


class ApiError(LLMError):
    """The provider answered successfully but without usable content."""

    kind = ErrorKind.API

    def __str__(self) -> str:
        return f"LLM API error: {self.message}"


def classify_http_error(status_code: int, message: str) -> LLMError:
    """Map a non-2xx HTTP status to the matching provider error."""
    if status_code in (401, 403):
        return AuthError(message)
    if status_code == 429:
        return RateLimitError(message)
    if status_code == 400:
        return BadRequestError(message)
    return ServiceError(status_code, message)
