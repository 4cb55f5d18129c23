import pytest

from rephraser.errors import (
    ApiError,
    AuthError,
    BadRequestError,
    ErrorKind,
    LLMError,
    NetworkError,
    RateLimitError,
    RephraserError,
    ServiceError,
    classify_http_error,
)


@pytest.mark.parametrize('status,expected', [
    (401, AuthError),
    (403, AuthError),
    (429, RateLimitError),
    (400, BadRequestError),
    (404, ServiceError),
    (500, ServiceError),
    (503, ServiceError),
])
def test_classify_http_error(status, expected):
    error = classify_http_error(status, "boom")
    assert type(error) is expected
    assert error.message == "boom"
    assert isinstance(error, LLMError)
    assert isinstance(error, RephraserError)


def test_service_error_carries_status():
    error = classify_http_error(502, "bad gateway")
    assert error.status_code == 502
    assert "502" in str(error)


@pytest.mark.parametrize('error,kind,retryable', [
    (NetworkError("x"), ErrorKind.NETWORK, True),
    (AuthError("x"), ErrorKind.AUTH, False),
    (RateLimitError("x"), ErrorKind.RATE_LIMIT, True),
    (BadRequestError("x"), ErrorKind.BAD_REQUEST, False),
    (ServiceError(500, "x"), ErrorKind.SERVICE, True),
    (ApiError("x"), ErrorKind.API, False),
])
def test_error_kinds(error, kind, retryable):
    assert error.kind == kind
    assert error.retryable is retryable
