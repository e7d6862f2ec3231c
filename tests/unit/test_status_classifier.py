"""
Tests del clasificador de respuestas de la fuente externa.
"""
import pytest

from app.infrastructure.external.cupid.status import classify_response
from app.shared.exceptions.infrastructure import (
    ExternalSourceClientError,
    ExternalSourceServerError,
    UnexpectedStatusError,
)


@pytest.mark.parametrize("status_code", [200, 201, 204, 299])
def test_success_returns_body(status_code):
    assert classify_response(status_code, b'{"ok": true}', {}) == b'{"ok": true}'


@pytest.mark.parametrize("status_code", [400, 404, 429, 499])
def test_client_errors(status_code):
    with pytest.raises(ExternalSourceClientError) as exc_info:
        classify_response(status_code, b"", {"X-Request-Id": "req-123"})

    err = exc_info.value
    assert err.upstream_status == status_code
    assert err.correlation_id == "req-123"
    assert err.retryable is False


@pytest.mark.parametrize("status_code", [500, 502, 503, 599])
def test_server_errors(status_code):
    with pytest.raises(ExternalSourceServerError) as exc_info:
        classify_response(status_code, b"", {"X-Request-Id": "req-500"})

    assert exc_info.value.upstream_status == status_code
    assert exc_info.value.correlation_id == "req-500"
    assert exc_info.value.retryable is True


def test_missing_correlation_header_gives_empty_id():
    with pytest.raises(ExternalSourceServerError) as exc_info:
        classify_response(503, b"", {})

    assert exc_info.value.correlation_id == ""
    assert exc_info.value.message == "error: status=503 request_id="


def test_correlation_header_lookup_is_case_insensitive():
    with pytest.raises(ExternalSourceClientError) as exc_info:
        classify_response(404, b"", {"x-request-id": "abc"})

    assert exc_info.value.correlation_id == "abc"


@pytest.mark.parametrize("status_code", [100, 199, 300, 301, 304, 399, 600])
def test_unexpected_status(status_code):
    with pytest.raises(UnexpectedStatusError) as exc_info:
        classify_response(status_code, b"", {})

    assert exc_info.value.upstream_status == status_code
