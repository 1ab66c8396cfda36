"""Tests for request failure classification."""

import httpx
import pytest

from evolution_tools.infrastructure.evolution.errors import (
    RequestError,
    RequestErrorKind,
    RequestOutcome,
    classify_failure,
    extract_api_message,
)

REQUEST = httpx.Request("GET", "https://evolution.test/instance/fetchInstances")


def _response(status: int, **kwargs) -> httpx.Response:
    return httpx.Response(status, request=REQUEST, **kwargs)


class TestClassifyFailure:
    """Tests for classify_failure."""

    @pytest.mark.parametrize(
        "error",
        [
            httpx.ReadTimeout("read timed out", request=REQUEST),
            httpx.ConnectTimeout("connect timed out", request=REQUEST),
            TimeoutError(),
        ],
    )
    def test_timeouts(self, error) -> None:
        """Should classify timeouts before transport errors."""
        classified = classify_failure(error)

        assert classified.kind == RequestErrorKind.TIMEOUT
        assert classified.retryable is True

    @pytest.mark.parametrize(
        "error",
        [
            httpx.ConnectError("connection refused", request=REQUEST),
            httpx.RemoteProtocolError("peer closed", request=REQUEST),
            ConnectionResetError("connection reset by peer"),
            OSError("name resolution failed"),
        ],
    )
    def test_network_errors(self, error) -> None:
        """Should classify transport failures as network errors."""
        classified = classify_failure(error)

        assert classified.kind == RequestErrorKind.NETWORK
        assert classified.code == type(error).__name__
        assert classified.retryable is True

    @pytest.mark.parametrize("status", [401, 403])
    def test_authentication(self, status) -> None:
        """Should classify 401/403 as authentication failures."""
        classified = classify_failure(_response(status, json={"error": "Unauthorized"}))

        assert classified.kind == RequestErrorKind.AUTHENTICATION
        assert classified.status_code == status
        assert classified.retryable is False

    def test_rate_limit_keeps_retry_after(self) -> None:
        """Should classify 429 and keep the retry-after header."""
        classified = classify_failure(_response(429, headers={"retry-after": "5"}))

        assert classified.kind == RequestErrorKind.RATE_LIMIT
        assert classified.details["retry_after"] == "5"
        assert classified.retryable is False

    def test_api_error_extracts_envelope_message(self) -> None:
        """Should pull the message out of the Evolution error envelope."""
        body = {
            "status": 404,
            "error": "Not Found",
            "response": {"message": ["The \"ghost\" instance does not exist"]},
        }

        classified = classify_failure(_response(404, json=body))

        assert classified.kind == RequestErrorKind.API
        assert classified.code == "HTTP_404"
        assert classified.message == "The \"ghost\" instance does not exist"
        assert classified.details["api_response"] == body
        assert classified.retryable is False

    @pytest.mark.parametrize("status,retryable", [(500, True), (502, True), (503, True), (409, False)])
    def test_api_error_retryability(self, status, retryable) -> None:
        """Should retry only server-side API errors."""
        assert classify_failure(_response(status)).retryable is retryable

    def test_http_status_error_uses_response(self) -> None:
        """Should unwrap HTTPStatusError into its response."""
        response = _response(503, text="unavailable")
        error = httpx.HTTPStatusError("boom", request=REQUEST, response=response)

        classified = classify_failure(error)

        assert classified.kind == RequestErrorKind.API
        assert classified.message == "unavailable"

    def test_unknown(self) -> None:
        """Should fall back to unknown for anything else."""
        classified = classify_failure(RuntimeError("weird"))

        assert classified.kind == RequestErrorKind.UNKNOWN
        assert classified.message == "weird"
        assert classified.retryable is False


class TestExtractApiMessage:
    """Tests for extract_api_message."""

    def test_string_message(self) -> None:
        assert extract_api_message({"response": {"message": "bad"}}, "x") == "bad"

    def test_top_level_error(self) -> None:
        assert extract_api_message({"error": "Forbidden"}, "x") == "Forbidden"

    def test_fallback(self) -> None:
        assert extract_api_message(None, "HTTP 500") == "HTTP 500"


class TestRequestOutcome:
    """Tests for RequestOutcome."""

    def test_ok(self) -> None:
        outcome = RequestOutcome.ok({"ok": True}, 200)

        assert outcome.success is True
        assert outcome.status_code == 200

    def test_failed(self) -> None:
        outcome = RequestOutcome.failed(RequestError(RequestErrorKind.NETWORK, "down"))

        assert outcome.success is False
        assert outcome.data is None

    def test_both_raises(self) -> None:
        """Should never carry both data and error."""
        with pytest.raises(ValueError):
            RequestOutcome(data={}, error=RequestError(RequestErrorKind.UNKNOWN, "x"))
