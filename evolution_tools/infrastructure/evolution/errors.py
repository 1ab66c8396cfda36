"""Evolution API request outcomes and failure classification.

Every outbound call ends in a RequestOutcome. Failures are classified once,
here, into a RequestErrorKind; the retry loop and the tool layer only look
at the classified data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import httpx


class RequestErrorKind(str, Enum):
    """Classification of a failed Evolution API call."""

    # Transport failures - retryable
    NETWORK = "network"
    TIMEOUT = "timeout"

    # Rejected by the API
    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    API = "api"

    UNKNOWN = "unknown"


@dataclass
class RequestError:
    """Classified failure of one Evolution API call."""

    kind: RequestErrorKind
    message: str
    status_code: int | None = None
    code: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def retryable(self) -> bool:
        """Only transport failures and server-side (5xx) API errors are retried."""
        if self.kind in (RequestErrorKind.NETWORK, RequestErrorKind.TIMEOUT):
            return True
        return (
            self.kind == RequestErrorKind.API
            and self.status_code is not None
            and self.status_code >= 500
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "status_code": self.status_code,
            "code": self.code,
            "details": self.details,
        }


@dataclass
class RequestOutcome:
    """Result of an Evolution API call: success data or a classified error."""

    data: Any = None
    status_code: int | None = None
    error: RequestError | None = None

    def __post_init__(self) -> None:
        if self.error is not None and (self.data is not None or self.status_code is not None):
            raise ValueError("RequestOutcome cannot carry both data and error")

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def ok(cls, data: Any, status_code: int) -> RequestOutcome:
        return cls(data=data, status_code=status_code)

    @classmethod
    def failed(cls, error: RequestError) -> RequestOutcome:
        return cls(error=error)


def parse_response_body(response: httpx.Response) -> Any:
    """Decode a response body as JSON, falling back to text (or None if empty)."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def extract_api_message(body: Any, fallback: str) -> str:
    """Pull a human readable message out of an Evolution error envelope.

    The API answers errors with ``{"status", "error", "response": {"message"}}``
    where ``message`` is either a string or a list of strings.
    """
    if isinstance(body, dict):
        response = body.get("response")
        if isinstance(response, dict):
            message = response.get("message")
            if isinstance(message, list) and message:
                return "; ".join(str(item) for item in message)
            if isinstance(message, str) and message:
                return message
        for key in ("message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    if isinstance(body, str) and body.strip():
        return body.strip()
    return fallback


def classify_failure(failure: Exception | httpx.Response) -> RequestError:
    """Classify a raised exception or a non-2xx response.

    Order matters: httpx timeouts are transport errors too, and
    ``TimeoutError`` is an ``OSError``, so timeouts are checked first.
    """
    if isinstance(failure, httpx.HTTPStatusError):
        failure = failure.response

    if isinstance(failure, httpx.Response):
        return _classify_response(failure)

    if isinstance(failure, (httpx.TimeoutException, TimeoutError)):
        return RequestError(
            kind=RequestErrorKind.TIMEOUT,
            message=str(failure) or "Request timed out",
            code=type(failure).__name__,
            details={"original_error": repr(failure)},
        )

    if isinstance(failure, (httpx.TransportError, OSError)):
        return RequestError(
            kind=RequestErrorKind.NETWORK,
            message=str(failure) or "Network error",
            code=type(failure).__name__,
            details={"original_error": repr(failure)},
        )

    return RequestError(
        kind=RequestErrorKind.UNKNOWN,
        message=str(failure) or type(failure).__name__,
        code=type(failure).__name__,
        details={"original_error": repr(failure)},
    )


def _classify_response(response: httpx.Response) -> RequestError:
    status = response.status_code
    body = parse_response_body(response)
    message = extract_api_message(body, f"HTTP {status}")
    details: dict[str, Any] = {"status_code": status, "api_response": body}

    if status in (401, 403):
        kind = RequestErrorKind.AUTHENTICATION
    elif status == 429:
        kind = RequestErrorKind.RATE_LIMIT
        retry_after = response.headers.get("retry-after")
        if retry_after is not None:
            details["retry_after"] = retry_after
    else:
        kind = RequestErrorKind.API

    return RequestError(
        kind=kind,
        message=message,
        status_code=status,
        code=f"HTTP_{status}",
        details=details,
    )
