"""Resilient HTTP client for the Evolution API.

Wraps a lazily created ``httpx.AsyncClient`` with API key injection, a hard
per-attempt timeout, bounded retry and failure classification. Public
methods return a RequestOutcome and do not raise.
"""

import asyncio
import logging
from typing import Any
from urllib.parse import urlparse

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

from evolution_tools import __version__
from evolution_tools.domain.model.endpoint import HttpMethod
from evolution_tools.infrastructure.evolution.errors import (
    RequestOutcome,
    classify_failure,
    parse_response_body,
)
from evolution_tools.infrastructure.evolution.retry import RetryPolicy

logger = logging.getLogger(__name__)


class EvolutionClientConfig(BaseModel):
    """Connection and retry settings for one Evolution API server."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    api_key: str
    timeout_ms: int = Field(default=30000, gt=0)
    retry_attempts: int = Field(default=3, ge=0, le=10)
    retry_delay_ms: int = Field(default=1000, gt=0)
    backoff_factor: float = Field(default=1.0, ge=1.0)
    max_retry_delay_ms: int = Field(default=30000, gt=0)
    enable_logging: bool = False

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        """Require an absolute http(s) URL and drop any trailing slash."""
        parsed = urlparse(value.strip())
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("base_url must be an absolute http(s) URL")
        return value.strip().rstrip("/")

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("api_key must not be empty")
        return value.strip()


class EvolutionHttpClient:
    """HTTP client for the Evolution API.

    One instance is shared by every tool targeting the same server.
    Retry state lives in each call; concurrent calls share only the
    connection pool and the request counter.
    """

    USER_AGENT = f"evolution-tools/{__version__}"

    def __init__(
        self,
        config: EvolutionClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Validated connection settings
            transport: Optional httpx transport (tests inject ``httpx.MockTransport``)
        """
        self._config = config
        self._transport = transport
        self._retry_policy = RetryPolicy(
            retry_attempts=config.retry_attempts,
            retry_delay_ms=config.retry_delay_ms,
            backoff_factor=config.backoff_factor,
            max_delay_ms=config.max_retry_delay_ms,
        )
        self._http_client: httpx.AsyncClient | None = None
        self._request_count = 0

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._retry_policy

    def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create the underlying HTTP client."""
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(
                base_url=self._config.base_url,
                headers={
                    "apikey": self._config.api_key,
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                    "User-Agent": self.USER_AGENT,
                },
                timeout=self._config.timeout_ms / 1000,
                transport=self._transport,
            )
        return self._http_client

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._http_client is not None and not self._http_client.is_closed:
            await self._http_client.aclose()
        self._http_client = None

    async def __aenter__(self) -> "EvolutionHttpClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def get(self, path: str, params: dict[str, Any] | None = None) -> RequestOutcome:
        return await self.request(HttpMethod.GET, path, params=params)

    async def post(
        self,
        path: str,
        body: Any = None,
        params: dict[str, Any] | None = None,
    ) -> RequestOutcome:
        return await self.request(HttpMethod.POST, path, body=body, params=params)

    async def put(
        self,
        path: str,
        body: Any = None,
        params: dict[str, Any] | None = None,
    ) -> RequestOutcome:
        return await self.request(HttpMethod.PUT, path, body=body, params=params)

    async def delete(
        self,
        path: str,
        body: Any = None,
        params: dict[str, Any] | None = None,
    ) -> RequestOutcome:
        return await self.request(HttpMethod.DELETE, path, body=body, params=params)

    async def request(
        self,
        method: HttpMethod | str,
        path: str,
        body: Any = None,
        params: dict[str, Any] | None = None,
    ) -> RequestOutcome:
        """Send a request, retrying retryable failures.

        Args:
            method: HTTP method
            path: Path relative to the configured base URL
            body: JSON body (omitted when None)
            params: Query string parameters

        Returns:
            Success data with status code, or the last classified error
        """
        method_name = method.value if isinstance(method, HttpMethod) else str(method).upper()

        attempt = 0
        while True:
            attempt += 1
            outcome = await self._send_once(method_name, path, body, params)
            if outcome.success:
                return outcome

            error = outcome.error
            if not self._retry_policy.should_retry(attempt, error):
                logger.warning(
                    f"Evolution API {method_name} {path} failed after {attempt} attempt(s): "
                    f"{error.kind.value}: {error.message}"
                )
                return outcome

            delay_ms = self._retry_policy.calculate_delay(attempt)
            logger.warning(self._retry_policy.get_retry_message(attempt, delay_ms, error))
            await asyncio.sleep(delay_ms / 1000)

    async def _send_once(
        self,
        method: str,
        path: str,
        body: Any,
        params: dict[str, Any] | None,
    ) -> RequestOutcome:
        self._request_count += 1
        client = self._get_http_client()

        if self._config.enable_logging:
            logger.info(f"HTTP {method} {path} params={params} body={body}")

        try:
            response = await asyncio.wait_for(
                client.request(method, path, json=body, params=params),
                timeout=self._config.timeout_ms / 1000,
            )
        except Exception as e:
            error = classify_failure(e)
            if self._config.enable_logging:
                logger.info(f"HTTP {method} {path} raised {error.code}: {error.message}")
            return RequestOutcome.failed(error)

        if self._config.enable_logging:
            logger.info(f"HTTP {method} {path} -> {response.status_code}")

        if response.is_success:
            return RequestOutcome.ok(parse_response_body(response), response.status_code)
        return RequestOutcome.failed(classify_failure(response))

    async def health_check(self) -> bool:
        """Check if the Evolution API answers ``GET /`` (single attempt, no retry)."""
        outcome = await self._send_once(HttpMethod.GET.value, "/", None, None)
        return outcome.success

    def stats(self) -> dict[str, int]:
        """Get request diagnostics. Every attempt, retries included, is counted."""
        return {"request_count": self._request_count}

    def get_config(self) -> EvolutionClientConfig:
        return self._config.model_copy()
