"""
Shared HTTP plumbing for nutrition provider clients.

Session lifecycle, status → error mapping, retries with exponential
backoff (tenacity) and a per-client circuit breaker (circuitbreaker).
"""

import asyncio
from typing import Any, Optional

import aiohttp
import structlog
from circuitbreaker import CircuitBreaker, CircuitBreakerError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from grocery_enrichment.domain.shared.errors import (
    ExternalServiceError,
    ProviderAuthError,
    ProviderTimeoutError,
    RateLimitError,
    ServiceUnavailableError,
)

logger = structlog.get_logger(__name__)

# Transport failures worth another attempt
RETRYABLE_ERRORS = (asyncio.TimeoutError, aiohttp.ClientConnectionError)


class ProviderClient:
    """Base class for provider API clients.

    Subclasses call ``_request_json`` and map the payload. Use as an
    async context manager:

        >>> async def demo():
        ...     async with USDAClient(api_key="key") as client:
        ...         return await client.search_foods("apple")
    """

    provider_name = "provider"

    def __init__(
        self,
        timeout_seconds: float = 10,
        max_retries: int = 3,
        backoff_seconds: float = 1.0,
        failure_threshold: int = 5,
        recovery_timeout: int = 60,
    ) -> None:
        """Initialize client.

        Args:
            timeout_seconds: Total timeout per HTTP request
            max_retries: Attempts per call, first one included
            backoff_seconds: Exponential backoff multiplier
            failure_threshold: Consecutive failures before the breaker opens
            recovery_timeout: Seconds the breaker stays open
        """
        self.timeout_seconds = timeout_seconds
        self.max_retries = max(1, max_retries)
        self.backoff_seconds = backoff_seconds
        self._session: Optional[aiohttp.ClientSession] = None
        self._breaker = CircuitBreaker(
            failure_threshold=failure_threshold,
            recovery_timeout=recovery_timeout,
            expected_exception=ExternalServiceError,
            name=f"{self.provider_name}_api",
        )
        self._guarded_request = self._breaker(self._request_with_retry)

    async def __aenter__(self) -> "ProviderClient":
        """Async context manager entry."""
        self._session = aiohttp.ClientSession()
        return self

    async def __aexit__(self, *args: object) -> None:
        """Async context manager exit."""
        if self._session:
            await self._session.close()
            self._session = None

    @property
    def circuit_open(self) -> bool:
        return bool(self._breaker.opened)

    async def _request_json(self, method: str, url: str, **kwargs: Any) -> Any:
        """Perform one guarded request and return the decoded JSON body.

        Raises:
            RateLimitError: Provider answered 429
            ProviderAuthError: Provider answered 401/403
            ProviderTimeoutError: Every attempt timed out
            ServiceUnavailableError: Breaker open or client not entered
            ExternalServiceError: Any other failure
        """
        if not self._session:
            msg = "Client not initialized, use async with"
            raise ServiceUnavailableError(msg)

        try:
            return await self._guarded_request(method, url, **kwargs)
        except CircuitBreakerError as e:
            msg = f"{self.provider_name} circuit open"
            logger.warning(msg, provider=self.provider_name)
            raise ServiceUnavailableError(msg) from e

    async def _request_with_retry(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_retries),
                wait=wait_exponential(multiplier=self.backoff_seconds, max=10),
                retry=retry_if_exception_type(RETRYABLE_ERRORS),
                reraise=True,
            ):
                with attempt:
                    return await self._send(method, url, **kwargs)
        except asyncio.TimeoutError as e:
            msg = f"{self.provider_name} API timeout"
            raise ProviderTimeoutError(msg) from e
        except aiohttp.ClientError as e:
            msg = f"{self.provider_name} API client error: {e}"
            raise ExternalServiceError(msg) from e

        # Should not reach here
        msg = "Max retries exceeded"
        raise ExternalServiceError(msg)

    async def _send(self, method: str, url: str, **kwargs: Any) -> Any:
        if self._session is None:
            msg = f"{self.provider_name} session closed"
            raise ServiceUnavailableError(msg)
        request = self._session.post if method == "POST" else self._session.get

        async with request(
            url,
            timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
            **kwargs,
        ) as response:
            if response.status == 429:
                msg = f"{self.provider_name} rate limit"
                logger.warning(msg, provider=self.provider_name)
                raise RateLimitError(msg)

            if response.status in (401, 403):
                msg = f"{self.provider_name} rejected credentials: {response.status}"
                raise ProviderAuthError(msg)

            if response.status >= 400:
                msg = f"{self.provider_name} API error: {response.status}"
                raise ExternalServiceError(msg)

            try:
                return await response.json()
            except (aiohttp.ContentTypeError, ValueError) as e:
                msg = f"{self.provider_name} returned malformed JSON"
                raise ExternalServiceError(msg) from e
