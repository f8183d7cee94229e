"""
Kroger Products API client.

Primary nutrition provider: retail catalog products with store prices
and printed nutrition labels. Authenticates with OAuth2 client
credentials.
"""

import time
from typing import Callable, Optional

import aiohttp
import structlog

from grocery_enrichment.domain.nutrition.provider_models import PrimaryProduct
from grocery_enrichment.domain.shared.errors import (
    ExternalServiceError,
    ProviderAuthError,
    ServiceUnavailableError,
)
from grocery_enrichment.infrastructure.kroger.mapper import KrogerMapper
from grocery_enrichment.infrastructure.provider_client import ProviderClient

logger = structlog.get_logger(__name__)

# Refresh the token this long before the provider says it expires
TOKEN_REFRESH_MARGIN_SECONDS = 60


class KrogerClient(ProviderClient):
    """Kroger Products API client.

    Example:
        >>> async def demo():
        ...     async with KrogerClient("client-id", "secret") as client:
        ...         products = await client.search_products("milk", limit=1)
        ...         return products[0].nutrition()
    """

    BASE_URL = "https://api.kroger.com/v1"
    SCOPE = "product.compact"
    provider_name = "kroger"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        location_id: Optional[str] = None,
        clock: Callable[[], float] = time.monotonic,
        timeout_seconds: float = 10,
        max_retries: int = 3,
        backoff_seconds: float = 1.0,
    ) -> None:
        """Initialize client.

        Args:
            client_id: OAuth client ID
            client_secret: OAuth client secret
            location_id: Store for prices and availability (optional)
            clock: Time source for token expiry, injectable for tests
            timeout_seconds: Request timeout
            max_retries: Max retry attempts
            backoff_seconds: Exponential backoff multiplier
        """
        super().__init__(
            timeout_seconds=timeout_seconds,
            max_retries=max_retries,
            backoff_seconds=backoff_seconds,
        )
        self.client_id = client_id
        self.client_secret = client_secret
        self.location_id = location_id
        self._clock = clock
        self._access_token: Optional[str] = None
        self._token_expires_at = 0.0

    async def get_access_token(self) -> str:
        """Cached client-credentials token, refreshed shortly before expiry.

        Raises:
            ProviderAuthError: If the token request fails or returns no token
        """
        if self._access_token and self._clock() < self._token_expires_at:
            return self._access_token

        if not self.client_id or not self.client_secret:
            msg = "Kroger credentials not configured"
            raise ProviderAuthError(msg)

        try:
            data = await self._request_json(
                "POST",
                f"{self.BASE_URL}/connect/oauth2/token",
                data={"grant_type": "client_credentials", "scope": self.SCOPE},
                auth=aiohttp.BasicAuth(self.client_id, self.client_secret),
            )
        except (ProviderAuthError, ServiceUnavailableError):
            raise
        except ExternalServiceError as e:
            msg = f"Kroger token request failed: {e}"
            raise ProviderAuthError(msg) from e

        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            msg = "Kroger token response missing access_token"
            raise ProviderAuthError(msg)

        expires_in = float(data.get("expires_in") or 0)
        self._access_token = token
        self._token_expires_at = self._clock() + expires_in - TOKEN_REFRESH_MARGIN_SECONDS
        logger.info("Got new Kroger access token", expires_in=expires_in)
        return token

    async def search_products(self, term: str, limit: int = 1) -> list[PrimaryProduct]:
        """Search the catalog.

        Args:
            term: Search term
            limit: Max products to return

        Returns:
            Matching products, possibly empty

        Raises:
            RateLimitError: If rate limit exceeded
            ProviderAuthError: If credentials are rejected
            ProviderTimeoutError: If request times out
            ExternalServiceError: If API error
        """
        token = await self.get_access_token()

        params: dict[str, str | int] = {
            "filter.term": term,
            "filter.limit": limit,
        }
        if self.location_id:
            params["filter.locationId"] = self.location_id

        data = await self._request_json(
            "GET",
            f"{self.BASE_URL}/products",
            params=params,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
            },
        )

        if not isinstance(data, dict):
            msg = "Kroger products response is not an object"
            raise ExternalServiceError(msg)

        products = KrogerMapper.parse_search_response(data)
        logger.debug("Kroger search complete", term=term, results_count=len(products))
        return products
