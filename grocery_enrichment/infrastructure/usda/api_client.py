"""
USDA FoodData Central API client.

Secondary nutrition provider. Handles HTTP requests with rate limiting
and retries.
"""

from typing import Optional

import structlog

from grocery_enrichment.domain.nutrition.provider_models import SecondaryFood
from grocery_enrichment.domain.shared.errors import ExternalServiceError, ProviderAuthError
from grocery_enrichment.infrastructure.provider_client import ProviderClient
from grocery_enrichment.infrastructure.rate_limiter import RateLimiter
from grocery_enrichment.infrastructure.usda.mapper import USDAMapper

logger = structlog.get_logger(__name__)


class USDAClient(ProviderClient):
    """USDA FoodData Central API client."""

    BASE_URL = "https://api.nal.usda.gov/fdc/v1"
    provider_name = "usda"

    def __init__(
        self,
        api_key: str,
        rate_limiter: Optional[RateLimiter] = None,
        timeout_seconds: float = 10,
        max_retries: int = 3,
        backoff_seconds: float = 1.0,
    ) -> None:
        """Initialize API client.

        Args:
            api_key: USDA API key
            rate_limiter: Token bucket (default 1000 requests/hour)
            timeout_seconds: Request timeout
            max_retries: Max retry attempts
            backoff_seconds: Exponential backoff multiplier
        """
        super().__init__(
            timeout_seconds=timeout_seconds,
            max_retries=max_retries,
            backoff_seconds=backoff_seconds,
        )
        self.api_key = api_key
        self.rate_limiter = rate_limiter or RateLimiter()

    async def search_foods(self, query: str, page_size: int = 5) -> list[SecondaryFood]:
        """Search USDA database by food description.

        Args:
            query: Food description
            page_size: Max results to return

        Returns:
            Matching foods in relevance order, possibly empty

        Raises:
            RateLimitError: If rate limit exceeded
            ProviderAuthError: If the API key is missing or rejected
            ProviderTimeoutError: If request times out
            ExternalServiceError: If API error

        Example:
            >>> async def demo():
            ...     async with USDAClient(api_key="test") as client:
            ...         foods = await client.search_foods("banana", page_size=3)
            ...         return [food.description for food in foods]
        """
        if not self.api_key:
            msg = "USDA API key not configured"
            raise ProviderAuthError(msg)

        await self.rate_limiter.acquire()

        params: dict[str, str | int] = {
            "query": query,
            "pageSize": page_size,
            "api_key": self.api_key,
        }

        data = await self._request_json("GET", f"{self.BASE_URL}/foods/search", params=params)

        if not isinstance(data, dict):
            msg = "USDA search response is not an object"
            raise ExternalServiceError(msg)

        foods = USDAMapper.parse_search_response(data)
        logger.debug("USDA search complete", query=query, results_count=len(foods))
        return foods
