"""
Domain exceptions.

Typed exceptions for explicit error handling.
Provider adapters raise these; the lookup service decides which ones
degrade to "no data" and which ones surface.
"""

from __future__ import annotations


# ═══════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════


class DomainError(Exception):
    """
    Base exception for all engine errors.

    All engine-specific exceptions inherit from this.
    Allows catching all engine errors with single except clause.
    """

    pass


# ═══════════════════════════════════════════════════════════
# ENRICHMENT EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class EnrichmentError(DomainError):
    """
    Nutrition enrichment failed.

    Raised when:
    - Both providers are unusable for a lookup
    - A merged record violates its invariants

    Example:
        >>> raise EnrichmentError("No nutrition data for 'dragon fruit'")
    """

    pass


class InvalidQuantityError(DomainError):
    """
    Invalid quantity specified.

    Raised when:
    - Quantity is negative
    - Quantity is not a number

    Example:
        >>> raise InvalidQuantityError("Quantity must be non-negative: -2 lb")
    """

    pass


# ═══════════════════════════════════════════════════════════
# EXTERNAL SERVICE EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class ExternalServiceError(DomainError):
    """
    External nutrition provider failed.

    Raised when:
    - Non-success HTTP status
    - Transport error after retries
    - Malformed response payload

    Example:
        >>> raise ExternalServiceError("USDA API error: 500")
    """

    pass


class RateLimitError(ExternalServiceError):
    """
    Provider rate limit exceeded.

    Raised when:
    - Provider answers 429
    - Local token bucket would wait too long

    Example:
        >>> raise RateLimitError("USDA rate limit (attempt 1)")
    """

    pass


class ProviderTimeoutError(ExternalServiceError):
    """
    Provider call timed out.

    Example:
        >>> raise ProviderTimeoutError("Kroger API timeout after 10s")
    """

    pass


class ProviderAuthError(ExternalServiceError):
    """
    Provider rejected our credentials.

    Raised when:
    - OAuth token request fails
    - API key is invalid (401/403)

    Example:
        >>> raise ProviderAuthError("Invalid USDA API key")
    """

    pass


class ServiceUnavailableError(ExternalServiceError):
    """
    Provider unavailable.

    Raised when:
    - Circuit breaker is open
    - Client used outside its async context

    Example:
        >>> raise ServiceUnavailableError("Kroger circuit open")
    """

    pass


# ═══════════════════════════════════════════════════════════
# INFRASTRUCTURE EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class InfrastructureError(DomainError):
    """
    Infrastructure layer error.

    Base class for cache and persistence errors.
    """

    pass


class CacheError(InfrastructureError):
    """
    Cache operation failed.

    Example:
        >>> raise CacheError("Cache key must not be empty")
    """

    pass


class PersistenceError(InfrastructureError):
    """
    Item store write failed.

    Raised when:
    - Item does not exist
    - Store rejected the update

    Example:
        >>> raise PersistenceError("Item item-42 not found")
    """

    pass
