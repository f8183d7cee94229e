"""Shared domain primitives."""

from grocery_enrichment.domain.shared.errors import (
    CacheError,
    DomainError,
    EnrichmentError,
    ExternalServiceError,
    InfrastructureError,
    InvalidQuantityError,
    PersistenceError,
    ProviderAuthError,
    ProviderTimeoutError,
    RateLimitError,
    ServiceUnavailableError,
)

__all__ = [
    "CacheError",
    "DomainError",
    "EnrichmentError",
    "ExternalServiceError",
    "InfrastructureError",
    "InvalidQuantityError",
    "PersistenceError",
    "ProviderAuthError",
    "ProviderTimeoutError",
    "RateLimitError",
    "ServiceUnavailableError",
]
