"""Repository layer - data access abstractions and implementations."""

from wallet_aggregator.repositories.protocols import CacheRepository, ConfigRepository

__all__ = [
    "CacheRepository",
    "ConfigRepository",
]
