"""Repository protocol definitions (interfaces)."""

from wallet_aggregator.repositories.protocols.cache_repo import CacheRepository
from wallet_aggregator.repositories.protocols.config_repo import ConfigRepository

__all__ = [
    "CacheRepository",
    "ConfigRepository",
]
