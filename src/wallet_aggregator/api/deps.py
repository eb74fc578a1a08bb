"""Dependency injection for FastAPI."""

from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from wallet_aggregator.config.settings import get_settings
from wallet_aggregator.providers import OctavProvider, StubWalletDataProvider, WalletDataProvider
from wallet_aggregator.repositories.filesystem import JsonConfigRepository
from wallet_aggregator.repositories.sqlalchemy import SqlAlchemyCacheRepository
from wallet_aggregator.repositories.sqlalchemy.database import get_db
from wallet_aggregator.services import CacheService, CategorySyncService, FanOutAggregator

# One upstream client per process so connections are pooled across requests
_wallet_provider: Optional[WalletDataProvider] = None


def build_wallet_provider() -> WalletDataProvider:
    """Create the provider selected by settings."""
    settings = get_settings()
    if settings.upstream_provider == "stub":
        return StubWalletDataProvider()
    return OctavProvider(
        api_key=settings.upstream_api_key,
        base_url=settings.upstream_base_url,
        request_timeout_seconds=settings.upstream_request_timeout_seconds,
        page_size=settings.transactions_page_size,
    )


def get_wallet_provider() -> WalletDataProvider:
    """Provide the shared WalletDataProvider instance."""
    global _wallet_provider
    if _wallet_provider is None:
        _wallet_provider = build_wallet_provider()
    return _wallet_provider


async def close_wallet_provider() -> None:
    """Close the shared provider (application shutdown)."""
    global _wallet_provider
    if _wallet_provider is not None:
        await _wallet_provider.close()
        _wallet_provider = None


def get_cache_repo(db: Session = Depends(get_db)) -> SqlAlchemyCacheRepository:
    """Provide CacheRepository instance."""
    return SqlAlchemyCacheRepository(db)


def get_config_repo() -> JsonConfigRepository:
    """Provide ConfigRepository instance for the settings document."""
    return JsonConfigRepository(get_settings().get_config_path())


def get_cache_service(
    cache_repo: SqlAlchemyCacheRepository = Depends(get_cache_repo),
) -> CacheService:
    """Provide CacheService instance."""
    return CacheService(
        repository=cache_repo,
        current_ttl_seconds=get_settings().current_cache_ttl_seconds,
    )


def get_aggregator(
    provider: WalletDataProvider = Depends(get_wallet_provider),
    cache_service: CacheService = Depends(get_cache_service),
) -> FanOutAggregator:
    """Provide FanOutAggregator instance."""
    return FanOutAggregator(
        provider=provider,
        cache=cache_service,
        unit_timeout_seconds=get_settings().upstream_unit_timeout_seconds,
    )


def get_category_sync_service(
    cache_repo: SqlAlchemyCacheRepository = Depends(get_cache_repo),
    config_repo: JsonConfigRepository = Depends(get_config_repo),
) -> CategorySyncService:
    """Provide CategorySyncService instance."""
    return CategorySyncService(cache_repository=cache_repo, config_repository=config_repo)
