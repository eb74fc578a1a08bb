"""Service layer - aggregation and synchronization orchestration."""

from wallet_aggregator.services.aggregator import FanOutAggregator
from wallet_aggregator.services.cache_service import CacheService, CacheStats
from wallet_aggregator.services.category_sync import CategorySyncService
from wallet_aggregator.services.fingerprint import compute_fingerprint, unit_fingerprint
from wallet_aggregator.services.progress import ProgressTracker

__all__ = [
    "FanOutAggregator",
    "CacheService",
    "CacheStats",
    "CategorySyncService",
    "compute_fingerprint",
    "unit_fingerprint",
    "ProgressTracker",
]
