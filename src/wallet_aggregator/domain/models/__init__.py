"""Domain models package."""

from wallet_aggregator.domain.models.enums import QueryKind, DateMode, SortOrder, TransactionType
from wallet_aggregator.domain.models.query import (
    BatchQuery,
    PortfolioOptions,
    TransactionFilters,
    WorkUnit,
)
from wallet_aggregator.domain.models.results import (
    ProviderSuccess,
    ProviderFailure,
    ProviderResult,
    Progress,
    UnitError,
    CombinedPortfolioResult,
    CombinedHistoricalResult,
    CombinedTransactionsResult,
    CombinedResult,
)
from wallet_aggregator.domain.models.cache import CacheEntry
from wallet_aggregator.domain.models.categories import CategorySyncResult, DEFAULT_CATEGORY_TYPE

__all__ = [
    "QueryKind",
    "DateMode",
    "SortOrder",
    "TransactionType",
    "BatchQuery",
    "PortfolioOptions",
    "TransactionFilters",
    "WorkUnit",
    "ProviderSuccess",
    "ProviderFailure",
    "ProviderResult",
    "Progress",
    "UnitError",
    "CombinedPortfolioResult",
    "CombinedHistoricalResult",
    "CombinedTransactionsResult",
    "CombinedResult",
    "CacheEntry",
    "CategorySyncResult",
    "DEFAULT_CATEGORY_TYPE",
]
