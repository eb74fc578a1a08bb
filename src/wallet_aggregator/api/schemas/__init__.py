"""Pydantic schemas for API request/response."""

from wallet_aggregator.api.schemas.aggregation import (
    ProgressResponse,
    UnitErrorResponse,
    CombinedPortfolioResponse,
    CombinedHistoricalRangeResponse,
    CombinedTransactionsResponse,
)
from wallet_aggregator.api.schemas.categories import CategorySyncResponse, CategoryListResponse

__all__ = [
    "ProgressResponse",
    "UnitErrorResponse",
    "CombinedPortfolioResponse",
    "CombinedHistoricalRangeResponse",
    "CombinedTransactionsResponse",
    "CategorySyncResponse",
    "CategoryListResponse",
]
