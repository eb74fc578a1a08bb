"""API routers package."""

from wallet_aggregator.api.routers.portfolio import router as portfolio_router
from wallet_aggregator.api.routers.historical import router as historical_router
from wallet_aggregator.api.routers.transactions import router as transactions_router
from wallet_aggregator.api.routers.categories import router as categories_router

__all__ = [
    "portfolio_router",
    "historical_router",
    "transactions_router",
    "categories_router",
]
