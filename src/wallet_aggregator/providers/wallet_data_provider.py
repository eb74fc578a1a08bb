"""Wallet data provider protocol."""

from datetime import date
from typing import Any, Protocol

from wallet_aggregator.domain.models import PortfolioOptions, TransactionFilters


class WalletDataProvider(Protocol):
    """
    Protocol for upstream wallet data providers.

    One call covers exactly one address (and one date for history).
    Implementations raise UpstreamRequestError when a call fails.
    """

    def is_configured(self) -> bool:
        """Return False when no call could succeed (e.g. missing credentials)."""
        ...

    async def get_portfolio(self, address: str, options: PortfolioOptions) -> dict[str, Any]:
        """Fetch the current portfolio snapshot for one address."""
        ...

    async def get_historical(self, address: str, on: date) -> dict[str, Any]:
        """Fetch the portfolio snapshot for one address at a past date."""
        ...

    async def get_transactions(self, address: str, filters: TransactionFilters) -> list[dict[str, Any]]:
        """Fetch every transaction for one address matching the filters, in provider order."""
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...
