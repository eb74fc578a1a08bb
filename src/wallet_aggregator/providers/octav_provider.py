"""HTTP client for the Octav portfolio API."""

import logging
from datetime import date
from typing import Any, Optional

import httpx

from wallet_aggregator.core.dates import format_calendar_date
from wallet_aggregator.core.exceptions import UpstreamRequestError
from wallet_aggregator.domain.models import PortfolioOptions, TransactionFilters

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.octav.fi/v1"
DEFAULT_PAGE_SIZE = 250


def _flag(value: bool) -> str:
    return "true" if value else "false"


class OctavProvider:
    """Client for the Octav portfolio, historical and transactions endpoints."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        request_timeout_seconds: float = 30.0,
        page_size: int = DEFAULT_PAGE_SIZE,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = request_timeout_seconds
        self._page_size = page_size
        self._client = client

    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    # ==================== ENDPOINTS ====================

    async def get_portfolio(self, address: str, options: PortfolioOptions) -> dict[str, Any]:
        """Fetch the current portfolio for one address."""
        params = {
            "addresses": address,
            "includeImages": _flag(options.include_images),
            "includeExplorerUrls": _flag(options.include_explorer_urls),
            "includeNFTs": _flag(options.include_nfts),
            "waitForSync": _flag(options.wait_for_sync),
        }
        data = await self._get_json("/portfolio", params)
        return self._first_portfolio(data, address)

    async def get_historical(self, address: str, on: date) -> dict[str, Any]:
        """Fetch the portfolio for one address as of a calendar date."""
        params = {"addresses": address, "date": format_calendar_date(on)}
        data = await self._get_json("/historical", params)
        return self._first_portfolio(data, address)

    async def get_transactions(self, address: str, filters: TransactionFilters) -> list[dict[str, Any]]:
        """Fetch all transactions for one address, following pagination."""
        transactions: list[dict[str, Any]] = []
        page = 0

        while True:
            params = self._transaction_params(address, filters)
            params["limit"] = str(self._page_size)
            params["offset"] = str(page * self._page_size)

            data = await self._get_json("/transactions", params)
            if not isinstance(data, dict) or not isinstance(data.get("transactions"), list):
                raise UpstreamRequestError("Upstream API returned an unexpected transactions payload")

            batch = data["transactions"]
            transactions.extend(batch)
            if len(batch) < self._page_size:
                break
            page += 1

        logger.debug("Fetched %d transactions for %s over %d page(s)", len(transactions), address, page + 1)
        return transactions

    # ==================== HELPERS ====================

    async def _get_json(self, path: str, params: dict[str, str]) -> Any:
        client = await self._get_client()
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        try:
            response = await client.get(f"{self._base_url}{path}", params=params, headers=headers)
        except httpx.TimeoutException as exc:
            raise UpstreamRequestError(f"Upstream request timed out: {path}") from exc
        except httpx.HTTPError as exc:
            raise UpstreamRequestError(str(exc) or exc.__class__.__name__) from exc

        if response.is_error:
            raise UpstreamRequestError(self._error_message(response), status=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamRequestError("Upstream API returned invalid JSON") from exc

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Prefer the provider's message, then its error, then the status."""
        try:
            body = response.json()
        except ValueError:
            body = {}
        if isinstance(body, dict):
            message = body.get("message") or body.get("error")
            if isinstance(message, str) and message:
                return message
        return f"Upstream API returned status {response.status_code}"

    @staticmethod
    def _first_portfolio(data: Any, address: str) -> dict[str, Any]:
        if isinstance(data, list):
            data = data[0] if data else None
        if not isinstance(data, dict):
            raise UpstreamRequestError(f"No portfolio returned for {address}")
        return data

    @staticmethod
    def _transaction_params(address: str, filters: TransactionFilters) -> dict[str, str]:
        params = {
            "addresses": address,
            # Whole calendar days, inclusive on both ends
            "startDate": f"{format_calendar_date(filters.start_date)}T00:00:00.000Z",
            "endDate": f"{format_calendar_date(filters.end_date)}T23:59:59.999Z",
        }
        if filters.search_text:
            params["searchText"] = filters.search_text
        if filters.interacting_addresses:
            params["interactingAddresses"] = ",".join(filters.interacting_addresses)
        if filters.networks:
            params["networks"] = ",".join(filters.networks)
        if filters.tx_types:
            params["txTypes"] = ",".join(t.value for t in filters.tx_types)
        if filters.protocols:
            params["protocols"] = ",".join(filters.protocols)
        if filters.hide_spam:
            params["hideSpam"] = "true"
        if filters.sort:
            params["sort"] = filters.sort.value
        if filters.token_id is not None:
            params["tokenId"] = str(filters.token_id)
        return params
