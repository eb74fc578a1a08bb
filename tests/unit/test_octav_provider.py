"""
Unit tests for OctavProvider.

Uses httpx.MockTransport so no network access is needed.

Tests cover:
- Bearer authentication and request parameters
- First-element extraction for portfolio endpoints
- Transaction pagination
- Error message extraction from failed responses
"""

from datetime import date

import httpx
import pytest

from wallet_aggregator.core.exceptions import UpstreamRequestError
from wallet_aggregator.domain.models import PortfolioOptions, SortOrder, TransactionFilters, TransactionType
from wallet_aggregator.providers import OctavProvider

from tests.conftest import make_tx


def provider_with(handler, page_size=250):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OctavProvider(
        api_key="secret-key",
        base_url="https://api.example.test/v1",
        page_size=page_size,
        client=client,
    )


# =============================================================================
# PORTFOLIO ENDPOINTS
# =============================================================================


class TestPortfolioEndpoints:
    """Tests for /portfolio and /historical."""

    @pytest.mark.asyncio
    async def test_portfolio_request_shape(self):
        """
        GIVEN a provider with an API key
        WHEN fetching a portfolio
        THEN the request carries the bearer token and include flags, and the first element is returned
        """
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers["Authorization"]
            seen["path"] = request.url.path
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=[{"address": "0xa", "networth": "10"}])

        provider = provider_with(handler)
        snapshot = await provider.get_portfolio("0xa", PortfolioOptions(include_images=True))

        assert snapshot == {"address": "0xa", "networth": "10"}
        assert seen["auth"] == "Bearer secret-key"
        assert seen["path"] == "/v1/portfolio"
        assert seen["params"]["addresses"] == "0xa"
        assert seen["params"]["includeImages"] == "true"
        assert seen["params"]["includeNFTs"] == "false"
        await provider.close()

    @pytest.mark.asyncio
    async def test_historical_sends_date(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=[{"address": "0xa"}])

        provider = provider_with(handler)
        await provider.get_historical("0xa", date(2024, 3, 5))

        assert seen["params"]["date"] == "2024-03-05"

    @pytest.mark.asyncio
    async def test_empty_list_is_an_error(self):
        provider = provider_with(lambda request: httpx.Response(200, json=[]))

        with pytest.raises(UpstreamRequestError):
            await provider.get_portfolio("0xa", PortfolioOptions())

    def test_is_configured(self):
        assert OctavProvider(api_key="k").is_configured() is True
        assert OctavProvider(api_key=None).is_configured() is False
        assert OctavProvider(api_key="").is_configured() is False


# =============================================================================
# TRANSACTIONS
# =============================================================================


class TestTransactions:
    """Tests for /transactions."""

    @pytest.mark.asyncio
    async def test_pagination_stops_on_short_page(self):
        """
        GIVEN a page size of 2 and 5 transactions upstream
        WHEN fetching transactions
        THEN three pages are requested and all transactions are returned in order
        """
        upstream = [make_tx(f"t{i}", 1000 - i) for i in range(5)]
        offsets = []

        def handler(request: httpx.Request) -> httpx.Response:
            limit = int(request.url.params["limit"])
            offset = int(request.url.params["offset"])
            offsets.append(offset)
            return httpx.Response(200, json={"transactions": upstream[offset:offset + limit]})

        provider = provider_with(handler, page_size=2)
        filters = TransactionFilters(start_date=date(2024, 1, 1), end_date=date(2024, 1, 31))

        transactions = await provider.get_transactions("0xa", filters)

        assert [t["hash"] for t in transactions] == ["t0", "t1", "t2", "t3", "t4"]
        assert offsets == [0, 2, 4]

    @pytest.mark.asyncio
    async def test_filter_parameters(self):
        """
        GIVEN transaction filters
        WHEN fetching transactions
        THEN the whole-day range and optional filters are sent
        """
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(dict(request.url.params))
            return httpx.Response(200, json={"transactions": []})

        provider = provider_with(handler)
        filters = TransactionFilters(
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 31),
            networks=("ethereum", "base"),
            tx_types=(TransactionType.SWAP,),
            hide_spam=True,
            sort=SortOrder.DESC,
        )

        await provider.get_transactions("0xa", filters)

        assert seen["startDate"] == "2024-01-01T00:00:00.000Z"
        assert seen["endDate"] == "2024-01-31T23:59:59.999Z"
        assert seen["networks"] == "ethereum,base"
        assert seen["txTypes"] == "SWAP"
        assert seen["hideSpam"] == "true"
        assert seen["sort"] == "DESC"
        assert "searchText" not in seen

    @pytest.mark.asyncio
    async def test_unexpected_payload(self):
        provider = provider_with(lambda request: httpx.Response(200, json=[1, 2]))
        filters = TransactionFilters(start_date=date(2024, 1, 1), end_date=date(2024, 1, 2))

        with pytest.raises(UpstreamRequestError):
            await provider.get_transactions("0xa", filters)


# =============================================================================
# ERRORS
# =============================================================================


class TestErrorExtraction:
    """Tests for failed response handling."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body, expected",
        [
            ({"message": "rate limited"}, "rate limited"),
            ({"error": "invalid address"}, "invalid address"),
            ({}, "Upstream API returned status 429"),
        ],
    )
    async def test_message_preference(self, body, expected):
        """
        GIVEN a failed response
        WHEN fetching
        THEN the provider's message is preferred, then its error, then the status
        """
        provider = provider_with(lambda request: httpx.Response(429, json=body))

        with pytest.raises(UpstreamRequestError) as exc_info:
            await provider.get_portfolio("0xa", PortfolioOptions())

        assert exc_info.value.message == expected
        assert exc_info.value.status == 429

    @pytest.mark.asyncio
    async def test_non_json_error_body(self):
        provider = provider_with(lambda request: httpx.Response(500, text="Internal Server Error"))

        with pytest.raises(UpstreamRequestError) as exc_info:
            await provider.get_portfolio("0xa", PortfolioOptions())

        assert exc_info.value.message == "Upstream API returned status 500"

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        provider = provider_with(handler)

        with pytest.raises(UpstreamRequestError) as exc_info:
            await provider.get_portfolio("0xa", PortfolioOptions())

        assert "connection refused" in exc_info.value.message
