"""Current portfolio endpoint across multiple wallets."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from wallet_aggregator.api.deps import get_aggregator
from wallet_aggregator.api.schemas import (
    CombinedPortfolioResponse,
    ProgressResponse,
    UnitErrorResponse,
)
from wallet_aggregator.core.addresses import parse_addresses
from wallet_aggregator.domain.models import PortfolioOptions
from wallet_aggregator.services import FanOutAggregator

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("", response_model=CombinedPortfolioResponse)
async def get_portfolio(
    addresses: Optional[list[str]] = Query(None, description="Comma-separated or repeated wallet addresses"),
    include_images: bool = Query(False, alias="includeImages"),
    include_explorer_urls: bool = Query(False, alias="includeExplorerUrls"),
    include_nfts: bool = Query(False, alias="includeNFTs"),
    wait_for_sync: bool = Query(False, alias="waitForSync", description="Skip the cache and fetch fresh data"),
    aggregator: FanOutAggregator = Depends(get_aggregator),
) -> CombinedPortfolioResponse:
    """
    Return the current portfolio of every address, keyed by address.

    Addresses that fail are listed in ``errors``; the response is still 200.
    """
    options = PortfolioOptions(
        include_images=include_images,
        include_explorer_urls=include_explorer_urls,
        include_nfts=include_nfts,
        wait_for_sync=wait_for_sync,
    )
    result = await aggregator.get_portfolio(parse_addresses(addresses), options)
    return CombinedPortfolioResponse(
        data=result.data,
        progress=ProgressResponse.from_domain(result.progress),
        errors=UnitErrorResponse.from_domain(result.errors),
    )
