"""Historical portfolio endpoints (single date and date range)."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from wallet_aggregator.api.deps import get_aggregator
from wallet_aggregator.api.schemas import (
    CombinedHistoricalRangeResponse,
    CombinedPortfolioResponse,
    ProgressResponse,
    UnitErrorResponse,
)
from wallet_aggregator.core.addresses import parse_addresses
from wallet_aggregator.core.dates import parse_calendar_date, parse_calendar_dates
from wallet_aggregator.core.exceptions import ValidationError
from wallet_aggregator.services import FanOutAggregator

router = APIRouter(prefix="/historical", tags=["historical"])


@router.get("", response_model=CombinedPortfolioResponse)
async def get_historical(
    addresses: Optional[list[str]] = Query(None, description="Comma-separated or repeated wallet addresses"),
    date: Optional[str] = Query(None, description="Calendar date, YYYY-MM-DD"),
    aggregator: FanOutAggregator = Depends(get_aggregator),
) -> CombinedPortfolioResponse:
    """Return every address's portfolio as of one date, keyed by address."""
    address_list = parse_addresses(addresses)
    on = parse_calendar_date(date, field_name="date")
    result = await aggregator.get_historical(address_list, on)
    return CombinedPortfolioResponse(
        data=result.data,
        progress=ProgressResponse.from_domain(result.progress),
        errors=UnitErrorResponse.from_domain(result.errors),
    )


@router.get("/range", response_model=CombinedHistoricalRangeResponse)
async def get_historical_range(
    addresses: Optional[list[str]] = Query(None, description="Comma-separated or repeated wallet addresses"),
    dates: Optional[list[str]] = Query(None, description="Comma-separated or repeated calendar dates"),
    aggregator: FanOutAggregator = Depends(get_aggregator),
) -> CombinedHistoricalRangeResponse:
    """
    Return portfolios for every address on every date, keyed date -> address.

    A date is present only if at least one address succeeded on it; failed
    (date, address) pairs are listed in ``errors``.
    """
    address_list = parse_addresses(addresses)
    if not dates:
        raise ValidationError("dates parameter is required")
    date_list = parse_calendar_dates(dates, field_name="dates")
    result = await aggregator.get_historical_range(address_list, date_list)
    return CombinedHistoricalRangeResponse(
        data=result.data,
        progress=ProgressResponse.from_domain(result.progress),
        errors=UnitErrorResponse.from_domain(result.errors),
    )
