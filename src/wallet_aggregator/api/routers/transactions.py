"""Transactions endpoint across multiple wallets."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from wallet_aggregator.api.deps import get_aggregator
from wallet_aggregator.api.schemas import (
    CombinedTransactionsResponse,
    ProgressResponse,
    UnitErrorResponse,
)
from wallet_aggregator.core.addresses import parse_addresses
from wallet_aggregator.core.dates import parse_calendar_date
from wallet_aggregator.core.exceptions import ValidationError
from wallet_aggregator.domain.models import SortOrder, TransactionFilters, TransactionType
from wallet_aggregator.services import FanOutAggregator

router = APIRouter(prefix="/transactions", tags=["transactions"])


def _split_csv(value: Optional[str]) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(part.strip() for part in value.split(",") if part.strip())


def _parse_tx_types(value: Optional[str]) -> tuple[TransactionType, ...]:
    result = []
    for part in _split_csv(value):
        try:
            result.append(TransactionType(part.upper()))
        except ValueError:
            raise ValidationError(f"Invalid txTypes value: {part}")
    return tuple(result)


def _parse_sort(value: Optional[str]) -> Optional[SortOrder]:
    if not value:
        return None
    try:
        return SortOrder(value.upper())
    except ValueError:
        raise ValidationError(f"Invalid sort value: {value} (expected ASC or DESC)")


@router.get("", response_model=CombinedTransactionsResponse)
async def get_transactions(
    addresses: Optional[list[str]] = Query(None, description="Comma-separated or repeated wallet addresses"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    search_text: Optional[str] = Query(None, alias="searchText"),
    interacting_addresses: Optional[str] = Query(None, alias="interactingAddresses"),
    networks: Optional[str] = Query(None),
    tx_types: Optional[str] = Query(None, alias="txTypes"),
    protocols: Optional[str] = Query(None),
    hide_spam: bool = Query(False, alias="hideSpam"),
    sort: Optional[str] = Query(None, description="ASC or DESC"),
    token_id: Optional[int] = Query(None, alias="tokenId"),
    aggregator: FanOutAggregator = Depends(get_aggregator),
) -> CombinedTransactionsResponse:
    """
    Return all transactions of every address in a date range.

    ``data`` holds every transaction newest first; ``dataByAddress`` keeps
    each address's list in provider order.
    """
    address_list = parse_addresses(addresses)
    filters = TransactionFilters(
        start_date=parse_calendar_date(start_date, field_name="startDate"),
        end_date=parse_calendar_date(end_date, field_name="endDate"),
        search_text=search_text or None,
        interacting_addresses=_split_csv(interacting_addresses),
        networks=_split_csv(networks),
        tx_types=_parse_tx_types(tx_types),
        protocols=_split_csv(protocols),
        hide_spam=hide_spam,
        sort=_parse_sort(sort),
        token_id=token_id,
    )
    result = await aggregator.get_transactions(address_list, filters)
    return CombinedTransactionsResponse(
        data=result.data,
        data_by_address=result.data_by_address,
        progress=ProgressResponse.from_domain(result.progress),
        errors=UnitErrorResponse.from_domain(result.errors),
    )
