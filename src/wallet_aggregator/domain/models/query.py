"""Batch query models: what a caller asks the aggregator for."""

from dataclasses import dataclass, field
import datetime as dt
from typing import Any, Optional

from wallet_aggregator.core.addresses import parse_addresses
from wallet_aggregator.core.dates import format_calendar_date
from wallet_aggregator.core.exceptions import ValidationError
from wallet_aggregator.domain.models.enums import DateMode, QueryKind, SortOrder, TransactionType


@dataclass(frozen=True)
class PortfolioOptions:
    """Include-flags forwarded to the provider's portfolio endpoint."""

    include_images: bool = False
    include_explorer_urls: bool = False
    include_nfts: bool = False
    # Forces a fresh fetch; not part of the cache fingerprint
    wait_for_sync: bool = False

    def payload_fields(self) -> dict[str, Any]:
        """Fields that change the provider payload."""
        return {
            "includeImages": self.include_images,
            "includeExplorerUrls": self.include_explorer_urls,
            "includeNFTs": self.include_nfts,
        }


@dataclass(frozen=True)
class TransactionFilters:
    """Date range and filters for the provider's transactions endpoint."""

    start_date: dt.date
    end_date: dt.date
    search_text: Optional[str] = None
    interacting_addresses: tuple[str, ...] = ()
    networks: tuple[str, ...] = ()
    tx_types: tuple[TransactionType, ...] = ()
    protocols: tuple[str, ...] = ()
    hide_spam: bool = False
    sort: Optional[SortOrder] = None
    token_id: Optional[int] = None

    def __post_init__(self) -> None:
        if self.start_date > self.end_date:
            raise ValidationError("startDate must not be after endDate")

    def payload_fields(self) -> dict[str, Any]:
        """Fields that change the provider payload, in canonical form."""
        return {
            "startDate": format_calendar_date(self.start_date),
            "endDate": format_calendar_date(self.end_date),
            "searchText": self.search_text or None,
            "interactingAddresses": sorted(a.lower() for a in self.interacting_addresses),
            "networks": sorted(self.networks),
            "txTypes": sorted(t.value for t in self.tx_types),
            "protocols": sorted(self.protocols),
            "hideSpam": self.hide_spam,
            "sort": self.sort.value if self.sort else None,
            "tokenId": self.token_id,
        }


@dataclass
class BatchQuery:
    """
    Input to the fan-out aggregator.

    Exactly one date mode is active: portfolio and transactions queries carry
    no date, historical queries carry either ``date`` or ``dates``. Addresses
    are normalized to lowercase and deduplicated on construction.
    """

    kind: QueryKind
    addresses: list[str]
    date: Optional[dt.date] = None
    dates: Optional[list[dt.date]] = None
    portfolio_options: PortfolioOptions = field(default_factory=PortfolioOptions)
    transaction_filters: Optional[TransactionFilters] = None

    def __post_init__(self) -> None:
        self.addresses = parse_addresses(self.addresses)
        if self.dates is not None:
            unique: list[dt.date] = []
            for d in self.dates:
                if d not in unique:
                    unique.append(d)
            self.dates = unique
        self._validate_mode()

    @classmethod
    def portfolio(cls, addresses: list[str], options: Optional[PortfolioOptions] = None) -> "BatchQuery":
        return cls(QueryKind.PORTFOLIO, addresses, portfolio_options=options or PortfolioOptions())

    @classmethod
    def historical(cls, addresses: list[str], on: dt.date) -> "BatchQuery":
        return cls(QueryKind.HISTORICAL, addresses, date=on)

    @classmethod
    def historical_range(cls, addresses: list[str], dates: list[dt.date]) -> "BatchQuery":
        return cls(QueryKind.HISTORICAL, addresses, dates=list(dates))

    @classmethod
    def transactions(cls, addresses: list[str], filters: TransactionFilters) -> "BatchQuery":
        return cls(QueryKind.TRANSACTIONS, addresses, transaction_filters=filters)

    @property
    def date_mode(self) -> DateMode:
        if self.dates is not None:
            return DateMode.MULTI_DATE
        if self.date is not None:
            return DateMode.SINGLE_DATE
        return DateMode.NO_DATE

    def units(self) -> list["WorkUnit"]:
        """Expand the query into its units of work, date-major for ranges."""
        if self.date_mode == DateMode.MULTI_DATE:
            pairs = [(a, d) for d in self.dates for a in self.addresses]
        elif self.date_mode == DateMode.SINGLE_DATE:
            pairs = [(a, self.date) for a in self.addresses]
        else:
            pairs = [(a, None) for a in self.addresses]
        return [WorkUnit(index=i, address=a, date=d) for i, (a, d) in enumerate(pairs)]

    def _validate_mode(self) -> None:
        if self.date is not None and self.dates is not None:
            raise ValidationError("date and dates cannot both be given")
        if self.kind == QueryKind.HISTORICAL:
            if self.date_mode == DateMode.NO_DATE:
                raise ValidationError("date parameter is required")
            if self.dates is not None and not self.dates:
                raise ValidationError("At least one date is required")
        elif self.date_mode != DateMode.NO_DATE:
            raise ValidationError(f"{self.kind.value.lower()} queries do not take a date")
        if self.kind == QueryKind.TRANSACTIONS and self.transaction_filters is None:
            raise ValidationError("startDate and endDate parameters are required")


@dataclass(frozen=True)
class WorkUnit:
    """One upstream call within a batch: an address and, for history, a date."""

    index: int
    address: str
    date: Optional[dt.date] = None

    @property
    def date_key(self) -> Optional[str]:
        return format_calendar_date(self.date) if self.date else None
