"""Core utilities and shared functionality."""

from wallet_aggregator.core.dates import (
    now_utc,
    today_utc,
    parse_calendar_date,
    parse_calendar_dates,
    format_calendar_date,
    parse_timestamp,
)
from wallet_aggregator.core.addresses import normalize_address, parse_addresses
from wallet_aggregator.core.exceptions import (
    AppError,
    ValidationError,
    UpstreamUnavailableError,
    UpstreamRequestError,
    ConfigWriteError,
    ConfigReadError,
)

__all__ = [
    "now_utc",
    "today_utc",
    "parse_calendar_date",
    "parse_calendar_dates",
    "format_calendar_date",
    "parse_timestamp",
    "normalize_address",
    "parse_addresses",
    "AppError",
    "ValidationError",
    "UpstreamUnavailableError",
    "UpstreamRequestError",
    "ConfigWriteError",
    "ConfigReadError",
]
