"""Calendar-date and timestamp utilities.

All dates exchanged with callers are calendar dates in ``YYYY-MM-DD`` form.
"Today" is evaluated in UTC, which is the calendar the provider reports in.
"""

import math
import re
from datetime import date, datetime
from typing import Any, Optional

import pytz
from dateutil import parser as date_parser

from wallet_aggregator.core.exceptions import ValidationError

# A full calendar date, optionally followed by an ISO time part
_CALENDAR_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}(?:[T ].+)?$")


def now_utc() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(pytz.UTC)


def today_utc() -> date:
    """Return today's calendar date in UTC."""
    return now_utc().date()


def parse_calendar_date(value: Any, field_name: str = "date") -> date:
    """
    Parse a date-like value into a calendar date.

    Accepts ``date``/``datetime`` instances, ``YYYY-MM-DD`` strings and ISO
    8601 datetimes; datetimes with a timezone are converted to UTC first.
    Partial dates such as ``2024-02`` are rejected rather than completed
    from today. Raises ValidationError when the value is missing or invalid.
    """
    if isinstance(value, datetime):
        return _datetime_to_utc_date(value)
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required and must be a valid date string")
    text = value.strip()
    if not _CALENDAR_DATE_RE.match(text):
        raise ValidationError(f"Invalid {field_name}: {value} (expected YYYY-MM-DD)")
    try:
        parsed = date_parser.isoparse(text)
    except (ValueError, OverflowError) as exc:
        raise ValidationError(f"Invalid {field_name}: {value}") from exc
    return _datetime_to_utc_date(parsed)


def parse_calendar_dates(values: list[str], field_name: str = "dates") -> list[date]:
    """Parse comma-separated or repeated date values, deduplicated in order."""
    result: list[date] = []
    for raw in values:
        for part in raw.split(","):
            if not part.strip():
                continue
            parsed = parse_calendar_date(part, field_name=field_name)
            if parsed not in result:
                result.append(parsed)
    if not result:
        raise ValidationError(f"At least one value is required for {field_name}")
    return result


def format_calendar_date(value: date) -> str:
    """Format a calendar date as YYYY-MM-DD."""
    return value.isoformat()


def parse_timestamp(value: Any) -> Optional[float]:
    """
    Convert a provider timestamp into epoch seconds.

    The provider sends epoch seconds as strings; ISO strings and numbers are
    accepted too. Returns None for anything unparseable.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            pass
        else:
            return number if math.isfinite(number) else None
        try:
            parsed = date_parser.parse(text)
        except (ValueError, OverflowError):
            return None
        if parsed.tzinfo is None:
            parsed = pytz.UTC.localize(parsed)
        return parsed.timestamp()
    return None


def _datetime_to_utc_date(value: datetime) -> date:
    if value.tzinfo is not None:
        value = value.astimezone(pytz.UTC)
    return value.date()
