"""Cache models for provider responses."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from wallet_aggregator.domain.models.enums import QueryKind


@dataclass(frozen=True)
class CacheEntry:
    """
    One cached provider payload for a single unit of work.

    IMPORTANT: Never mutate; a refetch stores a new entry that supersedes
    this one under the same fingerprint.
    """

    fingerprint: str
    query_kind: QueryKind
    address: str
    payload: Any
    fetched_at: datetime
    unit_date: Optional[date] = None
