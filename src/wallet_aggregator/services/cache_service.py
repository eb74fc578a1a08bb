"""Freshness policy and instrumentation over the cache repository."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from wallet_aggregator.core.dates import now_utc
from wallet_aggregator.domain.models import BatchQuery, CacheEntry, QueryKind, WorkUnit
from wallet_aggregator.repositories.protocols import CacheRepository
from wallet_aggregator.services.fingerprint import unit_fingerprint

logger = logging.getLogger(__name__)


@dataclass
class CacheStats:
    """Counters for cache activity since the service was created."""

    hits: int = 0
    misses: int = 0
    stores: int = 0
    write_failures: int = 0


class CacheService:
    """
    Reads and writes provider payloads per unit of work.

    Entries for closed periods (a historical date before today, or a
    transaction range that ended before today) never expire. Everything else
    counts as current data and expires after ``current_ttl_seconds``.
    Repository failures degrade to a cache miss or a skipped write; they
    never fail the batch.
    """

    def __init__(
        self,
        repository: CacheRepository,
        current_ttl_seconds: int = 300,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._repository = repository
        self._current_ttl = current_ttl_seconds
        self._clock = clock
        self.stats = CacheStats()

    def get(self, query: BatchQuery, unit: WorkUnit) -> Optional[CacheEntry]:
        """Return a fresh entry for the unit, or None."""
        fingerprint = unit_fingerprint(query, unit)
        try:
            entry = self._repository.get(fingerprint)
        except Exception:
            logger.warning("Cache read failed for %s; treating as miss", fingerprint, exc_info=True)
            entry = None

        if entry is not None and self.is_fresh(entry, query, unit):
            self.stats.hits += 1
            logger.debug("Cache HIT %s %s %s", query.kind.value, unit.address, unit.date_key or "")
            return entry

        self.stats.misses += 1
        logger.debug("Cache MISS %s %s %s", query.kind.value, unit.address, unit.date_key or "")
        return None

    def put(self, query: BatchQuery, unit: WorkUnit, payload: Any) -> Optional[CacheEntry]:
        """Store a fresh payload; returns None if the write failed."""
        entry = CacheEntry(
            fingerprint=unit_fingerprint(query, unit),
            query_kind=query.kind,
            address=unit.address,
            unit_date=unit.date,
            payload=payload,
            fetched_at=self._clock(),
        )
        try:
            self._repository.put(entry)
        except Exception:
            self.stats.write_failures += 1
            logger.warning("Cache write failed for %s; continuing without caching", entry.fingerprint, exc_info=True)
            return None
        self.stats.stores += 1
        return entry

    def is_fresh(self, entry: CacheEntry, query: BatchQuery, unit: WorkUnit) -> bool:
        if self.is_closed_period(query, unit):
            return True
        age = (self._clock() - entry.fetched_at).total_seconds()
        return age < self._current_ttl

    def is_closed_period(self, query: BatchQuery, unit: WorkUnit) -> bool:
        """True when the unit covers only dates strictly before today."""
        today = self._clock().date()
        if query.kind == QueryKind.HISTORICAL:
            return unit.date is not None and unit.date < today
        if query.kind == QueryKind.TRANSACTIONS:
            return query.transaction_filters.end_date < today
        return False
