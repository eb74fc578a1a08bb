"""Cache repository protocol for provider responses."""

from typing import Protocol, Optional

from wallet_aggregator.domain.models import CacheEntry, QueryKind


class CacheRepository(Protocol):
    """Interface for the local store of provider payloads."""

    def get(self, fingerprint: str) -> Optional[CacheEntry]:
        """Get the current entry for a fingerprint."""
        ...

    def put(self, entry: CacheEntry) -> CacheEntry:
        """Store an entry, superseding any previous one for its fingerprint."""
        ...

    def list_by_kind(self, query_kind: QueryKind) -> list[CacheEntry]:
        """List all entries of one query kind, oldest first."""
        ...
