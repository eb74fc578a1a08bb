"""SQLAlchemy implementation of CacheRepository."""

import json
from typing import Optional

import pytz
from sqlalchemy.orm import Session

from wallet_aggregator.domain.models import CacheEntry, QueryKind
from wallet_aggregator.repositories.sqlalchemy.orm_models import ProviderCacheORM


class SqlAlchemyCacheRepository:
    """SQLAlchemy-backed store of provider payloads keyed by fingerprint."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, fingerprint: str) -> Optional[CacheEntry]:
        """Get the current entry for a fingerprint."""
        orm_entry = self._db.get(ProviderCacheORM, fingerprint)
        return self._to_domain(orm_entry) if orm_entry else None

    def put(self, entry: CacheEntry) -> CacheEntry:
        """Store an entry; last writer wins per fingerprint."""
        orm_entry = ProviderCacheORM(
            fingerprint=entry.fingerprint,
            query_kind=entry.query_kind,
            address=entry.address,
            unit_date=entry.unit_date,
            payload_json=json.dumps(entry.payload),
            fetched_at=entry.fetched_at,
        )
        try:
            self._db.merge(orm_entry)
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise
        return entry

    def list_by_kind(self, query_kind: QueryKind) -> list[CacheEntry]:
        """List all entries of one query kind, oldest first."""
        orm_entries = (
            self._db.query(ProviderCacheORM)
            .filter(ProviderCacheORM.query_kind == query_kind)
            .order_by(ProviderCacheORM.fetched_at, ProviderCacheORM.fingerprint)
            .all()
        )
        return [self._to_domain(e) for e in orm_entries]

    @staticmethod
    def _to_domain(orm: ProviderCacheORM) -> CacheEntry:
        """Convert ORM entry to domain model."""
        fetched_at = orm.fetched_at
        if fetched_at.tzinfo is None:
            # SQLite drops tzinfo; values are always written in UTC
            fetched_at = pytz.UTC.localize(fetched_at)
        return CacheEntry(
            fingerprint=orm.fingerprint,
            query_kind=QueryKind(orm.query_kind),
            address=orm.address,
            unit_date=orm.unit_date,
            payload=json.loads(orm.payload_json),
            fetched_at=fetched_at,
        )
