"""SQLAlchemy ORM model definitions."""

from sqlalchemy import Column, Date, DateTime, String, Text, Enum as SqlEnum

from wallet_aggregator.repositories.sqlalchemy.database import Base
from wallet_aggregator.domain.models.enums import QueryKind


class ProviderCacheORM(Base):
    """SQLAlchemy model for CacheEntry (one provider payload per unit fingerprint)."""

    __tablename__ = "provider_cache"

    fingerprint = Column(String(64), primary_key=True)
    query_kind = Column(SqlEnum(QueryKind), nullable=False, index=True)
    address = Column(String(128), nullable=False, index=True)
    unit_date = Column(Date, nullable=True)
    payload_json = Column(Text, nullable=False)
    fetched_at = Column(DateTime(timezone=True), nullable=False)
