"""
Pytest configuration and fixtures for wallet aggregator tests.

This module provides:
- In-memory SQLite database fixtures
- In-memory fakes for the cache and settings-document repositories
- A scripted wallet data provider with per-unit failures and delays
- Fixed-clock cache, aggregator and category sync fixtures
- A FastAPI test client wired to the fakes
"""

import asyncio
import copy
from datetime import date, datetime
from typing import Any, Optional

import pytest
import pytz
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from wallet_aggregator.main import app
from wallet_aggregator.config.settings import Settings, set_settings, reset_settings
from wallet_aggregator.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from wallet_aggregator.repositories.sqlalchemy import orm_models  # noqa: F401
from wallet_aggregator.repositories.sqlalchemy import SqlAlchemyCacheRepository
from wallet_aggregator.repositories.filesystem import JsonConfigRepository
from wallet_aggregator.api.deps import get_wallet_provider, get_config_repo
from wallet_aggregator.core.exceptions import ConfigWriteError, UpstreamRequestError
from wallet_aggregator.domain.models import CacheEntry, PortfolioOptions, QueryKind, TransactionFilters
from wallet_aggregator.services import CacheService, CategorySyncService, FanOutAggregator


# =============================================================================
# TIME HELPERS
# =============================================================================


def utc_datetime(year: int, month: int, day: int, hour: int = 12, minute: int = 0) -> datetime:
    """Create a localized datetime in UTC."""
    return pytz.UTC.localize(datetime(year, month, day, hour, minute))


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return utc_datetime(2024, 6, 15, 14, 30)


class MutableClock:
    """Clock whose time can be moved forward by tests."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock(fixed_now) -> MutableClock:
    return MutableClock(fixed_now)


# =============================================================================
# PAYLOAD HELPERS
# =============================================================================


def make_snapshot(address: str, networth: str = "100.00", on: Optional[date] = None) -> dict:
    """Minimal provider portfolio payload."""
    snapshot = {"address": address, "networth": networth, "chains": {}}
    if on is not None:
        snapshot["date"] = on.isoformat()
    return snapshot


def make_tx(tx_hash: str, timestamp: int, categories: Optional[list] = None, **fields: Any) -> dict:
    """Minimal provider transaction payload."""
    tx = {
        "hash": tx_hash,
        "timestamp": str(timestamp),
        "type": fields.pop("type", "SWAP"),
        "categories": categories if categories is not None else [],
        "assetsIn": fields.pop("assetsIn", []),
        "assetsOut": fields.pop("assetsOut", []),
    }
    tx.update(fields)
    return tx


# =============================================================================
# FAKE PROVIDER
# =============================================================================


class ScriptedWalletProvider:
    """
    Wallet data provider driven by per-unit scripts.

    Keys are an address, or (address, "YYYY-MM-DD") for historical units.
    Unscripted units succeed with a minimal payload.
    """

    def __init__(self, configured: bool = True):
        self.configured = configured
        self.failures: dict[Any, str] = {}
        self.delays: dict[Any, float] = {}
        self.portfolios: dict[Any, dict] = {}
        self.transactions: dict[str, list[dict]] = {}
        self.calls: list[tuple[str, str, Optional[str]]] = []
        self.closed = False

    def is_configured(self) -> bool:
        return self.configured

    async def get_portfolio(self, address: str, options: PortfolioOptions) -> dict:
        self.calls.append(("portfolio", address, None))
        await self._script(address)
        return self.portfolios.get(address) or make_snapshot(address)

    async def get_historical(self, address: str, on: date) -> dict:
        key = (address, on.isoformat())
        self.calls.append(("historical", address, on.isoformat()))
        await self._script(key)
        return self.portfolios.get(key) or make_snapshot(address, on=on)

    async def get_transactions(self, address: str, filters: TransactionFilters) -> list[dict]:
        self.calls.append(("transactions", address, None))
        await self._script(address)
        return list(self.transactions.get(address, []))

    async def close(self) -> None:
        self.closed = True

    async def _script(self, key: Any) -> None:
        delay = self.delays.get(key)
        if delay:
            await asyncio.sleep(delay)
        if key in self.failures:
            raise UpstreamRequestError(self.failures[key])

    def call_count(self, kind: Optional[str] = None) -> int:
        return sum(1 for c in self.calls if kind is None or c[0] == kind)


@pytest.fixture
def provider() -> ScriptedWalletProvider:
    """Provide a scripted provider where every unit succeeds by default."""
    return ScriptedWalletProvider()


# =============================================================================
# IN-MEMORY REPOSITORIES
# =============================================================================


class InMemoryCacheRepository:
    """Dict-backed CacheRepository."""

    def __init__(self, fail_writes: bool = False, fail_reads: bool = False):
        self.entries: dict[str, CacheEntry] = {}
        self.fail_writes = fail_writes
        self.fail_reads = fail_reads
        self.get_calls = 0

    def get(self, fingerprint: str) -> Optional[CacheEntry]:
        self.get_calls += 1
        if self.fail_reads:
            raise OSError("cache store unavailable")
        return self.entries.get(fingerprint)

    def put(self, entry: CacheEntry) -> CacheEntry:
        if self.fail_writes:
            raise OSError("disk full")
        self.entries[entry.fingerprint] = entry
        return entry

    def list_by_kind(self, query_kind: QueryKind) -> list[CacheEntry]:
        return [e for e in self.entries.values() if e.query_kind == query_kind]


class InMemoryConfigRepository:
    """Dict-backed ConfigRepository that records saves."""

    def __init__(self, document: Optional[dict] = None, fail_saves: bool = False):
        self.document = copy.deepcopy(document) if document is not None else {"settings": {}}
        self.fail_saves = fail_saves
        self.saves = 0

    def load(self) -> dict:
        return copy.deepcopy(self.document)

    def save(self, document: dict) -> None:
        if self.fail_saves:
            raise ConfigWriteError("memory://config.json", "read-only")
        self.document = copy.deepcopy(document)
        self.saves += 1

    def category_names(self) -> list[str]:
        return list(self.document.get("settings", {}).get("categories", {}))


@pytest.fixture
def memory_cache_repo() -> InMemoryCacheRepository:
    return InMemoryCacheRepository()


@pytest.fixture
def config_repo() -> InMemoryConfigRepository:
    return InMemoryConfigRepository()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def cache_repo(test_session) -> SqlAlchemyCacheRepository:
    """Provide test CacheRepository backed by SQLite."""
    return SqlAlchemyCacheRepository(test_session)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def cache_service(memory_cache_repo, clock) -> CacheService:
    """Provide CacheService over the in-memory repository with a fixed clock."""
    return CacheService(repository=memory_cache_repo, current_ttl_seconds=300, clock=clock)


@pytest.fixture
def aggregator(provider, cache_service) -> FanOutAggregator:
    """Provide FanOutAggregator over the scripted provider."""
    return FanOutAggregator(provider=provider, cache=cache_service, unit_timeout_seconds=5.0)


@pytest.fixture
def category_sync(memory_cache_repo, config_repo) -> CategorySyncService:
    """Provide CategorySyncService over in-memory repositories."""
    return CategorySyncService(cache_repository=memory_cache_repo, config_repository=config_repo)


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "config.json"


@pytest.fixture
def client(test_engine, provider, config_path, tmp_path) -> TestClient:
    """Provide FastAPI test client with test database, scripted provider and temp settings."""
    set_settings(Settings(data_dir=tmp_path, database_url=f"sqlite:///{tmp_path / 'app.db'}"))
    reset_database()
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_wallet_provider] = lambda: provider
    app.dependency_overrides[get_config_repo] = lambda: JsonConfigRepository(config_path)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_settings()
