"""Stub wallet data provider for offline/testing use."""

import hashlib
import random
from datetime import date, datetime, time, timedelta
from typing import Any

import pytz

from wallet_aggregator.core.dates import format_calendar_date, now_utc
from wallet_aggregator.domain.models import PortfolioOptions, TransactionFilters


# Deterministic chain/protocol mix used for every stub wallet
_STUB_CHAINS = ("ethereum", "arbitrum", "base")
_STUB_TRANSACTIONS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("SWAP", ("SWAP",)),
    ("BRIDGEOUT", ("BRIDGE",)),
    ("DEPOSIT", ("DEFI", "DEPOSIT")),
    ("RECEIVE", ("TRANSFER",)),
)


class StubWalletDataProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Values depend only on the address (and date), so repeated calls agree.
    """

    def is_configured(self) -> bool:
        return True

    async def get_portfolio(self, address: str, options: PortfolioOptions) -> dict[str, Any]:
        """Return a stub snapshot valued as of today."""
        return self._snapshot(address, now_utc().date())

    async def get_historical(self, address: str, on: date) -> dict[str, Any]:
        """Return a stub snapshot valued as of the given date."""
        return self._snapshot(address, on)

    async def get_transactions(self, address: str, filters: TransactionFilters) -> list[dict[str, Any]]:
        """Return one stub transaction per day in range, newest first."""
        rng = self._rng(address)
        result: list[dict[str, Any]] = []
        day = filters.end_date
        while day >= filters.start_date:
            tx_type, categories = _STUB_TRANSACTIONS[rng.randrange(len(_STUB_TRANSACTIONS))]
            moment = pytz.UTC.localize(datetime.combine(day, time(hour=rng.randrange(24))))
            value = f"{rng.uniform(5, 5000):.2f}"
            result.append(
                {
                    "hash": "0x" + hashlib.sha256(f"{address}:{day}".encode()).hexdigest(),
                    "timestamp": str(int(moment.timestamp())),
                    "type": tx_type,
                    "categories": list(categories),
                    "chain": {"key": _STUB_CHAINS[rng.randrange(len(_STUB_CHAINS))]},
                    "value": value,
                    "valueFiat": value,
                    "assetsIn": [],
                    "assetsOut": [],
                    "user": {"address": address},
                }
            )
            day -= timedelta(days=1)
        return result

    async def close(self) -> None:
        return None

    def _snapshot(self, address: str, on: date) -> dict[str, Any]:
        rng = self._rng(f"{address}:{on.isoformat()}")
        chains = {}
        total = 0.0
        for key in _STUB_CHAINS:
            value = rng.uniform(100, 25000)
            total += value
            chains[key] = {"name": key.title(), "key": key, "value": f"{value:.2f}"}
        return {
            "address": address,
            "networth": f"{total:.2f}",
            "cashBalance": "0",
            "chains": chains,
            "assetByProtocols": {},
            "lastUpdated": str(int(now_utc().timestamp() * 1000)),
            "date": format_calendar_date(on),
        }

    @staticmethod
    def _rng(seed_text: str) -> random.Random:
        seed = int(hashlib.sha256(seed_text.encode()).hexdigest()[:16], 16)
        return random.Random(seed)
