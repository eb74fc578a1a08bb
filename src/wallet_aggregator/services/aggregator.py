"""Fan-out aggregation of per-address (and per-date) upstream calls."""

import asyncio
import logging
from datetime import date
from typing import Any, Optional

from wallet_aggregator.core.exceptions import UpstreamRequestError, UpstreamUnavailableError
from wallet_aggregator.domain.models import (
    BatchQuery,
    CombinedHistoricalResult,
    CombinedPortfolioResult,
    CombinedResult,
    CombinedTransactionsResult,
    PortfolioOptions,
    ProviderFailure,
    ProviderResult,
    ProviderSuccess,
    QueryKind,
    TransactionFilters,
    WorkUnit,
)
from wallet_aggregator.providers.wallet_data_provider import WalletDataProvider
from wallet_aggregator.services.cache_service import CacheService
from wallet_aggregator.services.merger import merge
from wallet_aggregator.services.progress import ProgressListener, ProgressTracker

logger = logging.getLogger(__name__)


class FanOutAggregator:
    """
    Runs one upstream call per unit of work and merges the outcomes.

    Cache hits settle immediately; misses are dispatched concurrently, each
    under its own timeout. A failing unit becomes an entry in ``errors`` and
    never cancels its siblings. Only malformed input and a provider that
    cannot be reached at all raise.
    """

    def __init__(
        self,
        provider: WalletDataProvider,
        cache: CacheService,
        unit_timeout_seconds: float = 120.0,
    ):
        self._provider = provider
        self._cache = cache
        self._unit_timeout = unit_timeout_seconds

    # ==================== ENTRY POINTS ====================

    async def get_portfolio(
        self,
        addresses: list[str],
        options: Optional[PortfolioOptions] = None,
        on_progress: Optional[ProgressListener] = None,
    ) -> CombinedPortfolioResult:
        return await self.aggregate(BatchQuery.portfolio(addresses, options), on_progress)

    async def get_historical(
        self,
        addresses: list[str],
        on: date,
        on_progress: Optional[ProgressListener] = None,
    ) -> CombinedPortfolioResult:
        return await self.aggregate(BatchQuery.historical(addresses, on), on_progress)

    async def get_historical_range(
        self,
        addresses: list[str],
        dates: list[date],
        on_progress: Optional[ProgressListener] = None,
    ) -> CombinedHistoricalResult:
        return await self.aggregate(BatchQuery.historical_range(addresses, dates), on_progress)

    async def get_transactions(
        self,
        addresses: list[str],
        filters: TransactionFilters,
        on_progress: Optional[ProgressListener] = None,
    ) -> CombinedTransactionsResult:
        return await self.aggregate(BatchQuery.transactions(addresses, filters), on_progress)

    async def aggregate(
        self,
        query: BatchQuery,
        on_progress: Optional[ProgressListener] = None,
    ) -> CombinedResult:
        """Settle every unit of the query, then merge."""
        units = query.units()
        tracker = ProgressTracker(len(units), on_progress)
        results: list[Optional[ProviderResult]] = [None] * len(units)

        pending: list[WorkUnit] = []
        for unit in units:
            entry = None if self._bypasses_cache(query) else self._cache.get(query, unit)
            if entry is None:
                pending.append(unit)
                continue
            results[unit.index] = ProviderSuccess(unit=unit, payload=entry.payload, from_cache=True)
            tracker.record(results[unit.index])

        if pending and not self._provider.is_configured():
            raise UpstreamUnavailableError("Upstream API key is not configured")

        settled = await asyncio.gather(*(self._run_unit(query, unit, tracker) for unit in pending))
        for result in settled:
            results[result.unit.index] = result

        combined = merge(query, results)
        logger.info(
            "%s batch: %d units, %d from cache, %d fetched, %d failed",
            query.kind.value,
            len(units),
            len(units) - len(pending),
            len(pending),
            len(combined.errors),
        )
        return combined

    # ==================== UNITS ====================

    async def _run_unit(self, query: BatchQuery, unit: WorkUnit, tracker: ProgressTracker) -> ProviderResult:
        try:
            payload = await asyncio.wait_for(self._fetch(query, unit), timeout=self._unit_timeout)
        except asyncio.TimeoutError:
            result = ProviderFailure(unit=unit, error_message=f"Upstream request timed out after {self._unit_timeout:g}s")
        except UpstreamRequestError as exc:
            result = ProviderFailure(unit=unit, error_message=exc.message)
        except Exception as exc:
            logger.warning("Unexpected failure fetching %s", unit.address, exc_info=True)
            result = ProviderFailure(unit=unit, error_message=str(exc) or exc.__class__.__name__)
        else:
            self._cache.put(query, unit, payload)
            result = ProviderSuccess(unit=unit, payload=payload)

        if isinstance(result, ProviderFailure):
            logger.warning(
                "%s unit failed for %s %s: %s",
                query.kind.value,
                unit.address,
                unit.date_key or "",
                result.error_message,
            )
        tracker.record(result)
        return result

    async def _fetch(self, query: BatchQuery, unit: WorkUnit) -> Any:
        if query.kind == QueryKind.PORTFOLIO:
            return await self._provider.get_portfolio(unit.address, query.portfolio_options)
        if query.kind == QueryKind.HISTORICAL:
            return await self._provider.get_historical(unit.address, unit.date)
        return await self._provider.get_transactions(unit.address, query.transaction_filters)

    @staticmethod
    def _bypasses_cache(query: BatchQuery) -> bool:
        return query.kind == QueryKind.PORTFOLIO and query.portfolio_options.wait_for_sync
