"""Reducers that fold per-unit provider results into batch-shaped responses.

Pure functions: no I/O. ``results`` is indexed by unit, in the order
``BatchQuery.units()`` produced them. Successful units always appear in the
output mapping; failed units only ever appear in ``errors``.
"""

from typing import Any, Sequence

from wallet_aggregator.core.dates import parse_timestamp
from wallet_aggregator.domain.models import (
    BatchQuery,
    CombinedHistoricalResult,
    CombinedPortfolioResult,
    CombinedResult,
    CombinedTransactionsResult,
    DateMode,
    Progress,
    ProviderFailure,
    ProviderResult,
    ProviderSuccess,
    QueryKind,
    UnitError,
)


def merge(query: BatchQuery, results: Sequence[ProviderResult]) -> CombinedResult:
    """Dispatch to the reducer for the query's kind and date mode."""
    if query.kind == QueryKind.TRANSACTIONS:
        return merge_transactions(query, results)
    if query.date_mode == DateMode.MULTI_DATE:
        return merge_historical_range(query, results)
    return merge_portfolio(query, results)


def merge_portfolio(query: BatchQuery, results: Sequence[ProviderResult]) -> CombinedPortfolioResult:
    """Address-keyed snapshots, for current or single-date historical queries."""
    data: dict[str, Any] = {}
    for result in results:
        if isinstance(result, ProviderSuccess):
            data[result.unit.address] = result.payload
    return CombinedPortfolioResult(
        data=data,
        progress=build_progress(results),
        errors=collect_errors(results),
    )


def merge_historical_range(query: BatchQuery, results: Sequence[ProviderResult]) -> CombinedHistoricalResult:
    """Date -> address -> snapshot; a date appears only if some address succeeded on it."""
    data: dict[str, dict[str, Any]] = {}
    for result in results:
        if isinstance(result, ProviderSuccess):
            data.setdefault(result.unit.date_key, {})[result.unit.address] = result.payload
    return CombinedHistoricalResult(
        data=data,
        progress=build_progress(results),
        errors=collect_errors(results),
    )


def merge_transactions(query: BatchQuery, results: Sequence[ProviderResult]) -> CombinedTransactionsResult:
    """
    Per-address lists in provider order, plus one flattened list.

    The flattened list is sorted newest first; equal timestamps keep input
    address order, then provider order. Transactions without a readable
    timestamp go last.
    """
    data_by_address: dict[str, list[dict[str, Any]]] = {}
    flattened: list[dict[str, Any]] = []
    for result in results:
        if isinstance(result, ProviderSuccess):
            transactions = list(result.payload or [])
            data_by_address[result.unit.address] = transactions
            flattened.extend(transactions)

    return CombinedTransactionsResult(
        data=sorted(flattened, key=_newest_first_key),
        data_by_address=data_by_address,
        progress=build_progress(results),
        errors=collect_errors(results),
    )


def build_progress(results: Sequence[ProviderResult]) -> Progress:
    loaded = sum(1 for r in results if isinstance(r, ProviderSuccess))
    return Progress.from_counts(loaded=loaded, completed=len(results), total=len(results))


def collect_errors(results: Sequence[ProviderResult]) -> list[UnitError]:
    return [
        UnitError(address=r.unit.address, error=r.error_message, date=r.unit.date_key)
        for r in results
        if isinstance(r, ProviderFailure)
    ]


def _newest_first_key(transaction: dict[str, Any]) -> tuple[bool, float]:
    timestamp = parse_timestamp(transaction.get("timestamp")) if isinstance(transaction, dict) else None
    if timestamp is None:
        return (True, 0.0)
    return (False, -timestamp)
