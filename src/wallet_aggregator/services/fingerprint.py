"""Cache fingerprints for units of work.

A fingerprint is computed per unit, not per batch, so two batches that list
the same addresses in a different order hit the same cache entries.
"""

import hashlib
import json
from typing import Any

from wallet_aggregator.core.addresses import normalize_address
from wallet_aggregator.domain.models import BatchQuery, QueryKind, WorkUnit


def compute_fingerprint(
    query_kind: QueryKind,
    address: str,
    unit_date: str | None = None,
    filters: dict[str, Any] | None = None,
) -> str:
    """Hash the fields that define a unit's payload into a stable key."""
    canonical = json.dumps(
        {
            "kind": query_kind.value,
            "address": normalize_address(address),
            "date": unit_date,
            "filters": filters or {},
        },
        sort_keys=True,
        separators=(",", ":"),
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def unit_fingerprint(query: BatchQuery, unit: WorkUnit) -> str:
    """Fingerprint of one unit of a batch query."""
    if query.kind == QueryKind.PORTFOLIO:
        filters = query.portfolio_options.payload_fields()
    elif query.kind == QueryKind.TRANSACTIONS:
        filters = query.transaction_filters.payload_fields()
    else:
        filters = None
    return compute_fingerprint(query.kind, unit.address, unit.date_key, filters)
