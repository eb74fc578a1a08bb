"""Provider outcomes and combined batch results."""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from wallet_aggregator.domain.models.query import WorkUnit


@dataclass(frozen=True)
class ProviderSuccess:
    """A unit whose payload was fetched (or served from cache)."""

    unit: WorkUnit
    payload: Any
    from_cache: bool = False


@dataclass(frozen=True)
class ProviderFailure:
    """A unit whose upstream call failed."""

    unit: WorkUnit
    error_message: str


ProviderResult = Union[ProviderSuccess, ProviderFailure]


@dataclass
class Progress:
    """
    Completion counters for a batch.

    ``loaded`` counts units that succeeded, ``completed`` counts units that
    settled either way. ``percentage`` measures completion.
    """

    loaded: int
    completed: int
    total: int
    percentage: float

    @classmethod
    def from_counts(cls, loaded: int, completed: int, total: int) -> "Progress":
        percentage = round(completed / total * 100, 2) if total else 0.0
        return cls(loaded=loaded, completed=completed, total=total, percentage=percentage)


@dataclass
class UnitError:
    """A failed unit as reported to the caller."""

    address: str
    error: str
    date: Optional[str] = None


@dataclass
class CombinedPortfolioResult:
    """Address-keyed portfolio snapshots (current or single historical date)."""

    data: dict[str, Any] = field(default_factory=dict)
    progress: Progress = field(default_factory=lambda: Progress.from_counts(0, 0, 0))
    errors: list[UnitError] = field(default_factory=list)


@dataclass
class CombinedHistoricalResult:
    """Date -> address -> snapshot over an address x date cross product."""

    data: dict[str, dict[str, Any]] = field(default_factory=dict)
    progress: Progress = field(default_factory=lambda: Progress.from_counts(0, 0, 0))
    errors: list[UnitError] = field(default_factory=list)


@dataclass
class CombinedTransactionsResult:
    """Transactions merged across addresses, plus the per-address lists."""

    data: list[dict[str, Any]] = field(default_factory=list)
    data_by_address: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    progress: Progress = field(default_factory=lambda: Progress.from_counts(0, 0, 0))
    errors: list[UnitError] = field(default_factory=list)


CombinedResult = Union[CombinedPortfolioResult, CombinedHistoricalResult, CombinedTransactionsResult]
