"""Pydantic schemas for combined (multi-wallet) responses."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from wallet_aggregator.domain.models import Progress, UnitError


class ProgressResponse(BaseModel):
    """Completion counters: loaded = succeeded units, completed = settled units."""

    loaded: int
    completed: int
    total: int
    percentage: float

    @classmethod
    def from_domain(cls, progress: Progress) -> "ProgressResponse":
        return cls(
            loaded=progress.loaded,
            completed=progress.completed,
            total=progress.total,
            percentage=progress.percentage,
        )


class UnitErrorResponse(BaseModel):
    """A failed unit; date is set for historical queries."""

    address: str
    error: str
    date: Optional[str] = None

    @classmethod
    def from_domain(cls, errors: list[UnitError]) -> list["UnitErrorResponse"]:
        return [cls(address=e.address, error=e.error, date=e.date) for e in errors]


class CombinedPortfolioResponse(BaseModel):
    """Address -> portfolio snapshot, for current and single-date queries."""

    data: dict[str, Any]
    progress: ProgressResponse
    errors: list[UnitErrorResponse] = Field(default_factory=list)


class CombinedHistoricalRangeResponse(BaseModel):
    """Date -> address -> portfolio snapshot."""

    data: dict[str, dict[str, Any]]
    progress: ProgressResponse
    errors: list[UnitErrorResponse] = Field(default_factory=list)


class CombinedTransactionsResponse(BaseModel):
    """Transactions merged newest first, plus the per-address lists."""

    model_config = ConfigDict(populate_by_name=True)

    data: list[dict[str, Any]]
    data_by_address: dict[str, list[dict[str, Any]]] = Field(alias="dataByAddress")
    progress: ProgressResponse
    errors: list[UnitErrorResponse] = Field(default_factory=list)
