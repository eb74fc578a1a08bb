"""Category registry models."""

from dataclasses import dataclass, field

# Category type assigned to labels discovered automatically
DEFAULT_CATEGORY_TYPE = "None"


@dataclass
class CategorySyncResult:
    """Outcome of one category sync run."""

    new_categories: list[str] = field(default_factory=list)
    total_categories: int = 0
    total_transactions: int = 0
