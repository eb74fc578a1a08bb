"""Pydantic schemas for the category registry API."""

from pydantic import BaseModel, ConfigDict, Field


class CategorySyncResponse(BaseModel):
    """Result of GET /categories/sync."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    new_categories: list[str] = Field(alias="newCategories")
    total_categories: int = Field(alias="totalCategories")
    total_transactions: int = Field(alias="totalTransactions")


class CategoryListResponse(BaseModel):
    """Known category labels, in registry order."""

    categories: list[str]
