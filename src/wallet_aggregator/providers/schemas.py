"""Typed view of the provider transaction fields used for category discovery.

Only categories are modelled; every other field passes through untouched.
Category entries arrive either as plain strings or as objects carrying a
``label``; anything else is dropped during validation.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def category_label(value: Any) -> Optional[str]:
    """Return the label of a raw category entry, or None if it has none."""
    if isinstance(value, str):
        label = value
    elif isinstance(value, dict) and isinstance(value.get("label"), str):
        label = value["label"]
    else:
        return None
    label = label.strip()
    # Artifacts of stringified objects upstream
    if not label or label.startswith("[object "):
        return None
    return label


class _CategorizedRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    categories: list[str] = Field(default_factory=list)

    @field_validator("categories", mode="before")
    @classmethod
    def _coerce_labels(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        labels = (category_label(item) for item in value)
        return [label for label in labels if label is not None]


class AssetLegRecord(_CategorizedRecord):
    """An asset moved in, out, or paid as fees by a transaction."""


class TransactionRecord(_CategorizedRecord):
    """A provider transaction, reduced to its category-bearing fields."""

    assets_in: list[AssetLegRecord] = Field(default_factory=list, alias="assetsIn")
    assets_out: list[AssetLegRecord] = Field(default_factory=list, alias="assetsOut")
    native_asset_fees: Optional[AssetLegRecord] = Field(default=None, alias="nativeAssetFees")

    @field_validator("assets_in", "assets_out", mode="before")
    @classmethod
    def _coerce_legs(cls, value: Any) -> list[Any]:
        if not isinstance(value, list):
            return []
        return [leg for leg in value if isinstance(leg, dict)]

    @field_validator("native_asset_fees", mode="before")
    @classmethod
    def _coerce_fees(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else None

    def category_labels(self) -> list[str]:
        """All labels on the transaction and its legs, in discovery order."""
        labels = list(self.categories)
        for leg in (*self.assets_in, *self.assets_out):
            labels.extend(leg.categories)
        if self.native_asset_fees is not None:
            labels.extend(self.native_asset_fees.categories)
        return labels
