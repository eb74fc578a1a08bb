"""Wallet data providers module."""

from wallet_aggregator.providers.wallet_data_provider import WalletDataProvider
from wallet_aggregator.providers.octav_provider import OctavProvider
from wallet_aggregator.providers.stub_provider import StubWalletDataProvider
from wallet_aggregator.providers.schemas import TransactionRecord, AssetLegRecord, category_label

__all__ = [
    "WalletDataProvider",
    "OctavProvider",
    "StubWalletDataProvider",
    "TransactionRecord",
    "AssetLegRecord",
    "category_label",
]
