"""File-backed repository implementations."""

from wallet_aggregator.repositories.filesystem.config_repo import JsonConfigRepository

__all__ = ["JsonConfigRepository"]
