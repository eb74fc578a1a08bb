"""Category registry synchronization from cached transactions."""

import logging
import threading
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from wallet_aggregator.core.exceptions import ConfigReadError
from wallet_aggregator.domain.models import CategorySyncResult, DEFAULT_CATEGORY_TYPE, QueryKind
from wallet_aggregator.providers.schemas import TransactionRecord, category_label
from wallet_aggregator.repositories.protocols import CacheRepository, ConfigRepository

logger = logging.getLogger(__name__)

# Serializes registry writes across service instances in this process
_REGISTRY_LOCK = threading.Lock()


def _registry_from_labels(entries: list[Any]) -> dict[str, Any]:
    registry: dict[str, Any] = {}
    for entry in entries:
        label = category_label(entry)
        if label is None:
            raise ConfigReadError("settings.categories", f"unreadable category entry: {entry!r}")
        registry.setdefault(label, {"category_type": DEFAULT_CATEGORY_TYPE})
    return registry


class CategorySyncService:
    """
    Adds category labels seen in cached transactions to the settings document.

    Append-only: labels are never removed from the registry. Runs only when
    triggered and never writes to the cache.
    """

    def __init__(
        self,
        cache_repository: CacheRepository,
        config_repository: ConfigRepository,
        lock: Optional[threading.Lock] = None,
    ):
        self._cache_repository = cache_repository
        self._config_repository = config_repository
        self._lock = lock or _REGISTRY_LOCK

    def sync_categories_from_cache(self) -> CategorySyncResult:
        """
        Append labels not yet in the registry, in discovery order.

        Writes the settings document only when something was added. A failed
        write raises ConfigWriteError and leaves the document unchanged.
        """
        with self._lock:
            transactions = self.cached_transactions()
            discovered = self.discover_labels(transactions)
            logger.info(
                "Category sync: %d cached transactions, %d distinct labels",
                len(transactions),
                len(discovered),
            )

            document = self._config_repository.load()
            registry = self._registry(document)
            new_categories = [label for label in discovered if label not in registry]

            if new_categories:
                for label in new_categories:
                    registry[label] = {"category_type": DEFAULT_CATEGORY_TYPE}
                self._config_repository.save(document)
                logger.info("Category sync added %d categories: %s", len(new_categories), ", ".join(new_categories))
            else:
                logger.info("Category sync: registry is up to date")

            return CategorySyncResult(
                new_categories=new_categories,
                total_categories=len(registry),
                total_transactions=len(transactions),
            )

    def cached_transactions(self) -> list[TransactionRecord]:
        """Validate every cached transaction payload, skipping malformed ones."""
        records: list[TransactionRecord] = []
        for entry in self._cache_repository.list_by_kind(QueryKind.TRANSACTIONS):
            if not isinstance(entry.payload, list):
                logger.warning("Skipping cache entry %s: payload is not a transaction list", entry.fingerprint)
                continue
            for raw in entry.payload:
                try:
                    records.append(TransactionRecord.model_validate(raw))
                except PydanticValidationError:
                    logger.warning("Skipping malformed transaction in cache entry %s", entry.fingerprint)
        return records

    @staticmethod
    def discover_labels(transactions: list[TransactionRecord]) -> list[str]:
        """Distinct labels in the order they are first seen."""
        seen: dict[str, None] = {}
        for transaction in transactions:
            for label in transaction.category_labels():
                seen.setdefault(label, None)
        return list(seen)

    @staticmethod
    def _registry(document: dict[str, Any]) -> dict[str, Any]:
        """
        Return the registry mapping inside the document, creating it if absent.

        A registry stored as a list of labels is converted to the mapping form,
        keeping every label. Any other shape raises ConfigReadError so the
        document is never overwritten with an empty registry.
        """
        settings = document.get("settings")
        if settings is None:
            settings = document["settings"] = {}
        elif not isinstance(settings, dict):
            raise ConfigReadError("settings", "expected an object")

        categories = settings.get("categories")
        if categories is None:
            categories = settings["categories"] = {}
        elif isinstance(categories, list):
            categories = settings["categories"] = _registry_from_labels(categories)
        elif not isinstance(categories, dict):
            raise ConfigReadError("settings.categories", "expected an object or a list of labels")
        return categories

    def known_categories(self) -> list[str]:
        """Labels currently in the registry."""
        return list(self._registry(self._config_repository.load()))
