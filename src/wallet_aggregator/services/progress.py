"""Mid-flight progress tracking for a batch."""

from typing import Callable, Optional

from wallet_aggregator.domain.models import Progress, ProviderResult, ProviderSuccess

ProgressListener = Callable[[Progress], None]


class ProgressTracker:
    """
    Counts settled units as they complete.

    Only touched from the event loop thread, so plain counters suffice.
    """

    def __init__(self, total: int, listener: Optional[ProgressListener] = None):
        self._total = total
        self._loaded = 0
        self._completed = 0
        self._listener = listener

    def record(self, result: ProviderResult) -> None:
        self._completed += 1
        if isinstance(result, ProviderSuccess):
            self._loaded += 1
        if self._listener is not None:
            self._listener(self.snapshot())

    def snapshot(self) -> Progress:
        return Progress.from_counts(self._loaded, self._completed, self._total)
