"""Settings document repository protocol."""

from typing import Any, Protocol


class ConfigRepository(Protocol):
    """Read/write access to the JSON settings document, whole-document granularity."""

    def load(self) -> dict[str, Any]:
        """Return the full settings document (empty structure if none exists)."""
        ...

    def save(self, document: dict[str, Any]) -> None:
        """Replace the full settings document."""
        ...
