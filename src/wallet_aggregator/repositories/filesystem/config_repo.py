"""JSON file implementation of ConfigRepository."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from wallet_aggregator.core.exceptions import ConfigReadError, ConfigWriteError


class JsonConfigRepository:
    """Settings document stored as a single JSON file."""

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, Any]:
        """Read the document; a missing file yields an empty settings section."""
        if not self._path.exists():
            return {"settings": {}}
        try:
            document = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise ConfigReadError(str(self._path), str(exc)) from exc
        if not isinstance(document, dict):
            raise ConfigReadError(str(self._path), "top-level value is not an object")
        return document

    def save(self, document: dict[str, Any]) -> None:
        """Write the document atomically (temp file + rename)."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self._path.parent), prefix=f".{self._path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document, f, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise ConfigWriteError(str(self._path), str(exc)) from exc
