from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)


class PreferenceStore(Protocol):
    """Local key-value cache of UI preferences (selected employee, filters)."""

    def save(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def load(self, key: str, default: Any = None) -> Any:
        raise NotImplementedError


class InMemoryPreferenceStore(PreferenceStore):
    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._items: dict[str, Any] = dict(initial or {})

    def save(self, key: str, value: Any) -> None:
        self._items[key] = value

    def load(self, key: str, default: Any = None) -> Any:
        return self._items.get(key, default)


class JsonFilePreferenceStore(PreferenceStore):
    """Preferences persisted as one JSON object on disk.

    Failures are logged and never raised: a broken cache must not block the dashboard.
    """

    def __init__(self, path: Path):
        self._path = Path(path)

    def _read_all(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        with self._path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
        return data if isinstance(data, dict) else {}

    def save(self, key: str, value: Any) -> None:
        try:
            data = self._read_all()
            data[key] = value
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8") as fh:
                json.dump(data, fh)
        except (OSError, ValueError):
            logger.warning("preference save failed", extra={"key": key}, exc_info=True)

    def load(self, key: str, default: Any = None) -> Any:
        try:
            return self._read_all().get(key, default)
        except (OSError, ValueError):
            logger.warning("preference load failed", extra={"key": key}, exc_info=True)
            return default
