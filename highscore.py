from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """Session-only store."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """Small key-value store persisted as a JSON object on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        raw = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError(f"expected a JSON object in {self.path}")
        return {str(k): str(v) for k, v in raw.items()}

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Swapped in whole; readers never see a partial file.
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
            tmp.replace(self.path)
        except OSError:
            if tmp.exists():
                tmp.unlink()
            raise


class HighScoreTracker:
    """Best score across runs, backed by a key-value store.

    Any store failure is logged once and tracking continues in memory for
    the rest of the session.
    """

    def __init__(self, store: KeyValueStore, key: str) -> None:
        self.store = store
        self.key = key
        self.persistent = True
        self.value = self._load()

    def _load(self) -> int:
        try:
            raw = self.store.get(self.key)
        except (OSError, ValueError) as e:
            self._degrade(f"read failed: {e}")
            return 0
        if raw is None:
            return 0
        try:
            return max(0, int(raw))
        except ValueError:
            logger.warning("ignoring malformed high score %r", raw)
            return 0

    def submit(self, score: int) -> bool:
        """Record ``score``; returns True when it beat the stored best."""
        if score <= self.value:
            return False
        self.value = score
        if self.persistent:
            try:
                self.store.set(self.key, str(score))
            except (OSError, ValueError) as e:
                self._degrade(f"write failed: {e}")
        return True

    def _degrade(self, reason: str) -> None:
        self.persistent = False
        logger.warning("high score is session-only (%s)", reason)
