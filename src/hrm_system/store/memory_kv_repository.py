from __future__ import annotations

import threading
from typing import Optional

from .repository import KeyValueRepository


class InMemoryKeyValueRepository(KeyValueRepository):
    """Process-local backend for development and tests (STORE_BACKEND=memory)."""

    def __init__(self):
        self._data: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value
