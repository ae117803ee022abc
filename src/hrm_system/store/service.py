from __future__ import annotations

import json
import logging
from typing import Any, Optional

from ..core.constants import STORAGE_KEY
from .repository import KeyValueRepository

logger = logging.getLogger(__name__)


class StoreService:
    """Whole-document storage: every write replaces the document."""

    def __init__(self, repo: KeyValueRepository, *, key: str = STORAGE_KEY):
        self._repo = repo
        self._key = key

    def get_data(self) -> Optional[Any]:
        raw = self._repo.get(self._key)
        return json.loads(raw) if raw else None

    def save(self, data: Any) -> None:
        self._repo.set(self._key, json.dumps(data))

    def init(self, data: Any) -> bool:
        """Store ``data`` only if nothing is stored yet; returns whether it did."""
        if self._repo.get(self._key):
            return False
        self._repo.set(self._key, json.dumps(data))
        logger.info("Store initialized under key %s", self._key)
        return True

    def reset(self, data: Any) -> None:
        self._repo.set(self._key, json.dumps(data))
        logger.info("Store reset under key %s", self._key)
