from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from ..core.constants import STORAGE_KEY

logger = logging.getLogger(__name__)


class LocalCache:
    """JSON file mirroring the remote document under the same logical key."""

    def __init__(self, path: str | Path, *, key: str = STORAGE_KEY):
        self._path = Path(path)
        self._key = key

    def load(self) -> Optional[Any]:
        if not self._path.exists():
            return None
        try:
            return json.loads(self._path.read_text(encoding="utf-8")).get(self._key)
        except (OSError, ValueError) as e:
            logger.error("Error loading local cache %s: %s", self._path, e)
            return None

    def store(self, document: Any) -> None:
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            if self._path.parent and not self._path.parent.exists():
                self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps({self._key: document}), encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            logger.error("Error saving local cache %s: %s", self._path, e)
