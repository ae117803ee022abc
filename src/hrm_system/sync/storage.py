from __future__ import annotations

import logging
from typing import Callable, Optional

from ..core.exceptions import PersistenceError
from ..state.codec import from_document, to_document
from ..state.model import HRMState
from ..state.seed import initial_state
from .client import RemoteStoreClient
from .local_cache import LocalCache

logger = logging.getLogger(__name__)


class HRMStorage:
    """Load/save/reset of the aggregate: remote store first, local cache as fallback.

    Remote failures are logged and never raised; local state stays the source
    of truth until the next successful sync.
    """

    def __init__(
        self,
        client: RemoteStoreClient,
        cache: LocalCache,
        *,
        seed: Callable[[], HRMState] = initial_state,
    ):
        self._client = client
        self._cache = cache
        self._seed = seed

    def load_data(self) -> HRMState:
        try:
            document = self._client.fetch()
            if document:
                self._cache.store(document)
                return from_document(document)

            # Empty store: initialize it with the demo data.
            state = self._seed()
            try:
                self._client.init(to_document(state))
            except PersistenceError as e:
                logger.error("Error initializing backend data: %s", e)
            return state
        except PersistenceError as e:
            logger.error("Error loading data from backend: %s", e)

        cached = self._cache.load()
        if cached:
            logger.info("Using cached data from local cache")
            return from_document(cached)
        return self._seed()

    def fetch_remote(self) -> Optional[dict]:
        """Raw remote document for polling; raises PersistenceError."""
        return self._client.fetch()

    def save_data(self, state: HRMState) -> bool:
        document = to_document(state)
        try:
            self._client.save(document)
            self._cache.store(document)
            return True
        except PersistenceError as e:
            logger.error("Error saving data to backend: %s", e)
            self._cache.store(document)
            logger.info("Data saved to local cache as fallback")
            return False

    def reset_data(self) -> HRMState:
        state = self._seed()
        document = to_document(state)
        try:
            self._client.reset(document)
        except PersistenceError as e:
            logger.error("Error resetting data in backend: %s", e)
        self._cache.store(document)
        return state
