"""Periodic whole-document synchronization.

Conflict policy: last writer wins at document granularity. A fetched document
that differs from the last one seen replaces local state wholesale; there is no
field-level merge and no concurrency token, so concurrent edits from two
clients can overwrite each other. Polls and pushes are independent and may race.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable, Optional

from ..core.constants import DEFAULT_SYNC_INTERVAL_SECONDS
from ..core.exceptions import PersistenceError
from ..state.codec import fingerprint, from_document, to_document
from ..state.model import HRMState
from .storage import HRMStorage

logger = logging.getLogger(__name__)


class SyncOutcome(str, Enum):
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    FAILED = "failed"
    # Response arrived after the poll was stopped or restarted.
    IGNORED = "ignored"


class SyncManager:
    def __init__(self, storage: HRMStorage, *, interval: float = DEFAULT_SYNC_INTERVAL_SECONDS):
        self._storage = storage
        self._interval = float(interval)
        self._lock = threading.Lock()
        self._last_fingerprint = ""
        self._generation = 0
        self._stop_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None
        self._current: Optional[Callable[[], HRMState]] = None

    def pull(self) -> Optional[HRMState]:
        """Fetch the remote document; a state only if it changed since last seen.

        Raises PersistenceError when the store cannot be reached.
        """
        document = self._storage.fetch_remote()
        if not document:
            return None
        fp = fingerprint(document)
        with self._lock:
            if fp == self._last_fingerprint:
                return None
            self._last_fingerprint = fp
        return from_document(document)

    def track(self, current: Callable[[], HRMState]) -> None:
        """Give the manager access to the live local state."""
        self._current = current

    def push(self, state: HRMState) -> bool:
        """Write the whole state; on failure only the local cache is updated.

        The pushed document counts as seen only while it is still the live
        local state. If a poll replaced local state in the meantime, the next
        poll brings local state back in line with what the store now holds.
        """
        if not self._storage.save_data(state):
            return False
        if self._current is None or self._current() is state:
            self.mark_seen(state)
        return True

    def mark_seen(self, state: HRMState) -> None:
        with self._lock:
            self._last_fingerprint = fingerprint(to_document(state))

    def poll_once(self, on_update: Callable[[HRMState], None]) -> SyncOutcome:
        generation = self._generation
        try:
            state = self.pull()
        except PersistenceError as e:
            logger.error("Error syncing data: %s", e)
            return SyncOutcome.FAILED

        if generation != self._generation:
            logger.debug("Dropping sync response received after stop")
            return SyncOutcome.IGNORED
        if state is None:
            return SyncOutcome.UNCHANGED

        on_update(state)
        logger.info("Data synced from backend")
        return SyncOutcome.UPDATED

    def start(self, on_update: Callable[[HRMState], None], interval: Optional[float] = None) -> None:
        if self.is_running():
            logger.info("Sync manager already running")
            return

        interval = float(interval if interval is not None else self._interval)
        stop_event = threading.Event()
        self._stop_event = stop_event

        def _loop() -> None:
            while not stop_event.wait(interval):
                self.poll_once(on_update)

        self._thread = threading.Thread(target=_loop, name="hrm-sync", daemon=True)
        self._thread.start()
        logger.info("Starting sync manager with %.1fs interval", interval)

    def stop(self) -> None:
        """Stop polling; an in-flight request is not aborted, its result is dropped."""
        if self._stop_event is None:
            return
        self._generation += 1
        self._stop_event.set()
        self._stop_event = None
        self._thread = None
        logger.info("Sync manager stopped")

    def is_running(self) -> bool:
        return self._stop_event is not None
