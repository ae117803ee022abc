from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional

from ..audit.trail import Transition
from .model import HRMState

logger = logging.getLogger(__name__)


class StateHolder:
    """Single in-process owner of the current :class:`HRMState`.

    Mutations are applied under a lock and the new state is swapped in
    immediately; persisting it is handed to one background worker. A failed
    push is logged by the persister and never rolls the local state back.
    """

    def __init__(self, state: HRMState, *, persist: Optional[Callable[[HRMState], bool]] = None):
        self._state = state
        self._lock = threading.RLock()
        self._persist = persist
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="hrm-push") if persist else None

    @property
    def state(self) -> HRMState:
        with self._lock:
            return self._state

    def apply(self, op: Callable[..., Transition], *args: Any, **kwargs: Any) -> HRMState:
        with self._lock:
            self._state = op(self._state, *args, **kwargs).commit()
            state = self._state
        self._submit(state)
        return state

    def replace(self, state: HRMState) -> None:
        """Swap in a state fetched from the store; nothing is pushed back."""
        with self._lock:
            self._state = state

    def _submit(self, state: HRMState) -> Optional[Future]:
        if self._executor is None:
            return None
        return self._executor.submit(self._push, state)

    def _push(self, state: HRMState) -> bool:
        try:
            return bool(self._persist(state))  # type: ignore[misc]
        except Exception:
            logger.exception("Background push failed")
            return False

    def flush(self, timeout: Optional[float] = None) -> None:
        """Wait until every queued push has run."""
        if self._executor is None:
            return
        self._executor.submit(lambda: None).result(timeout=timeout)

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
