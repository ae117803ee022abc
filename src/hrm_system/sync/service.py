from __future__ import annotations

import logging

from ..common.permissions import require_admin
from ..state.holder import StateHolder
from ..state.model import HRMState
from ..users.model import SessionUser
from .manager import SyncManager
from .storage import HRMStorage

logger = logging.getLogger(__name__)


class DataService:
    """Admin-facing operations on the persisted aggregate."""

    def __init__(self, holder: StateHolder, storage: HRMStorage, sync: SyncManager):
        self._holder = holder
        self._storage = storage
        self._sync = sync

    def reset(self, *, actor: SessionUser) -> HRMState:
        require_admin(actor)
        state = self._storage.reset_data()
        self._holder.replace(state)
        self._sync.mark_seen(state)
        logger.warning("Data reset to demo seed by %s", actor.user_id)
        return state

    def sync_now(self, *, actor: SessionUser) -> str:
        require_admin(actor)
        return self._sync.poll_once(self._holder.replace).value

    def status(self) -> dict:
        state = self._holder.state
        return {
            "syncRunning": self._sync.is_running(),
            "employees": len(state.employees),
            "auditEntries": len(state.audit_logs),
        }
