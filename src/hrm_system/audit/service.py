from __future__ import annotations

from typing import Optional

from ..common.csv_export import to_csv
from ..common.permissions import require_admin, require_reviewer
from ..core.constants import DEFAULT_AUDIT_LIMIT
from ..core.enums import Role
from ..state.holder import StateHolder
from ..users.model import SessionUser
from .model import AuditLogEntry


class AuditService:
    def __init__(self, holder: StateHolder):
        self._holder = holder

    def list_entries(
        self,
        *,
        actor: SessionUser,
        limit: Optional[int] = DEFAULT_AUDIT_LIMIT,
        entity_type: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> list[AuditLogEntry]:
        """Newest first. Managers only see entries made by their team or themselves."""
        require_reviewer(actor)
        state = self._holder.state
        rows = list(state.audit_logs)
        if actor.role != Role.ADMIN:
            visible = {e.id for e in state.team_of(actor.user_id)} | {actor.user_id}
            rows = [a for a in rows if a.user_id in visible]
        if entity_type:
            rows = [a for a in rows if a.entity_type == entity_type]
        if user_id:
            rows = [a for a in rows if a.user_id == user_id]
        rows.sort(key=lambda a: a.timestamp, reverse=True)
        return rows[:limit] if limit else rows

    def export_csv(self, *, actor: SessionUser) -> str:
        require_admin(actor)
        return to_csv(
            [
                {
                    "Timestamp": a.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
                    "User": a.user_name,
                    "Action": a.action,
                    "Entity": a.entity_type,
                    "Changes": a.changes,
                }
                for a in self.list_entries(actor=actor, limit=None)
            ]
        )
