"""Audit trail emission.

Every mutating transformation returns a :class:`Transition` carrying the next
state *without* its audit entry plus the entry itself. ``commit()`` is the only
place an entry is appended, so a state change and its audit record land
together or not at all.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, NamedTuple, Optional

from ..common.datetime_utils import now_local
from ..common.ids import new_id
from ..core.constants import UNKNOWN_ACTOR_NAME
from ..state.model import HRMState
from .model import AuditLogEntry


class Transition(NamedTuple):
    state: HRMState
    audit: AuditLogEntry

    def commit(self) -> HRMState:
        return replace(self.state, audit_logs=self.state.audit_logs + (self.audit,))


def record(
    state: HRMState,
    actor_id: str,
    action: str,
    entity_type: str,
    entity_id: str,
    changes: str,
    *,
    before: Optional[str] = None,
    after: Optional[str] = None,
    now: Optional[datetime] = None,
) -> AuditLogEntry:
    """Build an audit entry; never raises for an unknown actor."""
    actor = state.find_employee(actor_id)
    return AuditLogEntry(
        id=new_id("audit"),
        timestamp=now or now_local(),
        user_id=actor_id,
        user_name=actor.name if actor else UNKNOWN_ACTOR_NAME,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        changes=changes,
        previous_value=before,
        new_value=after,
    )


def apply(state: HRMState, op: Callable[..., Transition], *args: Any, **kwargs: Any) -> HRMState:
    """Run a transformation and commit its state change with its audit entry."""
    return op(state, *args, **kwargs).commit()
