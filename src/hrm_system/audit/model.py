from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class AuditLogEntry:
    """Immutable, append-only record of one mutating action."""

    id: str
    timestamp: datetime
    user_id: str
    user_name: str
    action: str
    entity_type: str
    entity_id: str
    changes: str
    previous_value: Optional[str] = None
    new_value: Optional[str] = None
