from __future__ import annotations

import uuid


def new_id(prefix: str) -> str:
    """Document-wide unique id such as ``task_3f9c…``."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"
