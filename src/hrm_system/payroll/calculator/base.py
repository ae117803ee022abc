from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ...attendance.model import TimeLogEntry


class HoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked hours)."""

    @abstractmethod
    def worked_hours(self, entry: TimeLogEntry, *, now: datetime) -> float:
        raise NotImplementedError
