from __future__ import annotations

from datetime import datetime

from ...attendance.model import TimeLogEntry
from ...common.datetime_utils import hours_between
from .base import HoursCalculator


class StandardHoursCalculator(HoursCalculator):
    """Standard rule: (out - in) - sum(breaks), not below 0.

    A missing check-out, and the end of a still-open break, both read as the
    check-out when there is one and ``now`` otherwise.
    """

    def worked_hours(self, entry: TimeLogEntry, *, now: datetime) -> float:
        if not entry.check_in:
            return 0.0
        until = entry.check_out or now
        hours = hours_between(entry.check_in, until)
        for b in entry.breaks:
            hours -= hours_between(b.break_in, b.break_out or until)
        return max(hours, 0.0)
