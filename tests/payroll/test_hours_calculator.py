from datetime import date, datetime

import pytest

from hrm_system.attendance.model import BreakInterval, TimeLogEntry
from hrm_system.core.enums import TimeLogStatus
from hrm_system.payroll.calculator.standard_calculator import StandardHoursCalculator


def _entry(check_in, check_out, breaks=()):
    return TimeLogEntry(
        id="log_1",
        employee_id="e1",
        work_date=date(2025, 1, 1),
        check_in=check_in,
        check_out=check_out,
        breaks=tuple(breaks),
        total_hours=0.0,
        status=TimeLogStatus.CHECKED_OUT,
    )


def test_standard_calculator_subtracts_break():
    entry = _entry(
        datetime(2025, 1, 1, 8, 0),
        datetime(2025, 1, 1, 17, 0),
        [BreakInterval(datetime(2025, 1, 1, 12, 0), datetime(2025, 1, 1, 13, 0))],
    )

    calc = StandardHoursCalculator()
    assert calc.worked_hours(entry, now=datetime(2025, 1, 1, 20, 0)) == pytest.approx(8.0)


def test_break_order_does_not_matter():
    b1 = BreakInterval(datetime(2025, 1, 1, 10, 0), datetime(2025, 1, 1, 10, 15))
    b2 = BreakInterval(datetime(2025, 1, 1, 13, 0), datetime(2025, 1, 1, 13, 45))
    start, end = datetime(2025, 1, 1, 9, 0), datetime(2025, 1, 1, 18, 0)
    calc = StandardHoursCalculator()

    a = calc.worked_hours(_entry(start, end, [b1, b2]), now=end)
    b = calc.worked_hours(_entry(start, end, [b2, b1]), now=end)
    assert a == b == pytest.approx(8.0)


def test_total_is_clamped_at_zero():
    entry = _entry(
        datetime(2025, 1, 1, 9, 0),
        datetime(2025, 1, 1, 9, 30),
        [BreakInterval(datetime(2025, 1, 1, 8, 0), datetime(2025, 1, 1, 9, 30))],
    )
    assert StandardHoursCalculator().worked_hours(entry, now=datetime(2025, 1, 1, 10)) == 0.0


def test_no_check_in_means_zero():
    assert StandardHoursCalculator().worked_hours(_entry(None, None), now=datetime(2025, 1, 1, 10)) == 0.0
