from __future__ import annotations

from datetime import date

import pytest

from academic_ledger.attendance.service import AttendanceService
from academic_ledger.core.enums import AttendanceMark
from academic_ledger.core.exceptions import ValidationError


@pytest.fixture
def svc(attendance_repo, students_repo):
    return AttendanceService(attendance_repo, students_repo, threshold=75.0)


def test_record_day_saves_marks(svc, attendance_repo):
    saved = svc.record_day(date(2026, 7, 1), {"STU001": "P", "STU002": "H"})

    assert saved == 2
    day = attendance_repo.get_day(date(2026, 7, 1))
    assert day.mark_for("STU001") == AttendanceMark.PRESENT
    assert day.mark_for("STU002") == AttendanceMark.HOLIDAY


def test_record_day_replaces_the_previous_register(svc, attendance_repo):
    svc.record_day(date(2026, 7, 1), {"STU001": "A"})
    svc.record_day(date(2026, 7, 1), {"STU001": "P"})

    assert attendance_repo.get_day(date(2026, 7, 1)).mark_for("STU001") == AttendanceMark.PRESENT


@pytest.mark.parametrize("marks", [{"STU001": "X"}, {"STU001": "present"}, {"": "P"}])
def test_record_day_rejects_bad_marks(svc, attendance_repo, marks):
    with pytest.raises(ValidationError):
        svc.record_day(date(2026, 7, 1), marks)
    assert attendance_repo.get_day(date(2026, 7, 1)) is None


def test_record_day_requires_a_date(svc):
    with pytest.raises(ValidationError):
        svc.record_day("2026-07-01", {"STU001": "P"})


def test_student_summary_honours_date_range(svc):
    svc.record_day(date(2026, 6, 30), {"STU001": "A"})
    svc.record_day(date(2026, 7, 1), {"STU001": "P"})
    svc.record_day(date(2026, 7, 2), {"STU001": "P"})

    everything = svc.student_summary("STU001")
    july = svc.student_summary("STU001", start=date(2026, 7, 1), end=date(2026, 7, 31))

    assert everything.percentage == 66.7
    assert july.percentage == 100.0
    assert july.is_defaulter is False


def test_monthly_defaulters_only_look_at_that_month(svc):
    svc.record_day(date(2026, 6, 30), {"STU001": "A", "STU002": "A"})
    svc.record_day(date(2026, 7, 1), {"STU001": "P", "STU002": "A"})
    svc.record_day(date(2026, 7, 31), {"STU001": "P", "STU002": "P"})
    svc.record_day(date(2026, 8, 1), {"STU001": "A", "STU002": "A"})

    rows = svc.monthly_defaulters(2026, 7)

    assert [r.student_id for r in rows] == ["STU002"]
    assert rows[0].summary.percentage == 50.0
    assert rows[0].student_name == "Diya Patel"


@pytest.mark.parametrize("month", [0, 13])
def test_monthly_defaulters_rejects_invalid_month(svc, month):
    with pytest.raises(ValidationError):
        svc.monthly_defaulters(2026, month)


def test_detailed_report_covers_the_whole_roster(svc):
    svc.record_day(date(2026, 7, 1), {"STU001": "P"})

    matrix = svc.detailed_report(start=date(2026, 7, 1), end=date(2026, 7, 31))

    assert matrix.all_dates == [date(2026, 7, 1)]
    assert [r.student_id for r in matrix.rows] == ["STU001", "STU002"]
    assert matrix.rows[1].marks == {}
