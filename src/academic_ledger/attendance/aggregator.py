"""Attendance percentages and defaulter lists.

Every percentage in the package comes from :func:`percentage_of` so the
dashboard, the defaulter list and the reports always agree.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from ..core.constants import DEFAULT_DEFAULTER_THRESHOLD
from ..core.enums import AttendanceMark
from ..students.model import Student
from .model import (
    AttendanceDay,
    AttendanceMatrix,
    AttendanceSummary,
    DefaulterRow,
    StudentAttendanceRow,
)


def percentage_of(present: int, absent: int) -> float:
    counted = int(present) + int(absent)
    if counted <= 0:
        return 0.0
    return round(int(present) / counted * 100, 1)


def is_defaulter(percentage: float, threshold: float = DEFAULT_DEFAULTER_THRESHOLD) -> bool:
    return percentage < threshold


def _summary(student_id: str, present: int, absent: int, threshold: float) -> AttendanceSummary:
    pct = percentage_of(present, absent)
    return AttendanceSummary(
        student_id=student_id,
        present_count=present,
        absent_count=absent,
        total_counted_days=present + absent,
        percentage=pct,
        is_defaulter=is_defaulter(pct, threshold),
    )


def summarize(
    student_id: str,
    days: Iterable[AttendanceDay],
    threshold: float = DEFAULT_DEFAULTER_THRESHOLD,
) -> AttendanceSummary:
    present = absent = 0
    for day in days:
        mark = day.mark_for(student_id)
        if mark == AttendanceMark.PRESENT:
            present += 1
        elif mark == AttendanceMark.ABSENT:
            absent += 1
    return _summary(student_id, present, absent, threshold)


def summarize_roster(
    students: Sequence[Student],
    days: Iterable[AttendanceDay],
    threshold: float = DEFAULT_DEFAULTER_THRESHOLD,
) -> dict[str, AttendanceSummary]:
    counts = {s.student_id: [0, 0] for s in students}
    for day in days:
        seen: set[str] = set()
        for entry in day.records:
            c = counts.get(entry.student_id)
            # first entry wins if a day lists a student twice
            if c is None or entry.student_id in seen:
                continue
            seen.add(entry.student_id)
            if entry.mark == AttendanceMark.PRESENT:
                c[0] += 1
            elif entry.mark == AttendanceMark.ABSENT:
                c[1] += 1
    return {sid: _summary(sid, p, a, threshold) for sid, (p, a) in counts.items()}


def find_defaulters(
    students: Sequence[Student],
    days: Iterable[AttendanceDay],
    threshold: float = DEFAULT_DEFAULTER_THRESHOLD,
) -> list[DefaulterRow]:
    summaries = summarize_roster(students, days, threshold)
    rows = [
        DefaulterRow(
            student_id=s.student_id,
            student_name=s.student_name,
            mobile_no=s.mobile_no,
            summary=summaries[s.student_id],
        )
        for s in students
        if summaries[s.student_id].is_defaulter
    ]
    rows.sort(key=lambda r: (r.summary.percentage, r.student_id))
    return rows


def attendance_matrix(students: Sequence[Student], days: Iterable[AttendanceDay]) -> AttendanceMatrix:
    rows = {s.student_id: StudentAttendanceRow(student_id=s.student_id, student_name=s.student_name) for s in students}
    counts = {sid: [0, 0] for sid in rows}
    all_dates = set()

    for day in days:
        all_dates.add(day.day)
        for entry in day.records:
            row = rows.get(entry.student_id)
            if row is None or day.day in row.marks:
                continue
            row.marks[day.day] = entry.mark
            c = counts[entry.student_id]
            if entry.mark == AttendanceMark.PRESENT:
                c[0] += 1
                c[1] += 1
            elif entry.mark == AttendanceMark.ABSENT:
                c[1] += 1

    out = [
        StudentAttendanceRow(
            student_id=row.student_id,
            student_name=row.student_name,
            marks=dict(sorted(row.marks.items())),
            present_count=counts[row.student_id][0],
            total_recorded_days=counts[row.student_id][1],
        )
        for row in rows.values()
    ]
    return AttendanceMatrix(rows=out, all_dates=sorted(all_dates))
