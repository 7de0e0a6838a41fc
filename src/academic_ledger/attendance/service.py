from __future__ import annotations

import logging
from datetime import date
from typing import Mapping, Optional

from ..common.datetime_utils import month_bounds
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_DEFAULTER_THRESHOLD
from ..core.enums import AttendanceMark
from ..core.exceptions import ValidationError
from ..students.repository import StudentRepository
from .aggregator import attendance_matrix, find_defaulters, summarize
from .model import AttendanceEntry, AttendanceMatrix, AttendanceSummary, DefaulterRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        *,
        threshold: float = DEFAULT_DEFAULTER_THRESHOLD,
    ):
        self._attendance = attendance
        self._students = students
        self._threshold = float(threshold)

    @property
    def threshold(self) -> float:
        return self._threshold

    def record_day(self, day: date, marks: Mapping[str, object]) -> int:
        """Save the register for ``day``; ``marks`` maps student id to P/A/H."""

        if not isinstance(day, date):
            raise ValidationError("day must be a date")

        entries: list[AttendanceEntry] = []
        for raw_id, raw_mark in marks.items():
            student_id = require_non_empty(raw_id, "student_id")
            try:
                mark = AttendanceMark(raw_mark)
            except ValueError:
                raise ValidationError(f"Invalid attendance mark {raw_mark!r} for {student_id}")
            entries.append(AttendanceEntry(student_id=student_id, mark=mark))

        self._attendance.save_day(day, entries)
        logger.info("Saved attendance for %s (%d entries)", day.isoformat(), len(entries))
        return len(entries)

    def student_summary(
        self,
        student_id: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> AttendanceSummary:
        student_id = require_non_empty(student_id, "student_id")
        days = self._attendance.list_days(start_date=start, end_date=end)
        return summarize(student_id, days, self._threshold)

    def monthly_defaulters(self, year: int, month: int) -> list[DefaulterRow]:
        try:
            start, end = month_bounds(int(year), int(month))
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid month {year}-{month}")

        days = self._attendance.list_days(start_date=start, end_date=end)
        return find_defaulters(self._students.list_all(), days, self._threshold)

    def detailed_report(self, *, start: Optional[date] = None, end: Optional[date] = None) -> AttendanceMatrix:
        days = self._attendance.list_days(start_date=start, end_date=end)
        return attendance_matrix(self._students.list_all(), days)
