from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import AttendanceMark


@dataclass(frozen=True)
class AttendanceEntry:
    student_id: str
    mark: AttendanceMark


@dataclass(frozen=True)
class AttendanceDay:
    """Domain entity: the register for one calendar day."""

    day: date
    records: tuple[AttendanceEntry, ...] = ()

    def mark_for(self, student_id: str) -> Optional[AttendanceMark]:
        for entry in self.records:
            if entry.student_id == student_id:
                return entry.mark
        return None


@dataclass(frozen=True)
class AttendanceSummary:
    """Read-model: counts and percentage for one student. Holidays are not counted."""

    student_id: str
    present_count: int
    absent_count: int
    total_counted_days: int
    percentage: float
    is_defaulter: bool = False


@dataclass(frozen=True)
class DefaulterRow:
    student_id: str
    student_name: str
    mobile_no: Optional[str]
    summary: AttendanceSummary


@dataclass(frozen=True)
class StudentAttendanceRow:
    student_id: str
    student_name: str
    marks: dict[date, AttendanceMark] = field(default_factory=dict)
    present_count: int = 0
    total_recorded_days: int = 0


@dataclass(frozen=True)
class AttendanceMatrix:
    """Read-model for the detailed register (students x dates)."""

    rows: list[StudentAttendanceRow]
    all_dates: list[date]
