from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import pytest

from academic_ledger.academic_calendar.cycle import in_cycle
from academic_ledger.attendance.model import AttendanceDay
from academic_ledger.core.exceptions import ConflictError
from academic_ledger.fees.model import FeeRecord
from academic_ledger.students.model import Student


class InMemoryStudents:
    def __init__(self, students=()):
        self._by_id = {s.student_id: s for s in students}

    def get_by_student_id(self, student_id: str) -> Optional[Student]:
        return self._by_id.get(student_id)

    def list_all(self):
        return list(self._by_id.values())


class InMemoryFees:
    """Ledger fake enforcing the same unique constraints as schema.sql.

    ``concurrent_writes`` are stored right before the next insert, to mimic
    another request winning the race between read and write.
    """

    def __init__(self, records=()):
        self.records: list[FeeRecord] = []
        self.concurrent_writes: list[FeeRecord] = []
        self.insert_calls = 0
        self.seed(*records)

    def _store(self, record: FeeRecord) -> int:
        if record.external_payment_id and any(
            r.external_payment_id == record.external_payment_id for r in self.records
        ):
            raise ConflictError(ConflictError.DUPLICATE_PAYMENT_ID)
        if record.occupies_slot and any(r.occupies_slot and r.slot() == record.slot() for r in self.records):
            raise ConflictError(ConflictError.DUPLICATE_MONTH)
        fee_id = len(self.records) + 1
        self.records.append(replace(record, fee_id=fee_id))
        return fee_id

    def seed(self, *records: FeeRecord) -> None:
        for r in records:
            self._store(r)

    def list_for_student(self, student_id: str):
        return [r for r in self.records if r.student_id == student_id]

    def find_by_payment_id(self, external_payment_id: str):
        for r in self.records:
            if r.external_payment_id == external_payment_id:
                return r
        return None

    def insert(self, record: FeeRecord) -> int:
        self.insert_calls += 1
        while self.concurrent_writes:
            self._store(self.concurrent_writes.pop(0))
        return self._store(record)

    def list_paid_for_cycle(self, start_year: int):
        return [r for r in self.records if r.is_paid and in_cycle(r.month, r.year, start_year)]

    def list_recent_paid(self, *, limit: int, student_id=None):
        rows = [r for r in self.records if r.is_paid and (student_id is None or r.student_id == student_id)]
        rows.sort(key=lambda r: r.date_paid, reverse=True)
        return rows[:limit]

    def list_years(self):
        return sorted({r.year for r in self.records}, reverse=True)


class InMemoryReviews:
    def __init__(self):
        self.items = []

    def add(self, review) -> int:
        existing = self.find_by_payment_id(review.payment_id)
        if existing is not None:
            return existing.review_id
        self.items.append(replace(review, review_id=len(self.items) + 1))
        return len(self.items)

    def find_by_payment_id(self, payment_id: str):
        for r in self.items:
            if r.payment_id == payment_id:
                return r
        return None

    def list_open(self, *, limit: int = 200):
        return self.items[:limit]


class InMemoryAttendance:
    def __init__(self, days=()):
        self._days: dict[date, AttendanceDay] = {d.day: d for d in days}

    def list_days(self, *, start_date=None, end_date=None):
        return [
            self._days[d]
            for d in sorted(self._days)
            if (start_date is None or d >= start_date) and (end_date is None or d <= end_date)
        ]

    def get_day(self, day: date):
        return self._days.get(day)

    def save_day(self, day: date, records) -> None:
        self._days[day] = AttendanceDay(day=day, records=tuple(records))


@pytest.fixture
def fixed_now() -> datetime:
    # Mid-July: May, June and July of the 2026-27 cycle have started.
    return datetime(2026, 7, 15, 10, 0, 0)


@pytest.fixture
def student() -> Student:
    return Student(student_id="STU001", student_name="Aarav Sharma", standard="8", monthly_fee=Decimal("500"))


@pytest.fixture
def students_repo(student) -> InMemoryStudents:
    return InMemoryStudents(
        [
            student,
            Student(student_id="STU002", student_name="Diya Patel", standard="9", monthly_fee=Decimal("650")),
        ]
    )


@pytest.fixture
def fees_repo() -> InMemoryFees:
    return InMemoryFees()


@pytest.fixture
def reviews_repo() -> InMemoryReviews:
    return InMemoryReviews()


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()
