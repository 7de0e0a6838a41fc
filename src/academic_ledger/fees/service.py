from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..academic_calendar.cycle import ACADEMIC_MONTHS, academic_start_year, fee_year_for, parse_month
from ..common.datetime_utils import now_local
from ..common.validators import require_amount, require_non_empty
from ..core.constants import DEFAULT_DASHBOARD_PAYMENTS, MONTHS_PER_CYCLE
from ..core.enums import FeeStatus, PaymentMethod
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..students.model import Student
from ..students.repository import StudentRepository
from .model import FeeRecord, FeeSchedule, StudentFeeReport
from .repository import FeeRepository
from .resolver import resolve_schedule

logger = logging.getLogger(__name__)

MANUAL_METHODS = (PaymentMethod.CASH, PaymentMethod.UPI)


class FeeService:
    def __init__(self, fees: FeeRepository, students: StudentRepository):
        self._fees = fees
        self._students = students

    def _get_student(self, student_id: str) -> Student:
        sid = require_non_empty(student_id, "student_id")
        student = self._students.get_by_student_id(sid)
        if not student:
            raise NotFoundError(f"Student {sid} does not exist")
        return student

    def get_schedule(self, student_id: str, *, now: Optional[datetime] = None) -> FeeSchedule:
        now = now or now_local()
        student = self._get_student(student_id)
        return resolve_schedule(student, self._fees.list_for_student(student.student_id), now)

    def record_manual_payment(
        self,
        *,
        student_id: str,
        month,
        year: int,
        amount,
        method,
        date_paid: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> FeeRecord:
        """Record a fee collected at the counter (Cash or UPI)."""

        student = self._get_student(student_id)
        academic_month = parse_month(month)
        try:
            year = int(year)
        except (TypeError, ValueError):
            raise ValidationError("year is not a valid year")
        amount = require_amount(amount)
        try:
            method = PaymentMethod(method)
        except ValueError:
            raise ValidationError(f"Unknown payment method: {method!r}")
        if method not in MANUAL_METHODS:
            raise ValidationError("Online payments are recorded from gateway confirmations only")

        record = FeeRecord(
            student_id=student.student_id,
            student_name=student.student_name,
            standard=student.standard,
            month=academic_month,
            year=year,
            amount=amount,
            method=method,
            status=FeeStatus.PAID,
            date_paid=date_paid or now or now_local(),
        )
        try:
            fee_id = self._fees.insert(record)
        except ConflictError:
            raise ValidationError(f"{academic_month.value} {year} is already paid for {student.student_id}")

        logger.info(
            "Recorded %s fee of %s for %s (%s %s)",
            method.value,
            amount,
            student.student_id,
            academic_month.value,
            year,
        )
        return replace(record, fee_id=fee_id)

    def recent_payments(self, student_id: Optional[str] = None, *, limit: int = DEFAULT_DASHBOARD_PAYMENTS):
        return list(self._fees.list_recent_paid(limit=int(limit), student_id=student_id))

    def detailed_report(self, start_year: Optional[int] = None, *, now: Optional[datetime] = None) -> list[StudentFeeReport]:
        if start_year is None:
            start_year = academic_start_year(now or now_local())

        by_student: dict[str, dict] = {}
        for rec in self._fees.list_paid_for_cycle(int(start_year)):
            if rec.needs_review or rec.year != fee_year_for(rec.month, start_year):
                continue
            by_student.setdefault(rec.student_id, {}).setdefault(rec.month, rec)

        report: list[StudentFeeReport] = []
        for student in self._students.list_all():
            paid = by_student.get(student.student_id, {})
            records = {month: paid.get(month) for month in ACADEMIC_MONTHS}
            total_paid = sum((Decimal(r.amount) for r in paid.values()), Decimal("0"))
            report.append(
                StudentFeeReport(
                    student_id=student.student_id,
                    student_name=student.student_name,
                    standard=student.standard,
                    records=records,
                    total_paid=total_paid,
                    total_due=Decimal(student.monthly_fee) * MONTHS_PER_CYCLE,
                )
            )
        return report
