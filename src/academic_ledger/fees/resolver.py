from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Iterable

from ..academic_calendar.cycle import ACADEMIC_MONTHS, academic_start_year, fee_year_for, months_elapsed_as_of
from ..core.enums import AcademicMonth, MonthState
from ..students.model import Student
from .model import FeeRecord, FeeSchedule, MonthStatus


def _paid_by_slot(student_id: str, ledger: Iterable[FeeRecord]) -> dict[tuple[AcademicMonth, int], FeeRecord]:
    paid: dict[tuple[AcademicMonth, int], FeeRecord] = {}
    for rec in ledger:
        if rec.student_id != student_id or not rec.is_paid:
            continue
        key = (rec.month, int(rec.year))
        current = paid.get(key)
        # regular entry wins over one parked for review
        if current is None or (current.needs_review and rec.occupies_slot):
            paid[key] = rec
    return paid


def resolve_schedule(student: Student, ledger: Iterable[FeeRecord], now: datetime) -> FeeSchedule:
    """Per-month Paid / Due / Not Yet Due table for the cycle containing ``now``.

    A month is Due once its academic index is inside ``months_elapsed_as_of(now)``
    (the current month included) and no Paid entry exists for it.
    """

    start_year = academic_start_year(now)
    elapsed = months_elapsed_as_of(now)
    monthly_fee = Decimal(student.monthly_fee)
    paid = _paid_by_slot(student.student_id, ledger)

    months: list[MonthStatus] = []
    for month in ACADEMIC_MONTHS:
        year = fee_year_for(month, start_year)
        rec = paid.get((month, year))
        if rec is not None:
            months.append(
                MonthStatus(
                    month=month,
                    year=year,
                    amount=Decimal(rec.amount),
                    status=MonthState.PAID,
                    date_paid=rec.date_paid,
                    fee_id=rec.fee_id,
                )
            )
        elif month.academic_index < elapsed:
            months.append(MonthStatus(month=month, year=year, amount=monthly_fee, status=MonthState.DUE))
        else:
            months.append(MonthStatus(month=month, year=year, amount=monthly_fee, status=MonthState.NOT_YET_DUE))

    due_count = sum(1 for m in months if m.status == MonthState.DUE)
    return FeeSchedule(
        student_id=student.student_id,
        academic_start_year=start_year,
        months=tuple(months),
        total_outstanding=monthly_fee * due_count,
    )
