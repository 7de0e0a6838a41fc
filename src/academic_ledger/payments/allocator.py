from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from ..academic_calendar.cycle import academic_year_for, month_for_calendar_month
from ..core.enums import FeeStatus, PaymentMethod
from ..core.exceptions import DuplicatePayment
from ..fees.model import FeeRecord
from ..fees.resolver import resolve_schedule
from ..students.model import Student
from .model import VerifiedPayment

logger = logging.getLogger(__name__)


class PaymentAllocator:
    """Choose the ledger slot for a verified online payment.

    Pure decision logic: the caller persists the returned record. Writes must be
    backed by the store's uniqueness constraints since the ledger snapshot may be
    stale by the time the record is inserted.
    """

    def allocate(
        self,
        student: Student,
        payment: VerifiedPayment,
        ledger: Sequence[FeeRecord],
        now: datetime,
    ) -> FeeRecord:
        if any(rec.external_payment_id == payment.payment_id for rec in ledger):
            raise DuplicatePayment(payment.payment_id)

        schedule = resolve_schedule(student, ledger, now)
        due = schedule.first_due()

        if due is not None:
            month, year, needs_review = due.month, due.year, False
        else:
            # Nothing is due (advance or repeated payment): park it on the current month.
            month = month_for_calendar_month(now.month)
            year = academic_year_for(now.month, now.year)
            needs_review = True
            logger.warning(
                "No due month for %s; payment %s allocated to %s %s for review",
                student.student_id,
                payment.payment_id,
                month.value,
                year,
            )

        return FeeRecord(
            student_id=student.student_id,
            student_name=student.student_name,
            standard=student.standard,
            month=month,
            year=year,
            amount=payment.amount,
            method=PaymentMethod.ONLINE,
            status=FeeStatus.PAID,
            date_paid=now,
            external_payment_id=payment.payment_id,
            order_id=payment.order_id,
            needs_review=needs_review,
        )


def allocate(student: Student, payment: VerifiedPayment, ledger: Sequence[FeeRecord], now: datetime) -> FeeRecord:
    return PaymentAllocator().allocate(student, payment, ledger, now)
