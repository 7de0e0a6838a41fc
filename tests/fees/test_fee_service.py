from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from academic_ledger.core.enums import AcademicMonth, FeeStatus, MonthState, PaymentMethod
from academic_ledger.core.exceptions import NotFoundError, ValidationError
from academic_ledger.fees.service import FeeService


def test_manual_cash_payment_marks_month_paid(fees_repo, students_repo, fixed_now):
    svc = FeeService(fees_repo, students_repo)

    rec = svc.record_manual_payment(
        student_id="STU001", month="June", year=2026, amount="500", method="Cash", now=fixed_now
    )

    assert rec.fee_id == 1
    assert rec.month == AcademicMonth.JUNE
    assert rec.method == PaymentMethod.CASH
    assert rec.status == FeeStatus.PAID
    assert rec.date_paid == fixed_now
    assert rec.standard == "8"

    schedule = svc.get_schedule("STU001", now=fixed_now)
    assert schedule.months[1].status == MonthState.PAID
    assert schedule.total_outstanding == Decimal("1000")


def test_manual_payment_rejects_online_method(fees_repo, students_repo, fixed_now):
    svc = FeeService(fees_repo, students_repo)
    with pytest.raises(ValidationError):
        svc.record_manual_payment(
            student_id="STU001", month="May", year=2026, amount="500", method="Online", now=fixed_now
        )
    assert fees_repo.records == []


@pytest.mark.parametrize("amount", ["0", "-10", "abc", None, "NaN"])
def test_manual_payment_rejects_bad_amounts(fees_repo, students_repo, fixed_now, amount):
    svc = FeeService(fees_repo, students_repo)
    with pytest.raises(ValidationError):
        svc.record_manual_payment(
            student_id="STU001", month="May", year=2026, amount=amount, method="UPI", now=fixed_now
        )


def test_manual_payment_for_already_paid_month_is_rejected(fees_repo, students_repo, fixed_now):
    svc = FeeService(fees_repo, students_repo)
    svc.record_manual_payment(student_id="STU001", month="May", year=2026, amount="500", method="UPI", now=fixed_now)

    with pytest.raises(ValidationError):
        svc.record_manual_payment(
            student_id="STU001", month="May", year=2026, amount="500", method="Cash", now=fixed_now
        )
    assert len(fees_repo.records) == 1


def test_unknown_student_raises_not_found(fees_repo, students_repo, fixed_now):
    svc = FeeService(fees_repo, students_repo)
    with pytest.raises(NotFoundError):
        svc.get_schedule("NOPE", now=fixed_now)


def test_detailed_report_totals_and_balance(fees_repo, students_repo, fixed_now):
    svc = FeeService(fees_repo, students_repo)
    svc.record_manual_payment(student_id="STU001", month="May", year=2026, amount="500", method="Cash", now=fixed_now)
    svc.record_manual_payment(
        student_id="STU001", month="January", year=2027, amount="500", method="UPI", now=fixed_now
    )
    # previous cycle, must not be counted
    svc.record_manual_payment(student_id="STU001", month="June", year=2025, amount="500", method="Cash", now=fixed_now)

    report = {r.student_id: r for r in svc.detailed_report(2026)}

    mine = report["STU001"]
    assert mine.total_paid == Decimal("1000.00")
    assert mine.total_due == Decimal("6000")
    assert mine.balance == Decimal("5000.00")
    assert mine.records[AcademicMonth.MAY] is not None
    assert mine.records[AcademicMonth.JUNE] is None

    other = report["STU002"]
    assert other.total_paid == Decimal("0")
    assert other.balance == Decimal("7800")


def test_recent_payments_newest_first(fees_repo, students_repo):
    svc = FeeService(fees_repo, students_repo)
    svc.record_manual_payment(
        student_id="STU001", month="May", year=2026, amount="500", method="Cash", date_paid=datetime(2026, 5, 3)
    )
    svc.record_manual_payment(
        student_id="STU001", month="June", year=2026, amount="500", method="Cash", date_paid=datetime(2026, 6, 3)
    )

    rows = svc.recent_payments("STU001", limit=1)
    assert [r.month for r in rows] == [AcademicMonth.JUNE]
