from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import AcademicMonth, FeeStatus, MonthState, PaymentMethod


@dataclass(frozen=True)
class FeeRecord:
    """Domain entity: one ledger entry.

    At most one PAID entry may exist per (student_id, month, year) and at most one
    entry per external_payment_id. Entries flagged ``needs_review`` sit beside the
    regular entry of their slot until reconciled. Entries are never mutated after insert.
    """

    student_id: str
    student_name: str
    standard: str
    month: AcademicMonth
    year: int
    amount: Decimal
    method: PaymentMethod
    status: FeeStatus
    date_paid: datetime
    external_payment_id: Optional[str] = None
    order_id: Optional[str] = None
    needs_review: bool = False
    fee_id: Optional[int] = None

    @property
    def is_paid(self) -> bool:
        return self.status == FeeStatus.PAID

    @property
    def occupies_slot(self) -> bool:
        """True for the entries covered by the one-paid-entry-per-month constraint."""
        return self.is_paid and not self.needs_review

    def slot(self) -> tuple[str, AcademicMonth, int]:
        return self.student_id, self.month, int(self.year)


@dataclass(frozen=True)
class MonthStatus:
    """Read-model: status of one academic month for one student."""

    month: AcademicMonth
    year: int
    amount: Decimal
    status: MonthState
    date_paid: Optional[datetime] = None
    fee_id: Optional[int] = None


@dataclass(frozen=True)
class FeeSchedule:
    student_id: str
    academic_start_year: int
    months: tuple[MonthStatus, ...]
    total_outstanding: Decimal

    @property
    def due_months(self) -> list[MonthStatus]:
        return [m for m in self.months if m.status == MonthState.DUE]

    @property
    def paid_months(self) -> list[MonthStatus]:
        return [m for m in self.months if m.status == MonthState.PAID]

    def first_due(self) -> Optional[MonthStatus]:
        for m in self.months:
            if m.status == MonthState.DUE:
                return m
        return None


@dataclass(frozen=True)
class StudentFeeReport:
    """Read-model for the per-student cycle report (paid/unpaid matrix)."""

    student_id: str
    student_name: str
    standard: str
    records: dict[AcademicMonth, Optional[FeeRecord]] = field(default_factory=dict)
    total_paid: Decimal = Decimal("0")
    total_due: Decimal = Decimal("0")

    @property
    def balance(self) -> Decimal:
        return self.total_due - self.total_paid
