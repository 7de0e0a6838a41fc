from __future__ import annotations

from enum import Enum


class AcademicMonth(str, Enum):
    """Month of the academic cycle, declared in academic order (May first)."""

    MAY = "May"
    JUNE = "June"
    JULY = "July"
    AUGUST = "August"
    SEPTEMBER = "September"
    OCTOBER = "October"
    NOVEMBER = "November"
    DECEMBER = "December"
    JANUARY = "January"
    FEBRUARY = "February"
    MARCH = "March"
    APRIL = "April"

    @property
    def academic_index(self) -> int:
        return _ACADEMIC_ORDER.index(self)

    @property
    def calendar_month(self) -> int:
        """1..12, same numbering as ``date.month``."""
        return (self.academic_index + 4) % 12 + 1

    @property
    def starts_cycle_year(self) -> bool:
        """True for May..December, which fall in the cycle's first calendar year."""
        return self.academic_index < 8


_ACADEMIC_ORDER: tuple[AcademicMonth, ...] = tuple(AcademicMonth)


class PaymentMethod(str, Enum):
    CASH = "Cash"
    UPI = "UPI"
    ONLINE = "Online"


class FeeStatus(str, Enum):
    """Status stored on a ledger entry."""

    PAID = "Paid"
    FAILED = "Failed"


class MonthState(str, Enum):
    """Derived per-month status, never persisted."""

    PAID = "Paid"
    DUE = "Due"
    NOT_YET_DUE = "Not Yet Due"


class AttendanceMark(str, Enum):
    PRESENT = "P"
    ABSENT = "A"
    HOLIDAY = "H"
