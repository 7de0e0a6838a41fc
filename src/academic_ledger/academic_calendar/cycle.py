"""Mapping between calendar dates and the May-started academic cycle.

Every ledger year label goes through :func:`fee_year_for`: a month carries the
calendar year it actually falls in, so January..April of the cycle that opened
in May 2026 are stored with ``year=2027``.
"""

from __future__ import annotations

from datetime import date, datetime

from ..core.constants import ACADEMIC_START_MONTH, MONTHS_PER_CYCLE
from ..core.enums import AcademicMonth
from ..core.exceptions import ValidationError

ACADEMIC_MONTHS: tuple[AcademicMonth, ...] = tuple(AcademicMonth)


def _require_calendar_month(calendar_month: int) -> int:
    if isinstance(calendar_month, bool) or not isinstance(calendar_month, int):
        raise ValidationError(f"Invalid calendar month: {calendar_month!r}")
    if not 1 <= calendar_month <= 12:
        raise ValidationError(f"Invalid calendar month: {calendar_month!r}")
    return calendar_month


def academic_index_of(calendar_month: int) -> int:
    """May (5) -> 0 ... December (12) -> 7, January (1) -> 8 ... April (4) -> 11."""
    month = _require_calendar_month(calendar_month)
    return (month - ACADEMIC_START_MONTH) % MONTHS_PER_CYCLE


def month_for_calendar_month(calendar_month: int) -> AcademicMonth:
    return ACADEMIC_MONTHS[academic_index_of(calendar_month)]


def parse_month(value) -> AcademicMonth:
    """Accept an AcademicMonth or its name ("May", "may")."""
    if isinstance(value, AcademicMonth):
        return value
    if isinstance(value, str):
        wanted = value.strip().lower()
        for month in ACADEMIC_MONTHS:
            if month.value.lower() == wanted:
                return month
    raise ValidationError(f"Unknown month: {value!r}")


def academic_start_year(now: date | datetime) -> int:
    """Calendar year in which the cycle containing ``now`` opened."""
    return now.year if now.month >= ACADEMIC_START_MONTH else now.year - 1


def academic_year_for(calendar_month: int, calendar_year: int) -> int:
    _require_calendar_month(calendar_month)
    return int(calendar_year)


def fee_year_for(month: AcademicMonth, start_year: int) -> int:
    return int(start_year) if month.starts_cycle_year else int(start_year) + 1


def months_elapsed_as_of(now: date | datetime) -> int:
    """Academic months from May through the month of ``now``, inclusive."""
    return academic_index_of(now.month) + 1


def cycle_months(start_year: int) -> list[tuple[AcademicMonth, int]]:
    return [(month, fee_year_for(month, start_year)) for month in ACADEMIC_MONTHS]


def cycle_bounds(start_year: int) -> tuple[date, date]:
    return date(int(start_year), ACADEMIC_START_MONTH, 1), date(int(start_year) + 1, ACADEMIC_START_MONTH - 1, 30)


def in_cycle(month: AcademicMonth, year: int, start_year: int) -> bool:
    return int(year) == fee_year_for(month, start_year)
