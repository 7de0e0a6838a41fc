from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceDay, AttendanceEntry


class AttendanceRepository(Protocol):
    def list_days(self, *, start_date: Optional[date] = None, end_date: Optional[date] = None) -> Sequence[AttendanceDay]:
        """Days ordered by date; both bounds inclusive, either may be omitted."""

        raise NotImplementedError

    def get_day(self, day: date) -> Optional[AttendanceDay]:
        raise NotImplementedError

    def save_day(self, day: date, records: Sequence[AttendanceEntry]) -> None:
        """Create or replace the register for ``day``."""

        raise NotImplementedError
