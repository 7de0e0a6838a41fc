from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import FeeRecord


class FeeRepository(Protocol):
    """Ledger store.

    ``insert`` must reject (never overwrite) a record that violates one of the
    uniqueness constraints, raising ``ConflictError``.
    """

    def list_for_student(self, student_id: str) -> Sequence[FeeRecord]:
        raise NotImplementedError

    def find_by_payment_id(self, external_payment_id: str) -> Optional[FeeRecord]:
        raise NotImplementedError

    def insert(self, record: FeeRecord) -> int:
        raise NotImplementedError

    def list_paid_for_cycle(self, start_year: int) -> Sequence[FeeRecord]:
        """Paid records whose (month, year) belongs to the cycle opened in ``start_year``."""

        raise NotImplementedError

    def list_recent_paid(self, *, limit: int, student_id: Optional[str] = None) -> Sequence[FeeRecord]:
        raise NotImplementedError

    def list_years(self) -> Sequence[int]:
        raise NotImplementedError
