from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..academic_calendar.cycle import ACADEMIC_MONTHS
from ..core.enums import AcademicMonth, FeeStatus, PaymentMethod
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, db_cursor, duplicate_key_name, first_row
from .model import FeeRecord
from .repository import FeeRepository

_COLUMNS = """
    fee_id, student_id, student_name, standard, month, year, amount, method, status,
    date_paid, external_payment_id, order_id, needs_review
"""

# Unique keys declared in database/schema.sql
_KEY_REASONS = {
    "uq_fee_payment_id": ConflictError.DUPLICATE_PAYMENT_ID,
    "uq_fee_paid_slot": ConflictError.DUPLICATE_MONTH,
}


def _row_to_record(r: dict) -> FeeRecord:
    return FeeRecord(
        fee_id=int(r["fee_id"]),
        student_id=str(r["student_id"]),
        student_name=r["student_name"],
        standard=str(r["standard"]),
        month=AcademicMonth(r["month"]),
        year=int(r["year"]),
        amount=Decimal(str(r["amount"])),
        method=PaymentMethod(r["method"]),
        status=FeeStatus(r["status"]),
        date_paid=r["date_paid"],
        external_payment_id=r.get("external_payment_id"),
        order_id=r.get("order_id"),
        needs_review=bool(r.get("needs_review")),
    )


class MySQLFeeRepository(FeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_student(self, student_id: str) -> Sequence[FeeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM fee_records
                WHERE student_id=%s
                ORDER BY year ASC, date_paid ASC
                """,
                (student_id,),
            )
            return [_row_to_record(r) for r in all_rows(cur)]

    def find_by_payment_id(self, external_payment_id: str) -> Optional[FeeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM fee_records WHERE external_payment_id=%s",
                (external_payment_id,),
            )
            r = first_row(cur)
            return _row_to_record(r) if r else None

    def insert(self, record: FeeRecord) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO fee_records(
                        student_id, student_name, standard, month, year, amount, method, status,
                        date_paid, external_payment_id, order_id, needs_review
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.student_id,
                        record.student_name,
                        record.standard,
                        record.month.value,
                        int(record.year),
                        record.amount,
                        record.method.value,
                        record.status.value,
                        record.date_paid,
                        record.external_payment_id,
                        record.order_id,
                        int(record.needs_review),
                    ),
                )
                return int(cur.lastrowid)
        except IntegrityError as exc:
            key = duplicate_key_name(exc)
            if key is None:
                raise
            reason = _KEY_REASONS.get(key, ConflictError.DUPLICATE_MONTH)
            raise ConflictError(reason, str(exc)) from exc

    def list_paid_for_cycle(self, start_year: int) -> Sequence[FeeRecord]:
        first = [m.value for m in ACADEMIC_MONTHS if m.starts_cycle_year]
        second = [m.value for m in ACADEMIC_MONTHS if not m.starts_cycle_year]
        first_in = ",".join(["%s"] * len(first))
        second_in = ",".join(["%s"] * len(second))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM fee_records
                WHERE status=%s
                  AND (
                    (year=%s AND month IN ({first_in}))
                    OR (year=%s AND month IN ({second_in}))
                  )
                ORDER BY date_paid ASC
                """,
                (FeeStatus.PAID.value, int(start_year), *first, int(start_year) + 1, *second),
            )
            return [_row_to_record(r) for r in all_rows(cur)]

    def list_recent_paid(self, *, limit: int, student_id: Optional[str] = None) -> Sequence[FeeRecord]:
        clauses = ["status=%s"]
        params: list[object] = [FeeStatus.PAID.value]
        if student_id is not None:
            clauses.append("student_id=%s")
            params.append(student_id)
        params.append(int(limit))
        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM fee_records
                WHERE {where}
                ORDER BY date_paid DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in all_rows(cur)]

    def list_years(self) -> Sequence[int]:
        with db_cursor(self._conn_factory, dictionary=False) as (_, cur):
            cur.execute("SELECT DISTINCT year FROM fee_records ORDER BY year DESC")
            return [int(row[0]) for row in cur.fetchall()]
