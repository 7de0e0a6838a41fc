from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, db_cursor, first_row
from .model import Student
from .repository import StudentRepository


def _row_to_student(r: dict) -> Student:
    return Student(
        student_id=str(r["student_id"]),
        student_name=r["student_name"],
        standard=str(r["standard"]),
        monthly_fee=Decimal(str(r["monthly_fee"] or 0)),
        mobile_no=r.get("mobile_no"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_student_id(self, student_id: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, student_name, standard, monthly_fee, mobile_no
                FROM students
                WHERE student_id=%s
                """,
                (student_id,),
            )
            r = first_row(cur)
            return _row_to_student(r) if r else None

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, student_name, standard, monthly_fee, mobile_no
                FROM students
                ORDER BY standard ASC, student_name ASC
                """
            )
            return [_row_to_student(r) for r in all_rows(cur)]
