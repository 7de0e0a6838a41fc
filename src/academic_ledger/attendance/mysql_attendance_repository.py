from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceMark
from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, db_cursor, first_row
from .model import AttendanceDay, AttendanceEntry
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_days(self, *, start_date: Optional[date] = None, end_date: Optional[date] = None) -> Sequence[AttendanceDay]:
        clauses = ["1=1"]
        params: list[object] = []
        if start_date is not None:
            clauses.append("d.day >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("d.day <= %s")
            params.append(end_date)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT d.day, e.student_id, e.mark
                FROM attendance_days d
                LEFT JOIN attendance_entries e ON e.day_id = d.day_id
                WHERE {where}
                ORDER BY d.day ASC, e.position ASC
                """,
                tuple(params),
            )
            rows = all_rows(cur)

        grouped: dict[date, list[AttendanceEntry]] = {}
        for r in rows:
            entries = grouped.setdefault(r["day"], [])
            if r.get("student_id") is not None:
                entries.append(AttendanceEntry(student_id=str(r["student_id"]), mark=AttendanceMark(r["mark"])))

        return [AttendanceDay(day=d, records=tuple(entries)) for d, entries in grouped.items()]

    def get_day(self, day: date) -> Optional[AttendanceDay]:
        days = self.list_days(start_date=day, end_date=day)
        return days[0] if days else None

    def save_day(self, day: date, records: Sequence[AttendanceEntry]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT day_id FROM attendance_days WHERE day=%s", (day,))
            existing = first_row(cur)
            if existing:
                day_id = int(existing["day_id"])
                cur.execute("DELETE FROM attendance_entries WHERE day_id=%s", (day_id,))
            else:
                cur.execute("INSERT INTO attendance_days(day) VALUES(%s)", (day,))
                day_id = int(cur.lastrowid)

            if records:
                cur.executemany(
                    """
                    INSERT INTO attendance_entries(day_id, position, student_id, mark)
                    VALUES(%s,%s,%s,%s)
                    """,
                    [(day_id, pos, e.student_id, e.mark.value) for pos, e in enumerate(records)],
                )
