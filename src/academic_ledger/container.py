from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_DEFAULTER_THRESHOLD
from .database.connection import DBConfig, DatabaseConnection
from .fees.mysql_fee_repository import MySQLFeeRepository
from .fees.repository import FeeRepository
from .fees.service import FeeService
from .payments.mysql_review_repository import MySQLPaymentReviewRepository
from .payments.repository import PaymentReviewRepository
from .payments.service import PaymentService
from .payments.verifier import PaymentVerifier
from .reports.service import ReportService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    students_repo: StudentRepository
    fees_repo: FeeRepository
    reviews_repo: PaymentReviewRepository
    attendance_repo: AttendanceRepository

    fee_service: FeeService
    payment_service: PaymentService
    attendance_service: AttendanceService
    report_service: ReportService


def wire_container(
    *,
    students_repo: StudentRepository,
    fees_repo: FeeRepository,
    reviews_repo: PaymentReviewRepository,
    attendance_repo: AttendanceRepository,
    payment_secret: str,
    defaulter_threshold: float = DEFAULT_DEFAULTER_THRESHOLD,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    return Container(
        conn=conn,
        students_repo=students_repo,
        fees_repo=fees_repo,
        reviews_repo=reviews_repo,
        attendance_repo=attendance_repo,
        fee_service=FeeService(fees_repo, students_repo),
        payment_service=PaymentService(fees_repo, students_repo, reviews_repo, PaymentVerifier(payment_secret)),
        attendance_service=AttendanceService(attendance_repo, students_repo, threshold=defaulter_threshold),
        report_service=ReportService(fees_repo),
    )


def build_container(
    *,
    db_config: dict,
    payment_secret: str,
    defaulter_threshold: float = DEFAULT_DEFAULTER_THRESHOLD,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire_container(
        students_repo=MySQLStudentRepository(conn),
        fees_repo=MySQLFeeRepository(conn),
        reviews_repo=MySQLPaymentReviewRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        payment_secret=payment_secret,
        defaulter_threshold=defaulter_threshold,
        conn=conn,
    )
