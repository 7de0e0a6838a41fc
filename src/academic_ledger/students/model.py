from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: a student on the roster.

    Note: plain data object; the roster itself is owned by the portal.
    """

    student_id: str
    student_name: str
    standard: str
    monthly_fee: Decimal
    mobile_no: Optional[str] = None
