from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from flask import jsonify, request

from ..core.exceptions import DomainError, NotFoundError
from .datetime_utils import parse_iso_date


def money(value: Optional[Decimal]) -> Optional[str]:
    """Amounts travel as strings so no precision is lost in JSON."""
    if value is None:
        return None
    return str(Decimal(value).quantize(Decimal("0.01")))


def iso(value: Optional[date | datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def error_response(e: DomainError):
    status = 404 if isinstance(e, NotFoundError) else 400
    return jsonify({"error": str(e), "kind": type(e).__name__}), status


def optional_date_arg(name: str) -> Optional[date]:
    value = (request.args.get(name) or "").strip()
    return parse_iso_date(value) if value else None
