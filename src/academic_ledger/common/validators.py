from __future__ import annotations

from decimal import Decimal, InvalidOperation

from ..core.exceptions import ValidationError

CENTS = Decimal("0.01")
# DECIMAL(12, 2) columns in database/schema.sql
MAX_AMOUNT = Decimal("9999999999.99")


def require_non_empty(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_amount(value, field_name: str = "amount", *, allow_zero: bool = False) -> Decimal:
    """Parse a currency amount into a Decimal with two places."""
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} is required")
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} is not a valid amount")

    if not amount.is_finite():
        raise ValidationError(f"{field_name} is not a valid amount")
    if amount < 0 or (amount == 0 and not allow_zero):
        raise ValidationError(f"{field_name} must be greater than zero")
    if amount > MAX_AMOUNT:
        raise ValidationError(f"{field_name} must not exceed {MAX_AMOUNT}")
    try:
        amount = amount.quantize(CENTS)
    except InvalidOperation:
        raise ValidationError(f"{field_name} is not a valid amount")
    if amount == 0 and not allow_zero:
        raise ValidationError(f"{field_name} must be greater than zero")
    return amount
