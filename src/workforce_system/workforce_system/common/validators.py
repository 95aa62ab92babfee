from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

from ..core.constants import MAX_MONEY, MONEY_QUANT
from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def optional_text(value: Any) -> Optional[str]:
    """Blank strings from forms mean "not set"."""
    if value is None:
        return None
    v = str(value).strip()
    return v or None


def normalize_email(value: Optional[str], field_name: str = "Email") -> str:
    email = require_non_empty(value, field_name).lower()
    if "@" not in email or email.startswith("@") or email.endswith("@"):
        raise ValidationError(f"{field_name} is not a valid email address")
    return email


def parse_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def parse_int_in_range(value: Any, field_name: str, low: int, high: int) -> int:
    n = parse_int(value, field_name)
    if n < low or n > high:
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return n


def parse_money(value: Any, field_name: str, *, default: Optional[Decimal] = None) -> Decimal:
    """Parse a non-negative amount with two fraction digits.

    Floats are converted through ``str`` so ``0.1`` stays ``0.10``.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        if default is None:
            raise ValidationError(f"{field_name} is required")
        return default

    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")

    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number")

    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    if amount < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    if amount > MAX_MONEY:
        raise ValidationError(f"{field_name} cannot exceed {MAX_MONEY}")
    return quantize_money(amount)


def quantize_money(amount: Decimal) -> Decimal:
    return amount.quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)


def parse_optional_date(value: Any, field_name: str) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    v = str(value).strip()
    if not v:
        return None
    # Accept "2024-03-31T00:00:00.000Z" as sent back by browsers.
    try:
        return datetime.strptime(v[:10], "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")
