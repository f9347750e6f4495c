"""Form-input checks run before any store call.

Repositories never re-validate; screens and schemas call these first.
"""
from __future__ import annotations

from decimal import Decimal, InvalidOperation

from duka.app.core.errors import ValidationError

HUNDRED = Decimal("100")


def require_text(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field} is required", key="validation.required", field=field)
    return value.strip()


def parse_price(raw: object, field: str = "price") -> Decimal:
    """Parse a strictly positive amount."""
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number", key="validation.invalid_price", field=field)
    if not value.is_finite() or value <= 0:
        raise ValidationError(f"{field} must be greater than zero", key="validation.invalid_price", field=field)
    return value


def parse_optional_cost(raw: object | None, field: str = "cost") -> Decimal | None:
    if raw is None or str(raw).strip() == "":
        return None
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number", key="validation.invalid_price", field=field)
    if not value.is_finite() or value < 0:
        raise ValidationError(f"{field} must not be negative", key="validation.invalid_price", field=field)
    return value


def parse_quantity(raw: object, field: str = "quantity") -> int:
    """Parse a non-negative whole number."""
    if isinstance(raw, bool):
        raise ValidationError(f"{field} must be a whole number", key="validation.invalid_quantity", field=field)
    try:
        value = int(str(raw).strip())
    except ValueError:
        raise ValidationError(f"{field} must be a whole number", key="validation.invalid_quantity", field=field)
    if value < 0:
        raise ValidationError(f"{field} must not be negative", key="validation.invalid_quantity", field=field)
    return value


def check_discount_percent(percent: Decimal) -> Decimal:
    if percent < 0 or percent >= HUNDRED:
        raise ValidationError(
            "Discount must be between 0 and 100 percent",
            key="validation.invalid_discount",
        )
    return percent
