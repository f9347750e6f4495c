"""Tanzanian shilling formatting for receipts, screens and reports."""
from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from duka.app.core.config import settings

CENT = Decimal("0.01")
NAN = Decimal("NaN")

_STRIP = re.compile(r"[^0-9.\-]+")
_LEADING_NUMBER = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")

Number = int | float | Decimal


def _to_decimal(amount: Number) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    # str() keeps floats like 0.1 from dragging binary noise along
    return Decimal(str(amount))


def format_currency(amount: Number, symbol: str | None = None) -> str:
    """Render *amount* as ``TSh 1,234.5``.

    Zero to two fraction digits: trailing zeros after rounding to cents are
    dropped, negatives keep their sign in front of the symbol.
    """
    symbol = settings.CURRENCY_SYMBOL if symbol is None else symbol
    value = _to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    digits = f"{abs(value):,.2f}".rstrip("0").rstrip(".")
    return f"{sign}{symbol} {digits}"


def parse_currency(text: str) -> Decimal:
    """Inverse of :func:`format_currency`.

    Everything except digits, ``-`` and ``.`` is discarded and the leading
    number is parsed. Returns ``Decimal("NaN")`` when nothing numeric is
    left; callers have to check with ``is_nan()``.
    """
    cleaned = _STRIP.sub("", text)
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return NAN
    try:
        return Decimal(match.group(0))
    except InvalidOperation:
        return NAN
