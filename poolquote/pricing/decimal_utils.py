"""Shared high-precision Decimal utilities for pricing.

All pricing arithmetic runs in a high-precision context so that u128
reserves survive division without rounding artifacts.
"""

from __future__ import annotations

import decimal
from decimal import Decimal, InvalidOperation

# 78 digits of precision, enough for any u128 product (up to ~10^77)
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78)

# Display precision of quoted amounts
DISPLAY_QUANTUM = Decimal("0.000001")

Numeric = int | str | float | Decimal


def to_decimal(value: Numeric) -> Decimal | None:
    """Convert an amount to Decimal.

    Floats go through ``str`` so that ``0.003`` becomes ``Decimal("0.003")``.

    Returns:
        Finite Decimal, or None if the value cannot be parsed
    """
    if isinstance(value, bool):
        return None
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not result.is_finite():
        return None
    return result


def scale_up(amount: Decimal, decimals: int) -> Decimal:
    """Convert a display amount to base units (1.5 SUI -> 1500000000)."""
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return amount.scaleb(decimals)


def scale_down(amount: Decimal, decimals: int) -> Decimal:
    """Convert base units to a display amount (1500000000 -> 1.5 SUI)."""
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return amount.scaleb(-decimals)


def format_amount(amount: Decimal, rounding: str = decimal.ROUND_DOWN) -> str:
    """Format a display amount with six fractional digits."""
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return str(amount.quantize(DISPLAY_QUANTUM, rounding=rounding))


__all__ = [
    "DECIMAL_HIGH_PREC_CONTEXT",
    "DISPLAY_QUANTUM",
    "Numeric",
    "to_decimal",
    "scale_up",
    "scale_down",
    "format_amount",
]
