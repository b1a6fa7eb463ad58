"""Constant product AMM pricing.

Pools hold the invariant x * y = k before and after a trade, with the fee
removed from the input first:

    dy = y * dx * (1 - f) / (x + dx * (1 - f))

All functions are pure and use Decimal arithmetic in a 78-digit context.
"""

from __future__ import annotations

import decimal
from decimal import Decimal

from poolquote.errors import InvalidFeeError
from poolquote.pricing.decimal_utils import DECIMAL_HIGH_PREC_CONTEXT, Numeric, to_decimal

_ZERO = Decimal(0)
_ONE = Decimal(1)
_HUNDRED = Decimal(100)
_TEN = Decimal(10)


def _validate_fee(fee: Numeric) -> Decimal:
    fee_dec = to_decimal(fee)
    if fee_dec is None or fee_dec < _ZERO or fee_dec >= _ONE:
        raise InvalidFeeError(f"Swap fee must be in range [0, 1), got {fee}")
    return fee_dec


class ConstantProduct:
    """Constant product pricing math.

    Degenerate inputs (non-positive amount or reserves) price to zero
    instead of raising.
    """

    def get_amount_out(
        self,
        amount_in: Numeric,
        reserve_in: Numeric,
        reserve_out: Numeric,
        fee: Numeric = _ZERO,
    ) -> Decimal:
        """Calculate output amount using the constant product formula.

        Formula: dy = y * dx * (1 - f) / (x + dx * (1 - f))

        Args:
            amount_in: Input amount dx
            reserve_in: Reserve of input token x
            reserve_out: Reserve of output token y
            fee: Fee as a fraction (0.003 for 0.3%)

        Returns:
            Output amount dy, always in [0, reserve_out)

        Raises:
            InvalidFeeError: If fee is not in [0, 1)
        """
        fee_dec = _validate_fee(fee)
        dx = to_decimal(amount_in)
        x = to_decimal(reserve_in)
        y = to_decimal(reserve_out)
        if dx is None or x is None or y is None:
            return _ZERO
        if dx <= _ZERO or x <= _ZERO or y <= _ZERO:
            return _ZERO

        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            amount_in_with_fee = dx * (_ONE - fee_dec)
            return y * amount_in_with_fee / (x + amount_in_with_fee)

    def price_impact(
        self,
        amount_in: Numeric,
        amount_out: Numeric,
        reserve_in: Numeric,
        reserve_out: Numeric,
    ) -> float:
        """Percentage by which the execution price falls short of spot.

        spot = y / x, actual = dy / dx, impact = (spot - actual) / spot * 100.
        A fill at or better than spot reports 0.

        Returns:
            Impact in percent, never negative
        """
        dx = to_decimal(amount_in)
        dy = to_decimal(amount_out)
        x = to_decimal(reserve_in)
        y = to_decimal(reserve_out)
        if dx is None or dy is None or x is None or y is None:
            return 0.0
        if dx <= _ZERO or x <= _ZERO or y <= _ZERO:
            return 0.0

        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            spot = y / x
            actual = dy / dx
            impact = (spot - actual) / spot * _HUNDRED

        return float(max(impact, _ZERO))

    def cross_rate(
        self,
        reserve_a: Numeric,
        reserve_b: Numeric,
        decimals_a: int,
        decimals_b: int,
    ) -> Decimal:
        """Exchange rate of A in units of B.

        Formula: rate = (rB / rA) * 10^(dB - dA)

        Returns:
            Rate, or 0 if either reserve is not positive
        """
        r_a = to_decimal(reserve_a)
        r_b = to_decimal(reserve_b)
        if r_a is None or r_b is None or r_a <= _ZERO or r_b <= _ZERO:
            return _ZERO

        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            return (r_b / r_a) * _TEN ** (decimals_b - decimals_a)


# Singleton instance
constant_product = ConstantProduct()


__all__ = [
    "ConstantProduct",
    "constant_product",
]
