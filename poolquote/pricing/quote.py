"""Swap and rate quotes from pool snapshots.

Sides of a snapshot are matched to the requested tokens by coin type
address. If the snapshot does not trade the requested pair, no quote is
produced.
"""

from __future__ import annotations

import decimal
from collections.abc import Iterable
from decimal import Decimal

import structlog

from poolquote.errors import InvalidFeeError
from poolquote.models.pool import PoolSnapshot
from poolquote.models.quote import RateQuote, SwapQuote
from poolquote.models.token import TokenIdentity
from poolquote.models.types import short_id
from poolquote.pricing.constant_product import constant_product
from poolquote.pricing.decimal_utils import (
    DECIMAL_HIGH_PREC_CONTEXT,
    format_amount,
    scale_down,
    scale_up,
    to_decimal,
)

logger = structlog.get_logger()


def find_pool_for_pair(
    snapshots: Iterable[PoolSnapshot],
    token_a: str,
    token_b: str,
    active_only: bool = True,
) -> PoolSnapshot | None:
    """Find the first snapshot trading a pair (order independent).

    Args:
        snapshots: Snapshots to search
        token_a: First coin type
        token_b: Second coin type
        active_only: Ignore pools the registry marks inactive

    Returns:
        Matching snapshot, or None
    """
    for snapshot in snapshots:
        if active_only and not snapshot.is_active:
            continue
        if snapshot.has_pair(token_a, token_b):
            return snapshot
    return None


def quote_swap(
    input_token: TokenIdentity,
    output_token: TokenIdentity,
    input_amount: str,
    snapshot: PoolSnapshot,
) -> SwapQuote | None:
    """Quote an exact-input swap against one pool.

    The input amount is in display units of the input token. It is scaled
    to base units, priced against the pool reserves with the pool's fee,
    and the output is scaled back to display units of the output token.

    Args:
        input_token: Token being sold
        output_token: Token being bought
        input_amount: Amount to sell, in display units (e.g. "1.5")
        snapshot: Pool to quote against

    Returns:
        SwapQuote, or None if the amount is not a positive number, the
        pool does not trade this pair, or the amount is too large to
        price at display precision
    """
    amount = to_decimal(input_amount)
    if amount is None or amount <= 0:
        return None

    reserves = snapshot.get_reserves(input_token.address, output_token.address)
    if reserves is None:
        logger.debug(
            "quote_pair_mismatch",
            pool=short_id(snapshot.id),
            input_token=input_token.symbol,
            output_token=output_token.symbol,
        )
        return None
    reserve_in, reserve_out = reserves

    try:
        scaled_in = scale_up(amount, input_token.decimals)
        output_base = constant_product.get_amount_out(scaled_in, reserve_in, reserve_out, snapshot.fee_rate)
        price_impact = constant_product.price_impact(scaled_in, output_base, reserve_in, reserve_out)

        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            fee_amount = amount * snapshot.fee_rate

        output_amount = format_amount(scale_down(output_base, output_token.decimals))
        fee_display = format_amount(fee_amount)
    except (decimal.InvalidOperation, decimal.Overflow) as e:
        logger.warning(
            "quote_amount_out_of_range",
            pool=short_id(snapshot.id),
            input_amount=input_amount,
            error=type(e).__name__,
        )
        return None
    except InvalidFeeError as e:
        logger.warning("quote_invalid_fee", pool=short_id(snapshot.id), fee_bps=snapshot.fee_bps, error=str(e))
        return None

    return SwapQuote(
        input_token=input_token,
        output_token=output_token,
        input_amount=input_amount,
        output_amount=output_amount,
        price_impact_percent=price_impact,
        fee_amount=fee_display,
        route=[input_token.symbol, output_token.symbol],
    )


def quote_rate(
    token_a: TokenIdentity,
    token_b: TokenIdentity,
    snapshot: PoolSnapshot,
) -> RateQuote | None:
    """Spot rate of token A in units of token B.

    Returns:
        RateQuote, or None if the pool does not trade this pair or a
        reserve is empty
    """
    reserves = snapshot.get_reserves(token_a.address, token_b.address)
    if reserves is None:
        return None
    reserve_a, reserve_b = reserves

    rate: Decimal = constant_product.cross_rate(reserve_a, reserve_b, token_a.decimals, token_b.decimals)
    if rate <= 0:
        return None

    rate_float = float(rate)
    return RateQuote(
        rate=rate_float,
        formatted=f"1 {token_a.symbol} = {rate_float:.4f} {token_b.symbol}",
    )


__all__ = [
    "find_pool_for_pair",
    "quote_swap",
    "quote_rate",
]
