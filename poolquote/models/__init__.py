"""Pydantic models for tokens, pools and quotes."""

from poolquote.models.pool import PoolSnapshot
from poolquote.models.quote import RateQuote, SwapQuote
from poolquote.models.token import TokenIdentity
from poolquote.models.types import (
    ObjectId,
    UnsignedAmount,
    is_valid_object_id,
    normalize_object_id,
)

__all__ = [
    # Types
    "ObjectId",
    "UnsignedAmount",
    "is_valid_object_id",
    "normalize_object_id",
    # Models
    "TokenIdentity",
    "PoolSnapshot",
    "SwapQuote",
    "RateQuote",
]
