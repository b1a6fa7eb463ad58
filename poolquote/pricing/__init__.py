"""Pricing engine and quote assembly."""

from poolquote.pricing.constant_product import ConstantProduct, constant_product
from poolquote.pricing.quote import find_pool_for_pair, quote_rate, quote_swap

__all__ = [
    "ConstantProduct",
    "constant_product",
    "find_pool_for_pair",
    "quote_swap",
    "quote_rate",
]
