"""Pool-state resolution and swap pricing for on-chain constant product AMMs."""

from poolquote.models import PoolSnapshot, RateQuote, SwapQuote, TokenIdentity
from poolquote.parsing import extract_pool_type_args, parse_type_to_token
from poolquote.pools import RegistryResolver, resolve_all_pools, resolve_pool
from poolquote.pricing import quote_rate, quote_swap

__version__ = "0.1.0"
__all__ = [
    "TokenIdentity",
    "PoolSnapshot",
    "SwapQuote",
    "RateQuote",
    "parse_type_to_token",
    "extract_pool_type_args",
    "RegistryResolver",
    "resolve_all_pools",
    "resolve_pool",
    "quote_swap",
    "quote_rate",
    "__version__",
]
