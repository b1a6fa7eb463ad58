"""Error classes for pool resolution and pricing.

Absence of ledger data is never an error: resolvers return ``None`` or an
empty list. These exceptions cover transport failures and misuse of the
pricing functions.
"""


class PoolQuoteError(Exception):
    """Base error for poolquote operations."""

    pass


class LedgerError(PoolQuoteError):
    """A ledger read failed."""

    pass


class LedgerRpcError(LedgerError):
    """The JSON-RPC endpoint returned an HTTP or protocol level error."""

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


class PricingError(PoolQuoteError):
    """Base error for pricing operations."""

    pass


class InvalidFeeError(PricingError):
    """Swap fee must be in range [0, 1)."""

    pass
