"""Ledger constants and the static known-token table.

Centralizes well-known coin types and protocol parameters.
"""

from poolquote.models.token import TokenIdentity

# Precision assumed for coin types missing from the known-token table
# (the native SUI coin uses 9 decimals)
NATIVE_FALLBACK_DECIMALS = 9

# Defaults applied when a pool object lacks a field
DEFAULT_RESERVE = "0"
DEFAULT_FEE_BPS = 0

# Separator between package, module and struct name in a Move type tag
TYPE_SEPARATOR = "::"

# Well-known coin types on Sui mainnet
SUI_TYPE = "0x2::sui::SUI"
USDC_TYPE = "0xdba34672e30cb065b1f93e3ab55318768fd6fef66c15942c9f7cb846e2f900e7::usdc::USDC"
USDT_TYPE = "0xc060006111016b8a020ad5b33834984a437aaa7d3c74c18e09a95d48aceab08c::coin::COIN"
WETH_TYPE = "0xaf8cd5edc19c4512f4259f0bee101a40d41ebed738ade5874359610ef8eeced5::coin::COIN"

KNOWN_TOKENS: tuple[TokenIdentity, ...] = (
    TokenIdentity(symbol="SUI", name="Sui", decimals=9, address=SUI_TYPE),
    TokenIdentity(symbol="USDC", name="USD Coin", decimals=6, address=USDC_TYPE),
    TokenIdentity(symbol="USDT", name="Tether USD (Wormhole)", decimals=6, address=USDT_TYPE),
    TokenIdentity(symbol="WETH", name="Wrapped Ether (Wormhole)", decimals=8, address=WETH_TYPE),
)

# Lookup by exact type string
KNOWN_TOKENS_BY_TYPE: dict[str, TokenIdentity] = {t.address: t for t in KNOWN_TOKENS}
